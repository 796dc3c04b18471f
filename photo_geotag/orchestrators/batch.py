"""Batch orchestrator — geotag every discovered media file.

Per file:

1. Read GPS latitude, GPS longitude and existing location identifiers
   in one ``read_fields`` call.
2. Build a ``QueryPoint`` (files without GPS are a normal outcome).
3. Resolve it against the shared, read-only location database.
4. Decide the tag assignments for the match tier.
5. Write them in one ``write_fields`` call (skipped in dry-run).

Per-file failures (``FileSkipError`` / ``FileWriteError``) are caught at
the file boundary and recorded in that file's ``FileOutcome``; they
never stop the batch.  Run statistics are folded from the outcomes once
every file has finished, so worker threads share no mutable counters.
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from photo_geotag.activities.build_tags import build_tag_assignments
from photo_geotag.activities.resolve_location import resolve_location
from photo_geotag.core.config import GeotagConfig
from photo_geotag.core.constants import (
    TAG_GPS_LATITUDE,
    TAG_GPS_LONGITUDE,
    TAG_LOCATION_IDENTIFIERS,
)
from photo_geotag.core.exceptions import (
    EmptyDatabaseError,
    FileSkipError,
    FileWriteError,
)
from photo_geotag.models.match import QueryPoint
from photo_geotag.models.summary import FileOutcome, FileStatus, RunSummary

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from photo_geotag.models.location import LocationRecord
    from photo_geotag.tools.base import MetadataTool

logger = logging.getLogger("photo_geotag.orchestrators.batch")

#: Tags read from every file in a single call.
READ_FIELDS: tuple[str, ...] = (
    TAG_GPS_LATITUDE,
    TAG_GPS_LONGITUDE,
    TAG_LOCATION_IDENTIFIERS,
)


class CoordinateExtractionError(FileSkipError):
    """GPS tags are present but cannot be interpreted as a coordinate."""

    default_stage = "extract_coordinates"
    default_code = "GPS_UNREADABLE"


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


def run_batch(
    files: Sequence[Path],
    locations: Sequence[LocationRecord],
    tool: MetadataTool,
    *,
    config: GeotagConfig | None = None,
    dry_run: bool = True,
) -> RunSummary:
    """Geotag a batch of files and return the folded run summary.

    Args:
        files: Media files to process, in reporting order.
        locations: The loaded location database.
        tool: Metadata tool adapter (availability already checked).
        config: Run configuration; defaults to ``GeotagConfig()``.
        dry_run: Plan tag assignments without writing them.

    Returns:
        A ``RunSummary`` whose outcomes follow the order of *files*.

    Raises:
        EmptyDatabaseError: If *locations* is empty.
    """
    if not locations:
        msg = "Location database contains no usable records"
        raise EmptyDatabaseError(msg)

    config = config or GeotagConfig()
    database = tuple(locations)
    started_at = datetime.now(UTC).isoformat()

    logger.info(
        "Batch started | files=%d | locations=%d | workers=%d | dry_run=%s",
        len(files),
        len(database),
        config.max_workers,
        dry_run,
    )

    if config.max_workers <= 1:
        outcomes = [
            process_file(path, database, tool, config=config, dry_run=dry_run) for path in files
        ]
    else:
        outcomes = _run_parallel(files, database, tool, config=config, dry_run=dry_run)

    summary = RunSummary.from_outcomes(outcomes, dry_run=dry_run, started_at=started_at)
    logger.info(
        "Batch completed | total=%d | with_gps=%d | no_gps=%d | exact=%d | nearby=%d | "
        "none=%d | skipped=%d | errors=%d",
        summary.total,
        summary.with_gps,
        summary.no_gps,
        summary.exact,
        summary.nearby,
        summary.none,
        summary.skipped,
        summary.errors,
    )
    return summary


def _run_parallel(
    files: Sequence[Path],
    database: tuple[LocationRecord, ...],
    tool: MetadataTool,
    *,
    config: GeotagConfig,
    dry_run: bool,
) -> list[FileOutcome]:
    """Process files on a bounded thread pool, preserving input order.

    On interrupt, files not yet started are cancelled; in-flight tool
    calls run to completion.
    """
    executor = ThreadPoolExecutor(max_workers=config.max_workers, thread_name_prefix="geotag")
    try:
        futures = [
            executor.submit(process_file, path, database, tool, config=config, dry_run=dry_run)
            for path in files
        ]
        return [future.result() for future in futures]
    except KeyboardInterrupt:
        logger.warning("Interrupted | cancelling pending files, waiting for in-flight calls")
        executor.shutdown(wait=True, cancel_futures=True)
        raise
    finally:
        executor.shutdown(wait=True)


# ---------------------------------------------------------------------------
# Per-file processing
# ---------------------------------------------------------------------------


def process_file(
    path: Path,
    locations: Sequence[LocationRecord],
    tool: MetadataTool,
    *,
    config: GeotagConfig | None = None,
    dry_run: bool = True,
) -> FileOutcome:
    """Read, resolve and tag a single file.

    Never raises for per-file problems; they are reported in the
    returned outcome.
    """
    config = config or GeotagConfig()
    details: dict[str, object] = {"path": str(path)}

    try:
        current = tool.read_fields(path, READ_FIELDS)
        query = extract_query_point(current, path=str(path))
        if query is None:
            outcome = FileOutcome(status=FileStatus.NO_GPS, **details)  # type: ignore[arg-type]
            log_outcome(outcome)
            return outcome

        details["latitude"] = query.latitude
        details["longitude"] = query.longitude

        match = resolve_location(query, locations, region_types=config.region_types)
        details["tier"] = match.tier
        details["location"] = match.record.display_name
        details["distance_m"] = match.distance_m
        details["inside_polygon"] = match.inside_polygon
        if match.region_override is not None:
            details["region"] = match.region_override.display_name

        existing = identifier_list(current.get(TAG_LOCATION_IDENTIFIERS))
        assignments = build_tag_assignments(match, existing)
        details["tags"] = dict(assignments.fields)
        details["appended_identifiers"] = list(assignments.append_identifiers)

        if not match.is_match:
            status = FileStatus.NO_MATCH
        elif assignments.is_empty:
            status = FileStatus.UNCHANGED
        elif dry_run:
            status = FileStatus.DRY_RUN
        else:
            append = (
                {TAG_LOCATION_IDENTIFIERS: list(assignments.append_identifiers)}
                if assignments.append_identifiers
                else None
            )
            tool.write_fields(path, assignments.fields, append=append)
            status = FileStatus.TAGGED

    except FileSkipError as exc:
        status = FileStatus.SKIPPED
        details["error"] = exc.to_error_dict()
    except FileWriteError as exc:
        status = FileStatus.ERROR
        details["error"] = exc.to_error_dict()

    outcome = FileOutcome(status=status, **details)  # type: ignore[arg-type]
    log_outcome(outcome)
    return outcome


def extract_query_point(values: dict[str, object], *, path: str = "") -> QueryPoint | None:
    """Build a QueryPoint from read GPS tags.

    Returns:
        ``None`` when either coordinate is absent (a file without GPS).

    Raises:
        CoordinateExtractionError: If the values are present but not a
            valid coordinate.
    """
    raw_lat = values.get(TAG_GPS_LATITUDE)
    raw_lon = values.get(TAG_GPS_LONGITUDE)
    if _is_blank(raw_lat) or _is_blank(raw_lon):
        return None

    try:
        lat = float(raw_lat)  # type: ignore[arg-type]
        lon = float(raw_lon)  # type: ignore[arg-type]
        return QueryPoint(latitude=lat, longitude=lon)
    except (TypeError, ValueError) as exc:
        msg = f"Unreadable GPS coordinate ({raw_lat!r}, {raw_lon!r}): {exc}"
        raise CoordinateExtractionError(msg, path=path) from exc


def identifier_list(value: object) -> list[str]:
    """Normalise an identifier tag value (scalar, list, or absent) to strings."""
    if value is None:
        return []
    if isinstance(value, list | tuple):
        return [str(item) for item in value if not _is_blank(item)]
    if _is_blank(value):
        return []
    return [str(value)]


def log_outcome(outcome: FileOutcome) -> None:
    """Emit the per-file progress line."""
    gps = (
        f"{outcome.latitude:.6f},{outcome.longitude:.6f}"
        if outcome.latitude is not None and outcome.longitude is not None
        else "-"
    )
    distance = f"{outcome.distance_m:.1f}m" if outcome.distance_m is not None else "-"
    tier = outcome.tier.value if outcome.tier is not None else "-"
    level = logging.INFO
    if outcome.status in (FileStatus.SKIPPED, FileStatus.ERROR):
        level = logging.WARNING

    logger.log(
        level,
        "File processed | file=%s | gps=%s | location=%s | distance=%s | tier=%s | "
        "region=%s | tags=%d | ids=%d | result=%s%s",
        outcome.path,
        gps,
        outcome.location or "-",
        distance,
        tier,
        outcome.region or "-",
        len(outcome.tags),
        len(outcome.appended_identifiers),
        outcome.status.value,
        f" | error={outcome.error.get('message', '')}" if outcome.error else "",
    )


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, float):
        return math.isnan(value)
    return False
