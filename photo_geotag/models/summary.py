"""Pydantic models for per-file outcomes and the run summary.

Every processed file produces exactly one ``FileOutcome``.  The run's
statistics are folded from the list of outcomes after all files have
completed, so concurrent workers never share mutable counters.

The summary doubles as the JSON run report (``--report``) and as the
source of the final summary table printed by the CLI.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from photo_geotag.models.match import MatchTier

# Schema version for forward compatibility
SCHEMA_VERSION = "geotag-run-v1"


class FileStatus(StrEnum):
    """Terminal state of a single file."""

    TAGGED = "tagged"
    DRY_RUN = "dry_run"
    UNCHANGED = "unchanged"
    NO_MATCH = "no_match"
    NO_GPS = "no_gps"
    SKIPPED = "skipped"
    ERROR = "error"


class FileOutcome(BaseModel):
    """Result of processing one media file.

    Attributes:
        path: Path of the media file.
        status: Terminal state.
        latitude: GPS latitude, if the file has one.
        longitude: GPS longitude, if the file has one.
        tier: Match tier, if the file was resolved.
        location: Display name of the matched (or nearest) record.
        distance_m: Distance to the matched record in metres.
        inside_polygon: Whether the match was a containing polygon.
        region: Display name of the region override, if any.
        tags: Scalar tag assignments written (or planned in dry-run).
        appended_identifiers: Identifiers appended (or planned).
        error: Structured error payload for skipped / failed files.
    """

    path: str
    status: FileStatus
    latitude: float | None = None
    longitude: float | None = None
    tier: MatchTier | None = None
    location: str = ""
    distance_m: float | None = None
    inside_polygon: bool = False
    region: str = ""
    tags: dict[str, str] = Field(default_factory=dict)
    appended_identifiers: list[str] = Field(default_factory=list)
    error: dict[str, object] | None = None

    @property
    def has_gps(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class RunSummary(BaseModel):
    """Aggregate statistics for one batch run.

    Attributes:
        schema_version: Report schema identifier.
        started_at: Run start timestamp (ISO 8601).
        dry_run: Whether tags were only planned, not written.
        total: Files discovered.
        with_gps: Files that carried a GPS coordinate.
        no_gps: Files without a GPS coordinate.
        exact: Files resolved in the Exact tier.
        nearby: Files resolved in the Nearby tier.
        none: Files whose nearest record was too far away.
        written: Files whose tags were written successfully.
        skipped: Files skipped due to unreadable metadata.
        errors: Files whose write (or tool call) failed.
        outcomes: Per-file outcomes, in input order.
    """

    schema_version: str = Field(default=SCHEMA_VERSION, alias="$schema")
    started_at: str = ""
    dry_run: bool = True
    total: int = 0
    with_gps: int = 0
    no_gps: int = 0
    exact: int = 0
    nearby: int = 0
    none: int = 0
    written: int = 0
    skipped: int = 0
    errors: int = 0
    outcomes: list[FileOutcome] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    @classmethod
    def from_outcomes(
        cls,
        outcomes: Iterable[FileOutcome],
        *,
        dry_run: bool,
        started_at: str = "",
    ) -> RunSummary:
        """Fold per-file outcomes into run statistics."""
        outcomes = list(outcomes)
        tiers = [o.tier for o in outcomes]
        return cls(
            started_at=started_at or datetime.now(UTC).isoformat(),
            dry_run=dry_run,
            total=len(outcomes),
            with_gps=sum(1 for o in outcomes if o.has_gps),
            no_gps=sum(1 for o in outcomes if o.status is FileStatus.NO_GPS),
            exact=tiers.count(MatchTier.EXACT),
            nearby=tiers.count(MatchTier.NEARBY),
            none=tiers.count(MatchTier.NONE),
            written=sum(1 for o in outcomes if o.status is FileStatus.TAGGED),
            skipped=sum(1 for o in outcomes if o.status is FileStatus.SKIPPED),
            errors=sum(1 for o in outcomes if o.status is FileStatus.ERROR),
            outcomes=outcomes,
        )

    def to_table(self) -> str:
        """Render the final summary table."""
        rows = [
            ("Total files", self.total),
            ("With GPS", self.with_gps),
            ("No GPS", self.no_gps),
            ("Exact matches", self.exact),
            ("Nearby matches", self.nearby),
            ("No match", self.none),
            ("Would write" if self.dry_run else "Written", self._planned_or_written()),
            ("Skipped", self.skipped),
            ("Errors", self.errors),
        ]
        width = max(len(label) for label, _ in rows)
        rule = "-" * (width + 10)
        lines = [rule, "Summary" + (" (dry run)" if self.dry_run else ""), rule]
        lines.extend(f"{label:<{width}}  {value:>8}" for label, value in rows)
        lines.append(rule)
        return "\n".join(lines)

    def to_json(self, *, indent: int = 2) -> str:
        """Serialise to a JSON string using the ``$schema`` alias."""
        return self.model_dump_json(indent=indent, by_alias=True)

    def _planned_or_written(self) -> int:
        if self.dry_run:
            return sum(1 for o in self.outcomes if o.status is FileStatus.DRY_RUN)
        return self.written
