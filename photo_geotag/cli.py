"""Command-line entry point (wiring layer only).

All business logic lives in the activities and the batch orchestrator;
this module only parses arguments, configures logging, performs the
fatal setup steps, and prints the summary.

Exit codes:
    0    run completed (per-file errors included)
    1    setup failure (location database, ExifTool, configuration)
    130  interrupted
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from photo_geotag import __version__
from photo_geotag.activities.load_locations import load_locations
from photo_geotag.core.config import GeotagConfig, split_csv
from photo_geotag.core.exceptions import EmptyDatabaseError, SetupError
from photo_geotag.orchestrators.batch import run_batch
from photo_geotag.tools.exiftool import ExifToolAdapter
from photo_geotag.utils.media_files import find_media_files

if TYPE_CHECKING:
    from collections.abc import Sequence

    from photo_geotag.models.location import LocationRecord
    from photo_geotag.models.summary import RunSummary
    from photo_geotag.tools.base import MetadataTool

logger = logging.getLogger("photo_geotag.cli")

EXIT_OK = 0
EXIT_SETUP_ERROR = 1
EXIT_INTERRUPTED = 130

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="photo-geotag",
        description=(
            "Tag photos with location names from a GeoJSON database of points "
            "and polygons, using ExifTool. Runs as a dry run unless --write is given."
        ),
    )
    parser.add_argument("photos", type=Path, help="Directory of photos (scanned recursively)")
    parser.add_argument(
        "locations",
        type=Path,
        help="GeoJSON FeatureCollection file, or a directory of them to merge",
    )
    parser.add_argument(
        "--write",
        action="store_true",
        help="Write tags to files (default: dry run, report only)",
    )
    parser.add_argument("--workers", type=int, help="Files processed concurrently (default 1)")
    parser.add_argument("--timeout", type=float, help="ExifTool call timeout in seconds")
    parser.add_argument(
        "--region-types",
        help="Comma-separated polygon Type values that override city/state/country",
    )
    parser.add_argument("--extensions", help="Comma-separated media file extensions")
    parser.add_argument("--exiftool", help="ExifTool executable (default: exiftool on PATH)")
    parser.add_argument("--report", type=Path, help="Write a JSON run report to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(*, verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def main(argv: Sequence[str] | None = None, *, tool: MetadataTool | None = None) -> int:
    """Run the geotagger.

    Args:
        argv: Command-line arguments (defaults to ``sys.argv[1:]``).
        tool: Metadata tool override; defaults to an ``ExifToolAdapter``
            built from configuration.

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)

    try:
        config, locations, tool, files = _setup(args, tool)
    except SetupError as exc:
        logger.error("Setup failed | code=%s | %s", exc.code, exc.message)
        return EXIT_SETUP_ERROR
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Setup failed | %s", exc)
        return EXIT_SETUP_ERROR
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return EXIT_INTERRUPTED

    try:
        summary = run_batch(files, locations, tool, config=config, dry_run=not args.write)
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return EXIT_INTERRUPTED

    print(summary.to_table())

    if args.report is not None:
        write_report(summary, args.report)

    return EXIT_OK


def write_report(summary: RunSummary, path: Path) -> bool:
    """Write the JSON run report.

    The batch has already finished, so a failure here is logged and
    does not change the exit code.

    Returns:
        ``True`` if the report was written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(summary.to_json(), encoding="utf-8")
    except OSError as exc:
        logger.error("Run report not written | path=%s | %s", path, exc)
        return False
    logger.info("Run report written | path=%s", path)
    return True


def _setup(
    args: argparse.Namespace, tool: MetadataTool | None
) -> tuple[GeotagConfig, list[LocationRecord], MetadataTool, list[Path]]:
    """Perform every step that can abort the run, before file one."""
    config = GeotagConfig.from_env().with_overrides(
        exiftool_path=args.exiftool,
        tool_timeout_s=args.timeout,
        max_workers=args.workers,
        region_types=split_csv(args.region_types) if args.region_types else None,
        extensions=args.extensions,
    )

    locations = load_locations(args.locations)
    if not locations:
        msg = f"Location database contains no usable records: {args.locations}"
        raise EmptyDatabaseError(msg, path=str(args.locations))
    if tool is None:
        tool = ExifToolAdapter(config.exiftool_path, timeout_s=config.tool_timeout_s)
    tool.check_available()
    files = find_media_files(args.photos, config.extensions)

    return config, locations, tool, files


if __name__ == "__main__":
    sys.exit(main())
