"""Location database loading activity.

Loads one GeoJSON FeatureCollection, or every ``*.geojson`` / ``*.json``
file in a directory, into a flat list of ``LocationRecord`` objects.

The loading pipeline is split into focused stages:
- **_validation**: FeatureCollection root, coordinate bounds, ring size
- **_normalization**: raw coord → tuple, property mapping, default radius
- **_geojson_parser**: per-feature parsing with skip-on-failure

Supported structures:
- Point features (representative point = literal coordinate)
- Polygon features (first ring only; representative point = centroid)
- Directories of GeoJSON files, merged in filename order

File-level problems (missing file, invalid JSON, wrong root, zero
features) are fatal ``InvalidFormatError``.  Feature-level problems are
logged and the feature is dropped.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from photo_geotag.activities.load_locations._geojson_parser import (
    parse_feature,
    parse_geojson_document,
)
from photo_geotag.activities.load_locations._normalization import (
    coord_to_tuple,
    coords_to_tuples,
    parse_identifiers,
    parse_radius,
    text_property,
)
from photo_geotag.activities.load_locations._validation import (
    FeatureValidationError,
    InvalidFormatError,
    validate_coordinate,
    validate_feature_collection,
    validate_polygon_ring,
)
from photo_geotag.models.location import LocationRecord

logger = logging.getLogger("photo_geotag.activities.load_locations")

GEOJSON_SUFFIXES = (".geojson", ".json")

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "GEOJSON_SUFFIXES",
    "FeatureValidationError",
    "InvalidFormatError",
    "coord_to_tuple",
    "coords_to_tuples",
    "load_geojson_file",
    "load_locations",
    "parse_feature",
    "parse_geojson_document",
    "parse_identifiers",
    "parse_radius",
    "text_property",
    "validate_coordinate",
    "validate_feature_collection",
    "validate_polygon_ring",
]


def load_locations(source: Path | str) -> list[LocationRecord]:
    """Load the location database from a GeoJSON file or directory.

    Args:
        source: A GeoJSON file, or a directory whose ``*.geojson`` and
            ``*.json`` files are merged (sorted by name, no deduplication).

    Returns:
        All valid location records, in file then feature order.

    Raises:
        InvalidFormatError: If the source is missing, a file is not a
            readable non-empty FeatureCollection, or a directory holds no
            GeoJSON files.
    """
    source = Path(source)

    if source.is_dir():
        files = sorted(
            p for p in source.iterdir() if p.is_file() and p.suffix.lower() in GEOJSON_SUFFIXES
        )
        if not files:
            msg = f"No GeoJSON files found in directory {source}"
            raise InvalidFormatError(msg, path=str(source))
    elif source.is_file():
        files = [source]
    else:
        msg = f"Location database not found: {source}"
        raise InvalidFormatError(msg, path=str(source))

    records: list[LocationRecord] = []
    for path in files:
        records.extend(load_geojson_file(path))

    logger.info(
        "Location database loaded | files=%d | records=%d | polygons=%d | source=%s",
        len(files),
        len(records),
        sum(1 for r in records if r.is_polygon),
        source,
    )
    return records


def load_geojson_file(path: Path | str) -> list[LocationRecord]:
    """Load a single GeoJSON FeatureCollection file.

    Raises:
        InvalidFormatError: If the file cannot be read, is not valid
            JSON, or is not a non-empty FeatureCollection.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Cannot read GeoJSON file {path}: {exc}"
        raise InvalidFormatError(msg, path=str(path)) from exc

    try:
        document = json.loads(content)
    except json.JSONDecodeError as exc:
        msg = f"Not valid JSON: {path}: {exc}"
        raise InvalidFormatError(msg, path=str(path)) from exc

    records = parse_geojson_document(document, path.name)
    logger.info(
        "Parsed %d location(s) from %s",
        len(records),
        path.name,
    )
    return records
