"""Validation helpers for GeoJSON location loading.

Responsibilities:
- FeatureCollection root structure
- Coordinate bounds checking (WGS 84)
- Polygon ring structure (vertex count)
"""

from __future__ import annotations

import math

from photo_geotag.core.constants import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
    MIN_RING_VERTICES,
)
from photo_geotag.core.exceptions import GeotagError, SetupError

# ---------------------------------------------------------------------------
# Exceptions (public API, re-exported from __init__)
# ---------------------------------------------------------------------------


class InvalidFormatError(SetupError):
    """Raised when a location database file is missing, unreadable, or not
    a non-empty GeoJSON FeatureCollection."""

    default_stage = "load_locations"
    default_code = "GEOJSON_INVALID"


class FeatureValidationError(GeotagError):
    """Raised for a single malformed feature. Caught and skipped by the loader."""

    default_stage = "load_locations"
    default_code = "GEOJSON_FEATURE_INVALID"


# ---------------------------------------------------------------------------
# Root validation
# ---------------------------------------------------------------------------


def validate_feature_collection(document: object, source_filename: str) -> list[object]:
    """Validate a decoded GeoJSON document and return its features.

    Raises:
        InvalidFormatError: If the root is not a FeatureCollection or
            has no features.
    """
    if not isinstance(document, dict):
        msg = f"GeoJSON root must be an object, got {type(document).__name__} in {source_filename}"
        raise InvalidFormatError(msg, path=source_filename)

    if document.get("type") != "FeatureCollection":
        msg = (
            f"GeoJSON root type must be 'FeatureCollection', "
            f"got {document.get('type')!r} in {source_filename}"
        )
        raise InvalidFormatError(msg, path=source_filename)

    features = document.get("features")
    if not isinstance(features, list):
        msg = f"FeatureCollection has no 'features' array in {source_filename}"
        raise InvalidFormatError(msg, path=source_filename)

    if not features:
        msg = f"FeatureCollection has zero features in {source_filename}"
        raise InvalidFormatError(msg, path=source_filename)

    return features


# ---------------------------------------------------------------------------
# Coordinate validation
# ---------------------------------------------------------------------------


def validate_coordinate(lon: float, lat: float, feature_label: str) -> None:
    """Validate that a coordinate is finite and within WGS 84 bounds.

    Raises:
        FeatureValidationError: If the coordinate is out of bounds.
    """
    if not (math.isfinite(lon) and math.isfinite(lat)):
        msg = f"Non-finite coordinate ({lon}, {lat}) in feature {feature_label}"
        raise FeatureValidationError(msg)
    if not MIN_LONGITUDE <= lon <= MAX_LONGITUDE:
        msg = (
            f"Longitude {lon} out of WGS 84 range [{MIN_LONGITUDE}, {MAX_LONGITUDE}] "
            f"in feature {feature_label}"
        )
        raise FeatureValidationError(msg)
    if not MIN_LATITUDE <= lat <= MAX_LATITUDE:
        msg = (
            f"Latitude {lat} out of WGS 84 range [{MIN_LATITUDE}, {MAX_LATITUDE}] "
            f"in feature {feature_label}"
        )
        raise FeatureValidationError(msg)


# ---------------------------------------------------------------------------
# Polygon ring validation
# ---------------------------------------------------------------------------


def validate_polygon_ring(
    ring: list[tuple[float, float]], feature_label: str
) -> list[tuple[float, float]]:
    """Validate a polygon exterior ring has enough distinct vertices.

    The ring is returned unchanged; a closing vertex is neither required
    nor added.

    Raises:
        FeatureValidationError: If the ring has fewer than 3 distinct
            vertices (a closing duplicate is not counted).
    """
    vertices = ring[:-1] if len(ring) > 1 and ring[0] == ring[-1] else ring
    if len(vertices) < MIN_RING_VERTICES:
        msg = (
            f"Polygon ring has only {len(vertices)} distinct vertex(es), need at least "
            f"{MIN_RING_VERTICES} in feature {feature_label}"
        )
        raise FeatureValidationError(msg)

    for lon, lat in ring:
        validate_coordinate(lon, lat, feature_label)

    return ring
