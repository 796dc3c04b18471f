"""Coordinate and property normalization helpers for GeoJSON loading.

Responsibilities:
- Convert raw GeoJSON coordinate arrays to clean ``(lon, lat)`` tuples
- Map free-form feature properties to typed LocationRecord fields
- Apply the default matching radius
"""

from __future__ import annotations

import math

from photo_geotag.activities.load_locations._validation import FeatureValidationError
from photo_geotag.core.constants import DEFAULT_RADIUS_M

# ---------------------------------------------------------------------------
# Coordinate normalization
# ---------------------------------------------------------------------------


def coord_to_tuple(raw: object, *, index: int = 0) -> tuple[float, float]:
    """Convert one GeoJSON position ``[lon, lat, (alt)]`` to ``(lon, lat)``.

    Drops altitude (third element) if present.

    Raises:
        FeatureValidationError: If the position is malformed.
    """
    if not isinstance(raw, list | tuple):
        msg = f"Malformed coordinate at index {index}: expected list, got {type(raw).__name__}"
        raise FeatureValidationError(msg)
    if len(raw) < 2:
        msg = f"Malformed coordinate at index {index}: expected at least 2 elements, got {len(raw)}"
        raise FeatureValidationError(msg)
    if isinstance(raw[0], bool) or isinstance(raw[1], bool):
        msg = f"Malformed coordinate at index {index}: boolean value"
        raise FeatureValidationError(msg)
    try:
        lon = float(raw[0])
        lat = float(raw[1])
    except (TypeError, ValueError) as exc:
        msg = (
            f"Malformed coordinate at index {index}: cannot convert to float "
            f"(lon={raw[0]!r}, lat={raw[1]!r})"
        )
        raise FeatureValidationError(msg) from exc
    return (lon, lat)


def coords_to_tuples(raw_coords: object) -> list[tuple[float, float]]:
    """Convert a GeoJSON ring (list of positions) to ``(lon, lat)`` tuples.

    Raises:
        FeatureValidationError: If the ring or any position is malformed.
    """
    if not isinstance(raw_coords, list | tuple):
        msg = f"Malformed ring: expected list, got {type(raw_coords).__name__}"
        raise FeatureValidationError(msg)
    return [coord_to_tuple(c, index=idx) for idx, c in enumerate(raw_coords)]


# ---------------------------------------------------------------------------
# Property normalization
# ---------------------------------------------------------------------------


def text_property(props: dict[str, object], key: str) -> str:
    """Return a property as a stripped string; ``None``/missing become ``""``."""
    value = props.get(key)
    if value is None:
        return ""
    return str(value).strip()


def parse_radius(value: object) -> float:
    """Parse a ``Radius`` property, falling back to ``DEFAULT_RADIUS_M``.

    Missing, empty, zero, negative, non-numeric, and non-finite values
    all yield the default.
    """
    if not value or isinstance(value, bool):
        return DEFAULT_RADIUS_M
    try:
        radius = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return DEFAULT_RADIUS_M
    if not math.isfinite(radius) or radius <= 0:
        return DEFAULT_RADIUS_M
    return radius


def parse_identifiers(value: object) -> tuple[str, ...]:
    """Normalise ``LocationIdentifiers`` into a tuple of non-empty strings.

    A bare string is treated as a single identifier.  Order and
    duplicates are preserved.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list | tuple):
        return ()
    identifiers = (str(item).strip() for item in value if item is not None)
    return tuple(item for item in identifiers if item)
