"""Data model for a named location in the location database.

A LocationRecord is one GeoJSON feature (Point or Polygon) after
normalisation by the ``load_locations`` activity.  Records are immutable
and shared read-only across every file processed in a run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from photo_geotag.core.constants import DEFAULT_RADIUS_M


class GeometryType(StrEnum):
    """Supported GeoJSON geometry types."""

    POINT = "Point"
    POLYGON = "Polygon"


@dataclass(frozen=True, slots=True)
class LocationRecord:
    """A single named location.

    Attributes:
        name: Specific place name (e.g. ``"Eiffel Tower"``); may be empty.
        latitude: Representative latitude. For polygons, the ring centroid.
        longitude: Representative longitude. For polygons, the ring centroid.
        city: City name; may be empty.
        state_province: State or province; may be empty.
        country: Country name; may be empty.
        country_code: ISO country code; may be empty.
        radius: Matching radius in metres (always valid after load).
        identifiers: External reference URIs/IDs, in source order.
        geometry_type: ``POINT`` or ``POLYGON``.
        polygon_ring: Exterior ring as ``(lon, lat)`` tuples (polygons only).
        region_type: Value of the ``Type`` property (e.g. ``"city"``).
        area_m2: Geodesic ring area in square metres (0.0 for points).
        source_file: Name of the GeoJSON file the feature came from.
        feature_index: Zero-based index of the feature within that file.
    """

    name: str
    latitude: float
    longitude: float
    city: str = ""
    state_province: str = ""
    country: str = ""
    country_code: str = ""
    radius: float = DEFAULT_RADIUS_M
    identifiers: tuple[str, ...] = field(default_factory=tuple)
    geometry_type: GeometryType = GeometryType.POINT
    polygon_ring: tuple[tuple[float, float], ...] | None = None
    region_type: str = ""
    area_m2: float = 0.0
    source_file: str = ""
    feature_index: int = 0

    @property
    def is_polygon(self) -> bool:
        """Whether this record carries a polygon ring."""
        return self.geometry_type is GeometryType.POLYGON and self.polygon_ring is not None

    @property
    def display_name(self) -> str:
        """Best human-readable label for logs."""
        return self.name or self.city or self.state_province or self.country or "(unnamed)"

    def to_dict(self) -> dict[str, object]:
        """Serialise to a plain dict (used by the JSON run report)."""
        return {
            "name": self.name,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "city": self.city,
            "state_province": self.state_province,
            "country": self.country,
            "country_code": self.country_code,
            "radius": self.radius,
            "identifiers": list(self.identifiers),
            "geometry_type": self.geometry_type.value,
            "region_type": self.region_type,
            "source_file": self.source_file,
            "feature_index": self.feature_index,
        }
