"""Shared geotagging constants — single source of truth.

Centralises matching thresholds, GeoJSON property names, and the
ExifTool tag names written by the emission stage.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Matching thresholds
# ---------------------------------------------------------------------------

DEFAULT_RADIUS_M: float = 50.0
"""Matching radius applied to records whose ``Radius`` is missing or unusable."""

NEARBY_THRESHOLD_M: float = 500.0
"""Fixed outer distance for the Nearby tier. Not configurable."""

EARTH_RADIUS_M: float = 6_371_000.0
"""Mean Earth radius used by the Haversine formula."""

DEFAULT_REGION_TYPES: frozenset[str] = frozenset({"city", "state", "admin_region"})
"""Polygon ``Type`` values whose fields override a match's city/state/country."""

# ---------------------------------------------------------------------------
# WGS 84 coordinate bounds
# ---------------------------------------------------------------------------

MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0

MIN_RING_VERTICES = 3

# ---------------------------------------------------------------------------
# GeoJSON property names
# ---------------------------------------------------------------------------

PROP_NAME = "Location"
PROP_CITY = "City"
PROP_STATE = "StateProvince"
PROP_COUNTRY = "Country"
PROP_COUNTRY_CODE = "CountryCode"
PROP_RADIUS = "Radius"
PROP_IDENTIFIERS = "LocationIdentifiers"
PROP_TYPE = "Type"

# ---------------------------------------------------------------------------
# ExifTool tag names
# ---------------------------------------------------------------------------

TAG_GPS_LATITUDE = "Composite:GPSLatitude"
TAG_GPS_LONGITUDE = "Composite:GPSLongitude"

TAG_LOCATION_NAME = "XMP-iptcCore:Location"
TAG_CITY = "XMP-photoshop:City"
TAG_STATE = "XMP-photoshop:State"
TAG_COUNTRY = "XMP-photoshop:Country"
TAG_COUNTRY_CODE = "XMP-iptcCore:CountryCode"
TAG_LOCATION_IDENTIFIERS = "XMP-iptcExt:LocationCreatedLocationId"

# ---------------------------------------------------------------------------
# Media discovery
# ---------------------------------------------------------------------------

DEFAULT_EXTENSIONS: tuple[str, ...] = (
    "jpg",
    "jpeg",
    "heic",
    "heif",
    "png",
    "tif",
    "tiff",
    "dng",
    "cr2",
    "cr3",
    "nef",
    "arw",
    "orf",
    "rw2",
)
