"""GeoJSON feature parser.

Turns decoded GeoJSON features into ``LocationRecord`` objects. One bad
feature never prevents the remaining features from loading: structural
failures are logged and the feature is dropped.
"""

from __future__ import annotations

import logging

from photo_geotag.activities.geometry import (
    compute_centroid,
    compute_geodesic_area_m2,
    is_valid_ring,
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
    validate_coordinate,
    validate_feature_collection,
    validate_polygon_ring,
)
from photo_geotag.core.constants import (
    PROP_CITY,
    PROP_COUNTRY,
    PROP_COUNTRY_CODE,
    PROP_IDENTIFIERS,
    PROP_NAME,
    PROP_RADIUS,
    PROP_STATE,
    PROP_TYPE,
)
from photo_geotag.models.location import GeometryType, LocationRecord

logger = logging.getLogger("photo_geotag.activities.load_locations")


def parse_geojson_document(document: object, source_filename: str) -> list[LocationRecord]:
    """Parse a decoded FeatureCollection into location records.

    Raises:
        InvalidFormatError: If the root is not a non-empty FeatureCollection.
    """
    features = validate_feature_collection(document, source_filename)

    records: list[LocationRecord] = []
    for idx, feature in enumerate(features):
        try:
            records.append(parse_feature(feature, idx, source_filename))
        except FeatureValidationError as exc:
            logger.warning(
                "Skipping invalid feature %d in %s: %s",
                idx,
                source_filename,
                exc,
            )
    return records


def parse_feature(feature: object, idx: int, source_filename: str = "") -> LocationRecord:
    """Parse a single GeoJSON feature.

    Raises:
        FeatureValidationError: If the feature lacks geometry or
            properties, has malformed coordinates, or uses an
            unsupported geometry type.
    """
    label = f"#{idx}"
    if not isinstance(feature, dict):
        msg = f"Feature {label} is not an object"
        raise FeatureValidationError(msg)

    geometry = feature.get("geometry")
    props = feature.get("properties")
    if not isinstance(geometry, dict):
        msg = f"Feature {label} has no geometry"
        raise FeatureValidationError(msg)
    if not isinstance(props, dict):
        msg = f"Feature {label} has no properties"
        raise FeatureValidationError(msg)

    name = text_property(props, PROP_NAME)
    if name:
        label = f"#{idx} '{name}'"

    geometry_type = geometry.get("type")
    raw_coords = geometry.get("coordinates")

    if geometry_type == GeometryType.POINT:
        lon, lat = coord_to_tuple(raw_coords)
        validate_coordinate(lon, lat, label)
        ring = None
        area_m2 = 0.0
    elif geometry_type == GeometryType.POLYGON:
        if not isinstance(raw_coords, list) or not raw_coords:
            msg = f"Polygon feature {label} has no rings"
            raise FeatureValidationError(msg)
        exterior = validate_polygon_ring(coords_to_tuples(raw_coords[0]), label)
        if not is_valid_ring(exterior):
            logger.warning(
                "Polygon feature %s in %s is not a valid simple polygon; "
                "containment tests may be unreliable",
                label,
                source_filename,
            )
        lon, lat = compute_centroid(exterior)
        ring = tuple(exterior)
        area_m2 = compute_geodesic_area_m2(exterior)
    else:
        msg = f"Unsupported geometry type {geometry_type!r} in feature {label}"
        raise FeatureValidationError(msg)

    return LocationRecord(
        name=name,
        latitude=lat,
        longitude=lon,
        city=text_property(props, PROP_CITY),
        state_province=text_property(props, PROP_STATE),
        country=text_property(props, PROP_COUNTRY),
        country_code=text_property(props, PROP_COUNTRY_CODE),
        radius=parse_radius(props.get(PROP_RADIUS)),
        identifiers=parse_identifiers(props.get(PROP_IDENTIFIERS)),
        geometry_type=GeometryType(geometry_type),
        polygon_ring=ring,
        region_type=text_property(props, PROP_TYPE),
        area_m2=area_m2,
        source_file=source_filename,
        feature_index=idx,
    )
