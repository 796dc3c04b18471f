"""Location resolution activity.

Given a photo's GPS coordinate and the location database, determines
the best-matching record and its tier.

Precedence:

1. Scan: every Polygon is tested for containment (keeping its centroid
   distance); every Point is measured and the nearest one tracked.
2. Point over Polygon: when the query is inside some polygon and the
   nearest Point lies within its own radius, that Point wins (Exact).
3. Containing polygon: otherwise the containing polygon whose centroid
   is closest wins (Exact, distance 0).
4. Nearest record: with no containing polygon, the globally nearest
   record (Point coordinate or Polygon centroid) is classified:
   within its radius → Exact; within ``NEARBY_THRESHOLD_M`` → Nearby;
   else None.
5. Region override: for any tier but None, a containing Polygon whose
   ``region_type`` is configured as a region supplies override values
   for city/state/country.  When several qualify, the smallest-area
   polygon wins (ties: input order).

Ties at every step go to the record encountered first in input order.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from photo_geotag.activities.geometry import haversine_m, point_in_polygon
from photo_geotag.core.constants import DEFAULT_REGION_TYPES, NEARBY_THRESHOLD_M
from photo_geotag.core.exceptions import EmptyDatabaseError
from photo_geotag.models.match import MatchResult, MatchTier

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from photo_geotag.models.location import LocationRecord
    from photo_geotag.models.match import QueryPoint

logger = logging.getLogger("photo_geotag.activities.resolve_location")


def resolve_location(
    query: QueryPoint,
    locations: Sequence[LocationRecord],
    *,
    region_types: Collection[str] = DEFAULT_REGION_TYPES,
) -> MatchResult:
    """Resolve a query coordinate against the location database.

    Args:
        query: The photo's GPS coordinate.
        locations: The loaded location database (read-only).
        region_types: Polygon ``region_type`` values eligible for the
            region override.

    Returns:
        A ``MatchResult``.  Tier ``NONE`` still carries the nearest record.

    Raises:
        EmptyDatabaseError: If ``locations`` is empty.
    """
    if not locations:
        msg = "Cannot resolve a location against an empty database"
        raise EmptyDatabaseError(msg)

    lat, lon = query.latitude, query.longitude

    # Step 1: partition scan
    containing: list[tuple[LocationRecord, float]] = []
    nearest_point: tuple[LocationRecord, float] | None = None
    for record in locations:
        distance = haversine_m(lat, lon, record.latitude, record.longitude)
        if record.is_polygon:
            if point_in_polygon(lat, lon, record.polygon_ring):  # type: ignore[arg-type]
                containing.append((record, distance))
        elif nearest_point is None or distance < nearest_point[1]:
            nearest_point = (record, distance)

    # Steps 2-4: pick the match
    if containing and nearest_point is not None and nearest_point[1] <= nearest_point[0].radius:
        match = MatchResult(
            record=nearest_point[0],
            distance_m=nearest_point[1],
            tier=MatchTier.EXACT,
            inside_polygon=False,
        )
    elif containing:
        best = min(containing, key=lambda item: item[1])
        match = MatchResult(
            record=best[0],
            distance_m=0.0,
            tier=MatchTier.EXACT,
            inside_polygon=True,
        )
    else:
        record, distance = nearest_record(lat, lon, locations)
        match = MatchResult(
            record=record,
            distance_m=distance,
            tier=classify_distance(distance, record.radius),
            inside_polygon=False,
        )

    # Step 5: region override
    if match.is_match:
        region = find_region_override(lat, lon, locations, region_types=region_types)
        if region is not None:
            match = MatchResult(
                record=match.record,
                distance_m=match.distance_m,
                tier=match.tier,
                inside_polygon=match.inside_polygon,
                region_override=region,
            )

    logger.debug(
        "Resolved | gps=%.6f,%.6f | location=%s | tier=%s | distance=%.1f m | "
        "inside_polygon=%s | region=%s",
        lat,
        lon,
        match.record.display_name,
        match.tier.value,
        match.distance_m,
        match.inside_polygon,
        match.region_override.display_name if match.region_override else "",
    )
    return match


def nearest_record(
    lat: float, lon: float, locations: Sequence[LocationRecord]
) -> tuple[LocationRecord, float]:
    """Return the globally nearest record and its distance in metres.

    Points are measured to their coordinate and Polygons to their
    centroid.  The first record wins ties.

    Raises:
        EmptyDatabaseError: If ``locations`` is empty.
    """
    best: tuple[LocationRecord, float] | None = None
    for record in locations:
        distance = haversine_m(lat, lon, record.latitude, record.longitude)
        if best is None or distance < best[1]:
            best = (record, distance)
    if best is None:
        msg = "Cannot find the nearest location in an empty database"
        raise EmptyDatabaseError(msg)
    return best


def classify_distance(distance_m: float, radius_m: float) -> MatchTier:
    """Classify a distance against a record's radius and the Nearby threshold."""
    if distance_m <= radius_m:
        return MatchTier.EXACT
    if distance_m <= NEARBY_THRESHOLD_M:
        return MatchTier.NEARBY
    return MatchTier.NONE


def find_region_override(
    lat: float,
    lon: float,
    locations: Sequence[LocationRecord],
    *,
    region_types: Collection[str] = DEFAULT_REGION_TYPES,
) -> LocationRecord | None:
    """Return the containing region polygon used for field overrides.

    Only Polygon records whose ``region_type`` is in ``region_types``
    (case-sensitive) are considered.  The smallest-area container wins;
    equal areas fall back to input order.
    """
    best: LocationRecord | None = None
    for record in locations:
        if not record.is_polygon or record.region_type not in region_types:
            continue
        if not point_in_polygon(lat, lon, record.polygon_ring):  # type: ignore[arg-type]
            continue
        if best is None or record.area_m2 < best.area_m2:
            best = record
    return best
