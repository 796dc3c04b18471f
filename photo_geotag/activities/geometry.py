"""Geometry primitives for location matching.

Pure functions, no state:

- ``haversine_m``: great-circle distance on a sphere of mean Earth radius.
- ``point_in_polygon``: even-odd ray casting against a ``(lon, lat)`` ring.
- ``compute_centroid``: arithmetic mean of a ring's distinct vertices.
- ``compute_geodesic_area_m2``: ring area on the WGS 84 ellipsoid.
- ``is_valid_ring``: shapely validity check (diagnostic only).

Rings are always GeoJSON order ``(lon, lat)``; query points are passed
as ``lat, lon`` to match how photo GPS tags are read.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from photo_geotag.core.constants import EARTH_RADIUS_M, MIN_RING_VERTICES

Ring = Sequence[tuple[float, float]]


# ---------------------------------------------------------------------------
# Distance
# ---------------------------------------------------------------------------


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in metres between two WGS 84 points.

    Args:
        lat1: Latitude of the first point in degrees.
        lon1: Longitude of the first point in degrees.
        lat2: Latitude of the second point in degrees.
        lon2: Longitude of the second point in degrees.

    Returns:
        Distance in metres (sphere of radius ``EARTH_RADIUS_M``).
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # Clamp against rounding drift past 1.0 for antipodal points
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(max(0.0, 1 - a)))
    return EARTH_RADIUS_M * c


# ---------------------------------------------------------------------------
# Containment
# ---------------------------------------------------------------------------


def point_in_polygon(lat: float, lon: float, ring: Ring) -> bool:
    """Test whether ``(lat, lon)`` lies inside a polygon ring.

    Casts a ray from the test point towards increasing longitude and
    counts edge crossings (even-odd rule).  An edge ``(v[i], v[i+1])``
    counts when the test latitude is on one side of ``lat1`` and not of
    ``lat2`` (half-open, so a ray through a shared vertex is counted
    once) and the test longitude is west of the edge longitude
    interpolated at that latitude.

    Points exactly on an edge or vertex get a deterministic but
    unspecified answer that follows the floating-point comparisons below.

    Args:
        lat: Test latitude in degrees.
        lon: Test longitude in degrees.
        ring: Exterior ring as ``(lon, lat)`` tuples; closed or open.

    Returns:
        ``True`` if inside.  Rings with fewer than 3 vertices are never
        inside anything.
    """
    n = len(ring)
    if n < MIN_RING_VERTICES:
        return False

    inside = False
    for i in range(n):
        lon1, lat1 = ring[i][0], ring[i][1]
        lon2, lat2 = ring[(i + 1) % n][0], ring[(i + 1) % n][1]
        if (lat1 > lat) != (lat2 > lat):
            lon_edge = lon1 + (lon2 - lon1) * (lat - lat1) / (lat2 - lat1)
            if lon < lon_edge:
                inside = not inside
    return inside


# ---------------------------------------------------------------------------
# Centroid / area
# ---------------------------------------------------------------------------


def distinct_vertices(ring: Ring) -> list[tuple[float, float]]:
    """Return the ring's vertices without a trailing closing duplicate."""
    vertices = [(float(c[0]), float(c[1])) for c in ring]
    if len(vertices) > 1 and vertices[0] == vertices[-1]:
        vertices = vertices[:-1]
    return vertices


def compute_centroid(ring: Ring) -> tuple[float, float]:
    """Compute the arithmetic-mean centroid of a ring.

    Args:
        ring: Exterior ring as ``(lon, lat)`` tuples.

    Returns:
        Centroid as ``(lon, lat)``.

    Raises:
        ValueError: If the ring has no vertices.
    """
    # GeoJSON closing vertex excluded: a closed unit square averages to (0.5, 0.5)
    vertices = distinct_vertices(ring)
    if not vertices:
        msg = "Cannot compute centroid of an empty ring"
        raise ValueError(msg)
    lon = sum(v[0] for v in vertices) / len(vertices)
    lat = sum(v[1] for v in vertices) / len(vertices)
    return (lon, lat)


def compute_geodesic_area_m2(ring: Ring) -> float:
    """Compute geodesic ring area in square metres.

    Uses pyproj.Geod on the WGS 84 ellipsoid. Returns absolute area
    (winding-order agnostic).
    """
    vertices = distinct_vertices(ring)
    if len(vertices) < MIN_RING_VERTICES:
        return 0.0

    from pyproj import Geod

    geod = Geod(ellps="WGS84")
    area_m2, _perimeter = geod.polygon_area_perimeter(
        [v[0] for v in vertices],
        [v[1] for v in vertices],
    )
    return abs(area_m2)


def is_valid_ring(ring: Ring) -> bool:
    """Whether shapely considers the ring a valid simple polygon."""
    from shapely.geometry import Polygon

    vertices = distinct_vertices(ring)
    if len(vertices) < MIN_RING_VERTICES:
        return False
    try:
        poly = Polygon(vertices)
    except (ValueError, TypeError):
        return False
    return bool(poly.is_valid) and poly.area > 0
