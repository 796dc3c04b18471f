"""Query and match models for the location resolver.

A QueryPoint is a photo's GPS coordinate; a MatchResult is the
resolver's verdict for that coordinate.  Both live only for the
duration of a single file's processing.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from photo_geotag.core.constants import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)

if TYPE_CHECKING:
    from photo_geotag.models.location import LocationRecord


class MatchTier(StrEnum):
    """Confidence tier of a match; drives which tags are written."""

    EXACT = "exact"
    NEARBY = "nearby"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class QueryPoint:
    """A photo's GPS coordinate in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            msg = f"Non-finite coordinate ({self.latitude}, {self.longitude})"
            raise ValueError(msg)
        if not MIN_LATITUDE <= self.latitude <= MAX_LATITUDE:
            msg = f"Latitude {self.latitude} out of range [{MIN_LATITUDE}, {MAX_LATITUDE}]"
            raise ValueError(msg)
        if not MIN_LONGITUDE <= self.longitude <= MAX_LONGITUDE:
            msg = f"Longitude {self.longitude} out of range [{MIN_LONGITUDE}, {MAX_LONGITUDE}]"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Outcome of resolving a QueryPoint against the location database.

    Attributes:
        record: The winning (or, for ``NONE``, the nearest) location.
        distance_m: 0.0 when inside a polygon, else great-circle distance
            to the record's representative point.
        tier: Match confidence tier.
        inside_polygon: Whether the match is a containing polygon.
        region_override: Containing region polygon whose non-empty
            city/state/country fields supersede the record's.
    """

    record: LocationRecord
    distance_m: float
    tier: MatchTier
    inside_polygon: bool = False
    region_override: LocationRecord | None = None

    @property
    def is_match(self) -> bool:
        """Whether any tags should be written for this result."""
        return self.tier is not MatchTier.NONE
