"""Data models.

Defines the data structures used throughout the geotagger:
- LocationRecord: A named Point or Polygon location from GeoJSON
- QueryPoint / MatchResult: Resolver input and output
- FileOutcome / RunSummary: Per-file results and run statistics
"""

from photo_geotag.models.location import GeometryType, LocationRecord
from photo_geotag.models.match import MatchResult, MatchTier, QueryPoint
from photo_geotag.models.summary import FileOutcome, FileStatus, RunSummary

__all__ = [
    "FileOutcome",
    "FileStatus",
    "GeometryType",
    "LocationRecord",
    "MatchResult",
    "MatchTier",
    "QueryPoint",
    "RunSummary",
]
