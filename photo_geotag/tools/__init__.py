"""Metadata tool adapters.

Implements the tool-agnostic adapter pattern:
- MetadataTool: Abstract base class defining read / write / append
- ExifToolAdapter: ExifTool command-line program via ``subprocess``
"""

from photo_geotag.tools.base import (
    MetadataReadError,
    MetadataTool,
    MetadataToolTimeoutError,
    MetadataToolUnavailableError,
    MetadataWriteError,
)
from photo_geotag.tools.exiftool import ExifToolAdapter

__all__ = [
    "ExifToolAdapter",
    "MetadataReadError",
    "MetadataTool",
    "MetadataToolTimeoutError",
    "MetadataToolUnavailableError",
    "MetadataWriteError",
]
