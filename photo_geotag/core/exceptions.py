"""Unified geotagging exception taxonomy.

Every domain exception inherits from ``GeotagError`` and carries
structured context fields so the batch orchestrator can decide, in one
place, whether a failure aborts the run or is recorded against a single
file.

Taxonomy categories
-------------------
- ``SetupError``      — fatal; raised before any file is processed
  (unreadable location database, missing ExifTool, bad configuration).
- ``FileSkipError``   — recoverable; the file is skipped and counted
  (coordinate extraction failure, malformed metadata response).
- ``FileWriteError``  — recoverable; the file's tags are not confirmed
  applied and the file is counted as an error.

Every exception exposes ``to_error_dict()`` for a stable structured
payload suitable for logging and the JSON run report.
"""

from __future__ import annotations


class GeotagError(Exception):
    """Base exception for all geotagging errors.

    Attributes:
        message: Human-readable error description.
        stage: Pipeline stage where the error occurred
            (e.g. ``"load_locations"``, ``"write_tags"``).
        code: Machine-readable error code (e.g. ``"GEOJSON_INVALID"``).
        path: Path of the file being processed, if any.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        path: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.path = path
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, SetupError):
            return "setup"
        if isinstance(self, FileSkipError):
            return "skip"
        if isinstance(self, FileWriteError):
            return "write"
        return "unknown"

    @property
    def fatal(self) -> bool:
        """Whether the error must abort the whole run."""
        return isinstance(self, SetupError)

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "path": self.path,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class SetupError(GeotagError):
    """Fatal setup failure. Aborts the run before any file is processed."""


class FileSkipError(GeotagError):
    """A single file could not be read; it is skipped and the run continues."""


class FileWriteError(GeotagError):
    """Writing tags to a single file failed; the run continues."""


# ---------------------------------------------------------------------------
# Concrete errors shared across modules
# ---------------------------------------------------------------------------


class EmptyDatabaseError(SetupError):
    """Raised when location resolution is attempted against no records."""

    default_stage = "resolve_location"
    default_code = "LOCATION_DB_EMPTY"
