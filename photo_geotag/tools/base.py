"""MetadataTool abstract base class.

Defines the contract every metadata read/write adapter must implement.
The batch orchestrator interacts exclusively with this interface; it
never knows which concrete tool is behind it.

Lifecycle per run:
    1. ``check_available()`` — once, before any file is processed.

Lifecycle per file:
    1. ``read_fields(path, names)``  — one batched read of everything needed.
    2. ``write_fields(path, fields, append=...)`` — one write call that
       overwrites scalar tags and appends to repeatable list tags.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from photo_geotag.core.exceptions import FileSkipError, FileWriteError, SetupError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path


class MetadataTool(abc.ABC):
    """Abstract base class for metadata tool adapters.

    Example usage::

        tool = ExifToolAdapter()
        tool.check_available()
        current = tool.read_fields(path, ["GPSLatitude", "GPSLongitude"])
        tool.write_fields(path, {"XMP-photoshop:City": "Paris"})
    """

    #: Tool name used in error messages and logs.
    name: str = "metadata-tool"

    @abc.abstractmethod
    def check_available(self) -> str:
        """Verify the tool can be invoked.

        Returns:
            The tool's version string.

        Raises:
            MetadataToolUnavailableError: If the tool cannot be run.
        """

    @abc.abstractmethod
    def read_fields(self, path: Path, field_names: Sequence[str]) -> dict[str, object]:
        """Read the current values of several tags in one call.

        Args:
            path: Media file to read.
            field_names: Tag names to read (group prefixes allowed).

        Returns:
            Mapping of requested tag name → value for tags present on the
            file.  Absent tags are omitted.  List tags map to ``list[str]``.

        Raises:
            MetadataReadError: If the file is missing or the tool's
                response cannot be interpreted.
            MetadataToolTimeoutError: If the call exceeds the timeout.
        """

    @abc.abstractmethod
    def write_fields(
        self,
        path: Path,
        fields: Mapping[str, str],
        *,
        append: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        """Overwrite scalar tags and append to list tags in place.

        Args:
            path: Media file to modify (overwritten in place, UTF-8).
            fields: Scalar tag name → value to set.
            append: List tag name → values to append.

        Raises:
            MetadataWriteError: If the tool exits non-zero.
            MetadataToolTimeoutError: If the call exceeds the timeout.
        """


# ---------------------------------------------------------------------------
# Tool exceptions
# ---------------------------------------------------------------------------


class MetadataToolUnavailableError(SetupError):
    """The metadata tool is not installed or cannot be executed."""

    default_stage = "check_tool"
    default_code = "METADATA_TOOL_UNAVAILABLE"


class MetadataReadError(FileSkipError):
    """Reading a file's metadata failed or returned an unusable response."""

    default_stage = "read_metadata"
    default_code = "METADATA_READ_FAILED"


class MetadataWriteError(FileWriteError):
    """The metadata tool failed to run or exited non-zero while writing tags.

    Attributes:
        exit_code: The tool's process exit code, or ``None`` when the tool
            could not be executed at all.
    """

    default_stage = "write_tags"
    default_code = "METADATA_WRITE_FAILED"

    def __init__(self, message: str, *, exit_code: int | None, path: str = "") -> None:
        self.exit_code = exit_code
        super().__init__(message, path=path)

    def to_error_dict(self) -> dict[str, object]:
        payload = super().to_error_dict()
        payload["exit_code"] = self.exit_code
        return payload


class MetadataToolTimeoutError(FileWriteError):
    """A metadata tool call exceeded its timeout; the file is marked as an error."""

    default_stage = "metadata_tool"
    default_code = "METADATA_TOOL_TIMEOUT"
