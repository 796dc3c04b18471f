"""ExifTool adapter — reads and writes tags through the ``exiftool`` CLI.

Every call is its own subprocess with no shared state, so the adapter is
safe to use from several worker threads at once.

Reads use ``-json -n`` so GPS values come back as signed decimal degrees
and list tags come back as JSON arrays.  Writes overwrite the file in
place (``-overwrite_original``) with UTF-8 values; list tags are
appended with ``-TAG+=value``.
"""

from __future__ import annotations

import json
import logging
import subprocess
from typing import TYPE_CHECKING

from photo_geotag.tools.base import (
    MetadataReadError,
    MetadataTool,
    MetadataToolTimeoutError,
    MetadataToolUnavailableError,
    MetadataWriteError,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

logger = logging.getLogger("photo_geotag.tools.exiftool")

DEFAULT_TIMEOUT_S = 30.0


class ExifToolAdapter(MetadataTool):
    """``MetadataTool`` backed by the ExifTool command-line program.

    Args:
        executable: ExifTool executable name or path.
        timeout_s: Per-call timeout in seconds.
    """

    name = "exiftool"

    def __init__(self, executable: str = "exiftool", *, timeout_s: float = DEFAULT_TIMEOUT_S) -> None:
        self._executable = executable
        self._timeout_s = timeout_s

    @property
    def executable(self) -> str:
        return self._executable

    @property
    def timeout_s(self) -> float:
        return self._timeout_s

    # ------------------------------------------------------------------
    # MetadataTool interface
    # ------------------------------------------------------------------

    def check_available(self) -> str:
        try:
            result = subprocess.run(
                [self._executable, "-ver"],
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self._timeout_s,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            msg = f"ExifTool is not available ({self._executable}): {exc}"
            raise MetadataToolUnavailableError(msg) from exc

        version = result.stdout.strip()
        if result.returncode != 0 or not version:
            msg = (
                f"ExifTool check failed ({self._executable}): exit code "
                f"{result.returncode}: {result.stderr.strip()}"
            )
            raise MetadataToolUnavailableError(msg)

        logger.info("ExifTool available | version=%s | executable=%s", version, self._executable)
        return version

    def read_fields(self, path: Path, field_names: Sequence[str]) -> dict[str, object]:
        args = [self._executable, "-json", "-n", "-charset", "filename=utf8"]
        args.extend(f"-{name}" for name in field_names)
        args.append(str(path))

        try:
            result = self._run(args, path)
        except OSError as exc:
            msg = f"ExifTool could not be executed to read {path}: {exc}"
            raise MetadataReadError(msg, path=str(path)) from exc

        if result.returncode != 0 and not result.stdout.strip():
            msg = f"ExifTool could not read {path}: {result.stderr.strip() or 'no output'}"
            raise MetadataReadError(msg, path=str(path))

        return parse_json_response(result.stdout, field_names, path=str(path))

    def write_fields(
        self,
        path: Path,
        fields: Mapping[str, str],
        *,
        append: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        args = build_write_args(self._executable, path, fields, append=append)
        try:
            result = self._run(args, path)
        except OSError as exc:
            msg = f"ExifTool could not be executed to write {path}: {exc}"
            raise MetadataWriteError(msg, exit_code=None, path=str(path)) from exc

        if result.returncode != 0:
            msg = (
                f"ExifTool write failed for {path} with exit code "
                f"{result.returncode}: {result.stderr.strip()}"
            )
            raise MetadataWriteError(msg, exit_code=result.returncode, path=str(path))

        logger.debug("ExifTool write ok | file=%s | output=%s", path, result.stdout.strip())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _run(self, args: list[str], path: Path) -> subprocess.CompletedProcess[str]:
        """Run one ExifTool call.  ``OSError`` is left to the caller."""
        try:
            return subprocess.run(
                args,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self._timeout_s,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            msg = f"ExifTool timed out after {self._timeout_s:.0f}s on {path}"
            raise MetadataToolTimeoutError(msg, path=str(path)) from exc


def build_write_args(
    executable: str,
    path: Path,
    fields: Mapping[str, str],
    *,
    append: Mapping[str, Sequence[str]] | None = None,
) -> list[str]:
    """Build the ExifTool argument list for an in-place write."""
    args = [executable, "-overwrite_original", "-charset", "utf8", "-charset", "filename=utf8"]
    args.extend(f"-{tag}={value}" for tag, value in fields.items())
    for tag, values in (append or {}).items():
        args.extend(f"-{tag}+={value}" for value in values)
    args.append(str(path))
    return args


def parse_json_response(
    stdout: str, field_names: Sequence[str], *, path: str = ""
) -> dict[str, object]:
    """Map ExifTool ``-json`` output back to the requested tag names.

    ExifTool reports tags without their group prefix, so
    ``XMP-iptcExt:LocationCreatedLocationId`` comes back as
    ``LocationCreatedLocationId``.

    Raises:
        MetadataReadError: If the output is not a one-element JSON array
            of objects.
    """
    try:
        payload = json.loads(stdout)
    except json.JSONDecodeError as exc:
        msg = f"Malformed ExifTool response for {path}: {exc}"
        raise MetadataReadError(msg, path=path) from exc

    if not isinstance(payload, list) or not payload or not isinstance(payload[0], dict):
        msg = f"Unexpected ExifTool response shape for {path}"
        raise MetadataReadError(msg, path=path)

    entry: dict[str, object] = payload[0]
    values: dict[str, object] = {}
    for name in field_names:
        key = name.rsplit(":", 1)[-1]
        if key in entry:
            value = entry[key]
            values[name] = [str(v) for v in value] if isinstance(value, list) else value
    return values
