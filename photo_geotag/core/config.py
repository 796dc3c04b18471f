"""Geotagging configuration loaded from environment variables.

All configuration values have sensible defaults. Environment variables
supply site-wide settings; the CLI layers per-run overrides on top via
``with_overrides``.

Fail-fast validation:
    ``from_env()`` and ``with_overrides()`` raise ``ConfigValidationError``
    if any value is out of its valid range, before any file is touched.
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from photo_geotag.core.constants import DEFAULT_EXTENSIONS, DEFAULT_REGION_TYPES
from photo_geotag.core.exceptions import SetupError

if TYPE_CHECKING:
    from collections.abc import Iterable


class ConfigValidationError(SetupError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class GeotagConfig:
    """Immutable geotagging configuration.

    Loaded once at startup and threaded through the batch orchestrator.

    Attributes:
        exiftool_path: ExifTool executable name or path.
        tool_timeout_s: Per-call ExifTool timeout in seconds.
        max_workers: Number of files processed concurrently.
        region_types: Polygon ``Type`` values eligible for region override.
        extensions: Lower-case media file extensions (without dot).
    """

    exiftool_path: str = "exiftool"
    tool_timeout_s: float = 30.0
    max_workers: int = 1
    region_types: frozenset[str] = DEFAULT_REGION_TYPES
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS

    @classmethod
    def from_env(cls) -> GeotagConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or empty.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``GEOTAG_MAX_WORKERS=abc``).
        """
        region_types = os.getenv("GEOTAG_REGION_TYPES")
        extensions = os.getenv("GEOTAG_EXTENSIONS")
        config = cls(
            exiftool_path=os.getenv("GEOTAG_EXIFTOOL", "exiftool"),
            tool_timeout_s=float(os.getenv("GEOTAG_TOOL_TIMEOUT_S", "30")),
            max_workers=int(os.getenv("GEOTAG_MAX_WORKERS", "1")),
            region_types=(
                frozenset(split_csv(region_types))
                if region_types is not None
                else DEFAULT_REGION_TYPES
            ),
            extensions=(
                normalize_extensions(split_csv(extensions))
                if extensions is not None
                else DEFAULT_EXTENSIONS
            ),
        )
        _validate(config)
        return config

    def with_overrides(self, **overrides: object) -> GeotagConfig:
        """Return a validated copy with ``None``-valued overrides ignored."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        if "extensions" in changes:
            changes["extensions"] = normalize_extensions(changes["extensions"])  # type: ignore[arg-type]
        if "region_types" in changes:
            changes["region_types"] = frozenset(changes["region_types"])  # type: ignore[arg-type]
        config = dataclasses.replace(self, **changes)  # type: ignore[arg-type]
        _validate(config)
        return config


def split_csv(value: str) -> list[str]:
    """Split a comma-separated setting, dropping blanks."""
    return [part.strip() for part in value.split(",") if part.strip()]


def normalize_extensions(extensions: Iterable[str] | str) -> tuple[str, ...]:
    """Lower-case extensions and strip any leading dots."""
    if isinstance(extensions, str):
        extensions = split_csv(extensions)
    cleaned = (ext.strip().lstrip(".").lower() for ext in extensions)
    return tuple(ext for ext in cleaned if ext)


def _validate(config: GeotagConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.exiftool_path:
        raise ConfigValidationError(
            "GEOTAG_EXIFTOOL",
            config.exiftool_path,
            "must not be empty",
        )

    if config.tool_timeout_s <= 0:
        raise ConfigValidationError(
            "GEOTAG_TOOL_TIMEOUT_S",
            config.tool_timeout_s,
            "must be > 0 (seconds)",
        )

    if config.max_workers < 1:
        raise ConfigValidationError(
            "GEOTAG_MAX_WORKERS",
            config.max_workers,
            "must be >= 1",
        )

    if not config.extensions:
        raise ConfigValidationError(
            "GEOTAG_EXTENSIONS",
            config.extensions,
            "must list at least one extension",
        )
