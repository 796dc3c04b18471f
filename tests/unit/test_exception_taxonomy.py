"""Tests for the unified exception taxonomy.

Validates:
- GeotagError hierarchy and structured attributes
- Category classification (setup, skip, write)
- ``to_error_dict()`` produces stable payload keys
- Only setup errors are fatal
- All module exceptions are GeotagError subclasses
"""

from __future__ import annotations

from typing import ClassVar

from photo_geotag.activities.load_locations import FeatureValidationError, InvalidFormatError
from photo_geotag.core.config import ConfigValidationError
from photo_geotag.core.exceptions import (
    EmptyDatabaseError,
    FileSkipError,
    FileWriteError,
    GeotagError,
    SetupError,
)
from photo_geotag.orchestrators.batch import CoordinateExtractionError
from photo_geotag.tools.base import (
    MetadataReadError,
    MetadataToolTimeoutError,
    MetadataToolUnavailableError,
    MetadataWriteError,
)


class TestGeotagErrorBase:
    """GeotagError base class behavior."""

    def test_default_attributes(self) -> None:
        err = GeotagError("boom")
        assert err.message == "boom"
        assert err.stage == ""
        assert err.code == ""
        assert err.path == ""

    def test_custom_attributes(self) -> None:
        err = GeotagError("boom", stage="write_tags", code="X", path="/p/a.jpg")
        assert err.stage == "write_tags"
        assert err.code == "X"
        assert err.path == "/p/a.jpg"

    def test_str_is_message(self) -> None:
        assert str(GeotagError("boom")) == "boom"

    def test_to_error_dict_keys(self) -> None:
        payload = GeotagError("boom").to_error_dict()
        assert set(payload) == {"category", "code", "stage", "message", "path"}
        assert payload["category"] == "unknown"

    def test_kwarg_overrides_class_default(self) -> None:
        err = InvalidFormatError("bad", code="CUSTOM")
        assert err.code == "CUSTOM"
        assert err.stage == "load_locations"


class TestCategories:
    """Category and fatality follow the concrete base class."""

    def test_setup_is_fatal(self) -> None:
        err = SetupError("x")
        assert err.category == "setup"
        assert err.fatal is True

    def test_skip_not_fatal(self) -> None:
        err = FileSkipError("x")
        assert err.category == "skip"
        assert err.fatal is False

    def test_write_not_fatal(self) -> None:
        err = FileWriteError("x")
        assert err.category == "write"
        assert err.fatal is False


class TestSubclassRegistry:
    """Every module exception slots into the taxonomy."""

    EXCEPTION_CLASSES: ClassVar[list[type[GeotagError]]] = [
        InvalidFormatError,
        FeatureValidationError,
        EmptyDatabaseError,
        CoordinateExtractionError,
        MetadataReadError,
        MetadataToolTimeoutError,
        MetadataToolUnavailableError,
    ]

    def test_all_subclass_geotag_error(self) -> None:
        for cls in self.EXCEPTION_CLASSES:
            assert issubclass(cls, GeotagError), cls.__name__

    def test_setup_errors(self) -> None:
        for cls in (InvalidFormatError, EmptyDatabaseError, MetadataToolUnavailableError):
            assert issubclass(cls, SetupError), cls.__name__

    def test_skip_errors(self) -> None:
        for cls in (MetadataReadError, CoordinateExtractionError):
            assert issubclass(cls, FileSkipError), cls.__name__

    def test_write_errors(self) -> None:
        for cls in (MetadataWriteError, MetadataToolTimeoutError):
            assert issubclass(cls, FileWriteError), cls.__name__

    def test_invalid_format_error(self) -> None:
        err = InvalidFormatError("bad", path="db.geojson")
        assert err.code == "GEOJSON_INVALID"
        assert err.to_error_dict()["path"] == "db.geojson"

    def test_metadata_write_error(self) -> None:
        err = MetadataWriteError("denied", exit_code=2, path="/p/a.jpg")
        payload = err.to_error_dict()
        assert payload["category"] == "write"
        assert payload["exit_code"] == 2
        assert payload["stage"] == "write_tags"

    def test_config_validation_error(self) -> None:
        err = ConfigValidationError("GEOTAG_TOOL_TIMEOUT_S", -1, "must be > 0")
        assert err.category == "setup"
        assert err.stage == "config"
