"""Shared pytest fixtures for the photo_geotag test suite."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from photo_geotag.tools.base import MetadataTool

# ---------------------------------------------------------------------------
# GeoJSON builders
# ---------------------------------------------------------------------------


def point_feature(lon: float, lat: float, **properties: object) -> dict[str, object]:
    """Build a GeoJSON Point feature (coordinates in ``[lon, lat]`` order)."""
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
        "properties": properties,
    }


def polygon_feature(ring: list[tuple[float, float]], **properties: object) -> dict[str, object]:
    """Build a GeoJSON Polygon feature from a ``(lon, lat)`` exterior ring."""
    return {
        "type": "Feature",
        "geometry": {"type": "Polygon", "coordinates": [[list(c) for c in ring]]},
        "properties": properties,
    }


def feature_collection(*features: dict[str, object]) -> dict[str, object]:
    return {"type": "FeatureCollection", "features": list(features)}


@pytest.fixture()
def write_geojson(tmp_path: Path):
    """Return a helper that writes a GeoJSON document and returns its path."""

    def _write(document: object, name: str = "locations.geojson") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def geojson():
    """Expose the GeoJSON builders to tests as a namespace."""

    class _Builders:
        point = staticmethod(point_feature)
        polygon = staticmethod(polygon_feature)
        collection = staticmethod(feature_collection)

    return _Builders


# ---------------------------------------------------------------------------
# In-memory metadata tool
# ---------------------------------------------------------------------------


class FakeMetadataTool(MetadataTool):
    """In-memory ``MetadataTool`` with ExifTool-like semantics.

    ``files`` maps a path string to its tag dict.  Scalar writes overwrite,
    appends extend list tags.  ``read_errors`` / ``write_errors`` map a
    path string to an exception raised on the corresponding call.
    """

    name = "fake"

    def __init__(self) -> None:
        self.files: dict[str, dict[str, object]] = {}
        self.read_errors: dict[str, Exception] = {}
        self.write_errors: dict[str, Exception] = {}
        self.available_error: Exception | None = None
        self.reads: list[str] = []
        self.writes: list[tuple[str, dict[str, str], dict[str, list[str]]]] = []

    def check_available(self) -> str:
        if self.available_error is not None:
            raise self.available_error
        return "fake-1.0"

    def read_fields(self, path, field_names):  # type: ignore[override]
        key = str(path)
        self.reads.append(key)
        if key in self.read_errors:
            raise self.read_errors[key]
        tags = self.files.get(key, {})
        return {
            name: list(tags[name]) if isinstance(tags[name], list) else tags[name]
            for name in field_names
            if name in tags
        }

    def write_fields(self, path, fields, *, append=None):  # type: ignore[override]
        key = str(path)
        if key in self.write_errors:
            raise self.write_errors[key]
        tags = self.files.setdefault(key, {})
        tags.update(fields)
        for tag, values in (append or {}).items():
            existing = tags.get(tag, [])
            if not isinstance(existing, list):
                existing = [existing]
            tags[tag] = [*existing, *values]
        self.writes.append(
            (key, dict(fields), {tag: list(values) for tag, values in (append or {}).items()})
        )


@pytest.fixture()
def fake_tool() -> FakeMetadataTool:
    """A fresh in-memory metadata tool."""
    return FakeMetadataTool()
