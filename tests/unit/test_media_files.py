"""Tests for media file discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from photo_geotag.utils.media_files import find_media_files


def _touch(root: Path, relative: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


class TestFindMediaFiles:
    def test_recursive_and_sorted(self, tmp_path: Path) -> None:
        b = _touch(tmp_path, "b.jpg")
        a = _touch(tmp_path, "2024/a.heic")
        c = _touch(tmp_path, "2024/trip/c.NEF")
        assert find_media_files(tmp_path) == sorted([a, b, c])

    def test_extension_match_is_case_insensitive(self, tmp_path: Path) -> None:
        upper = _touch(tmp_path, "IMG_0001.JPG")
        assert find_media_files(tmp_path, ["jpg"]) == [upper]

    def test_other_files_ignored(self, tmp_path: Path) -> None:
        _touch(tmp_path, "notes.txt")
        _touch(tmp_path, "IMG_0001.xmp")
        assert find_media_files(tmp_path) == []

    def test_hidden_entries_skipped(self, tmp_path: Path) -> None:
        _touch(tmp_path, ".thumbnails/a.jpg")
        _touch(tmp_path, "._IMG_0001.JPG")
        visible = _touch(tmp_path, "IMG_0001.JPG")
        assert find_media_files(tmp_path) == [visible]

    def test_non_recursive(self, tmp_path: Path) -> None:
        top = _touch(tmp_path, "top.jpg")
        _touch(tmp_path, "sub/deep.jpg")
        assert find_media_files(tmp_path, recursive=False) == [top]

    def test_custom_extensions_with_dots(self, tmp_path: Path) -> None:
        _touch(tmp_path, "a.jpg")
        png = _touch(tmp_path, "b.png")
        assert find_media_files(tmp_path, [".PNG"]) == [png]

    def test_single_file_root(self, tmp_path: Path) -> None:
        photo = _touch(tmp_path, "a.jpg")
        assert find_media_files(photo) == [photo]
        assert find_media_files(_touch(tmp_path, "a.txt")) == []

    def test_missing_root(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            find_media_files(tmp_path / "missing")
