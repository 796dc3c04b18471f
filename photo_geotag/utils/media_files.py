"""Media file discovery.

Walks a photo directory and yields candidate files whose extension is
in the configured set.  Hidden files and directories (dot-prefixed) are
skipped, as are macOS resource-fork files (``._IMG_0001.JPG``).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from photo_geotag.core.constants import DEFAULT_EXTENSIONS

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger("photo_geotag.utils.media_files")


def find_media_files(
    root: Path | str,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    *,
    recursive: bool = True,
) -> list[Path]:
    """Return media files under *root*, sorted by path.

    Args:
        root: Directory to scan, or a single file.
        extensions: Lower-case extensions without the leading dot.
        recursive: Descend into sub-directories.

    Returns:
        Matching file paths (case-insensitive extension match).

    Raises:
        FileNotFoundError: If *root* does not exist.
    """
    root = Path(root)
    wanted = {ext.lower().lstrip(".") for ext in extensions}

    if root.is_file():
        return [root] if _is_media(root, wanted) else []
    if not root.is_dir():
        msg = f"Photo directory not found: {root}"
        raise FileNotFoundError(msg)

    pattern = "**/*" if recursive else "*"
    files = sorted(
        path
        for path in root.glob(pattern)
        if path.is_file()
        and _is_media(path, wanted)
        and not _is_hidden(path.relative_to(root))
    )
    logger.info("Discovered %d media file(s) under %s", len(files), root)
    return files


def _is_media(path: Path, wanted: set[str]) -> bool:
    return path.suffix.lower().lstrip(".") in wanted


def _is_hidden(relative: Path) -> bool:
    return any(part.startswith(".") for part in relative.parts)
