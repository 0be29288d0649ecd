"""Screenshot discovery on the local filesystem."""

from __future__ import annotations

from pathlib import Path

from .errors import ScreenshotDirectoryNotFoundError

SCREENSHOT_SUFFIX = ".png"


def find_screenshots(directory: str | Path) -> list[str]:
    """Return every ``.png`` file under ``directory``, sorted by path.

    The suffix match is case-sensitive, so ``shot.PNG`` is skipped. Each call
    walks the tree again and returns a new list.
    """
    root = Path(directory)
    if not root.exists():
        raise ScreenshotDirectoryNotFoundError(str(directory))

    found = [
        str(path)
        for path in root.rglob("*")
        if path.is_file() and path.name.endswith(SCREENSHOT_SUFFIX)
    ]
    return sorted(found)
