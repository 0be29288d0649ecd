"""Screenshot capture helpers for Playwright tests.

Files land in the directory that ``pr-screenshots upload`` later walks::

    from pr_screenshots.capture import capture_screenshot

    def test_homepage(page):
        page.goto("/")
        capture_screenshot(page, "homepage")
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_SCREENSHOT_DIR = "test-results/pr-screenshots"
SCREENSHOT_DIR_ENV = "PR_SCREENSHOTS_DIR"

_NON_ALNUM_CHAR = re.compile(r"[^A-Za-z0-9]")


def default_screenshot_dir() -> str:
    """Screenshot directory, honoring ``PR_SCREENSHOTS_DIR``."""
    return os.getenv(SCREENSHOT_DIR_ENV) or DEFAULT_SCREENSHOT_DIR


def ensure_png_name(name: str) -> str:
    return name if name.endswith(".png") else f"{name}.png"


def sanitize_test_title(title: str) -> str:
    """Replace every non-alphanumeric character with ``-`` and lowercase."""
    return _NON_ALNUM_CHAR.sub("-", title).lower()


def _take(
    page: Any,
    filename: str,
    *,
    output_dir: str | Path | None,
    full_page: bool,
    screenshot_options: dict[str, Any],
) -> str:
    target_dir = Path(output_dir or default_screenshot_dir())
    target_dir.mkdir(parents=True, exist_ok=True)
    screenshot_path = str(target_dir / filename)

    logger.info("Capturing screenshot: %s", filename)
    page.screenshot(path=screenshot_path, full_page=full_page, **screenshot_options)
    return screenshot_path


def capture_screenshot(
    page: Any,
    name: str,
    *,
    output_dir: str | Path | None = None,
    full_page: bool = True,
    **screenshot_options: Any,
) -> str:
    """Save a screenshot of ``page`` as ``<name>.png`` and return its path."""
    return _take(
        page,
        ensure_png_name(name),
        output_dir=output_dir,
        full_page=full_page,
        screenshot_options=screenshot_options,
    )


def capture_screenshot_with_info(
    page: Any,
    test_title: str,
    name: str,
    *,
    output_dir: str | Path | None = None,
    full_page: bool = True,
    **screenshot_options: Any,
) -> str:
    """Like :func:`capture_screenshot`, prefixing the file with the test title."""
    filename = f"{sanitize_test_title(test_title)}-{ensure_png_name(name)}"
    return _take(
        page,
        filename,
        output_dir=output_dir,
        full_page=full_page,
        screenshot_options=screenshot_options,
    )
