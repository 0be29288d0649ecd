"""Rendering and persistence of screenshot upload results."""

from .comment import COMMENT_MARKER, COMMENT_TITLE, build_comment_markdown, screenshot_heading
from .results import load_results, results_to_json, save_results

__all__ = [
    "COMMENT_MARKER",
    "COMMENT_TITLE",
    "build_comment_markdown",
    "screenshot_heading",
    "load_results",
    "results_to_json",
    "save_results",
]
