"""Markdown rendering of uploaded screenshots for a pull-request comment."""

from __future__ import annotations

import re
from typing import Sequence

from ..models import UploadedScreenshot

COMMENT_TITLE = "## 📸 UI Screenshots"
COMMENT_MARKER = "<!-- pr-screenshots -->"

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


def screenshot_heading(name: str) -> str:
    """Turn ``my-homepage-screenshot.png`` into ``my homepage screenshot``."""
    stem = name[: -len(".png")] if name.endswith(".png") else name
    return _NON_ALNUM.sub(" ", stem).lower()


def build_comment_markdown(
    screenshots: Sequence[UploadedScreenshot],
    *,
    pr_number: str | int | None,
    owner: str,
    repo: str,
    run_id: str | int | None = None,
    repository_url: str | None = None,
) -> str:
    """Render the screenshot report, one section per screenshot in input order."""
    lines: list[str] = []
    lines.append(COMMENT_TITLE)
    lines.append("")
    if pr_number:
        lines.append(f"Screenshots captured for PR #{pr_number}.")
    else:
        lines.append("Screenshots captured for this pull request.")
    lines.append("")

    for shot in screenshots:
        lines.append(f"### {screenshot_heading(shot.name)}")
        lines.append("")
        lines.append(f"![{shot.name}]({shot.url})")
        lines.append("")

    lines.append("---")
    lines.append("")
    if run_id and repository_url:
        run_url = f"{repository_url.rstrip('/')}/actions/runs/{run_id}"
        lines.append(f"[View CI run {run_id}]({run_url})")
        lines.append("")
    lines.append(f"_Generated by pr-screenshots for `{owner}/{repo}`._")
    lines.append(COMMENT_MARKER)
    return "\n".join(lines) + "\n"
