"""JSON persistence of upload results between CLI steps."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from ..models import UploadedScreenshot


def results_to_json(screenshots: Sequence[UploadedScreenshot], *, indent: int | None = 2) -> str:
    return json.dumps([shot.to_dict() for shot in screenshots], indent=indent)


def save_results(screenshots: Sequence[UploadedScreenshot], output_path: str | Path) -> Path:
    """Write upload results as a JSON list and return the file path."""
    path = Path(output_path)
    if path.parent != Path("."):
        path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(results_to_json(screenshots), encoding="utf-8")
    return path


def load_results(input_path: str | Path) -> list[UploadedScreenshot]:
    """Read a results file written by :func:`save_results`."""
    payload = json.loads(Path(input_path).read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON list of screenshots in {input_path}")
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise ValueError(f"Screenshot entry {index} in {input_path} is not an object")
    return [UploadedScreenshot.from_dict(item) for item in payload]
