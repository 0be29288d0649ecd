"""Batch upload of discovered screenshots with partial-failure tolerance."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Iterable

from .discovery import find_screenshots
from .errors import (
    AllUploadsFailedError,
    NoScreenshotsFoundError,
    StorageInitializationError,
    UploadFailedError,
)
from .models import RunContext, StorageTarget, UploadedScreenshot
from .paths import DEFAULT_PATH_TEMPLATE, resolve_remote_path
from .storage.base import BaseStorage
from .storage.factory import create_storage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadOutcome:
    """Result of one upload attempt: either ``result`` or ``error`` is set."""

    file_path: str
    remote_path: str
    result: UploadedScreenshot | None = None
    error: UploadFailedError | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None


def collect_successes(outcomes: Iterable[UploadOutcome]) -> list[UploadedScreenshot]:
    """Reduce attempts to their successful results, keeping input order.

    Raises :class:`AllUploadsFailedError` when attempts were made and none
    succeeded.
    """
    attempted = 0
    uploaded: list[UploadedScreenshot] = []
    for outcome in outcomes:
        attempted += 1
        if outcome.result is not None:
            uploaded.append(outcome.result)
    if attempted and not uploaded:
        raise AllUploadsFailedError(attempted)
    return uploaded


def _attempt_upload(
    storage: BaseStorage,
    file_path: str,
    *,
    path_template: str,
    run: RunContext,
) -> UploadOutcome:
    filename = os.path.basename(file_path)
    remote_path = resolve_remote_path(path_template, filename, run.pr_number, run.run_id)
    try:
        url = storage.upload(file_path, remote_path)
    except UploadFailedError as err:
        logger.error("Failed to upload %s: %s", filename, err.message)
        return UploadOutcome(file_path=file_path, remote_path=remote_path, error=err)
    return UploadOutcome(
        file_path=file_path,
        remote_path=remote_path,
        result=UploadedScreenshot(name=filename, url=url, path=remote_path),
    )


def upload_screenshots(
    directory: str | Path,
    storage: StorageTarget | BaseStorage,
    *,
    path_template: str | None = None,
    run: RunContext | None = None,
) -> list[UploadedScreenshot]:
    """Upload every screenshot under ``directory`` and return the successes.

    Files are uploaded one at a time in sorted path order, so the returned
    list follows discovery order. A failed file is logged and skipped.
    Missing directory, no screenshots, backend initialization failure and
    zero successful uploads all raise.
    """
    screenshots = find_screenshots(directory)
    if not screenshots:
        raise NoScreenshotsFoundError(str(directory))

    logger.info("Found %d screenshots to upload", len(screenshots))

    if isinstance(storage, BaseStorage):
        backend = storage
    else:
        try:
            backend = create_storage(storage)
        except Exception as err:
            raise StorageInitializationError(
                f"Failed to initialize storage: {err}", cause=err
            ) from err
    backend.initialize()

    template = path_template or DEFAULT_PATH_TEMPLATE
    context = run or RunContext()
    outcomes = [
        _attempt_upload(backend, file_path, path_template=template, run=context)
        for file_path in screenshots
    ]
    uploaded = collect_successes(outcomes)

    logger.info("Successfully uploaded %d/%d screenshots", len(uploaded), len(screenshots))
    return uploaded
