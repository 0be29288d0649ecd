"""Remote key construction from a path template."""

from __future__ import annotations

import time

DEFAULT_PATH_TEMPLATE = "pr-{pr}/run-{runId}/{filename}"


def resolve_remote_path(
    template: str,
    filename: str,
    pr_number: str | int | None = None,
    run_id: str | int | None = None,
) -> str:
    """Fill ``{pr}``, ``{runId}`` and ``{filename}`` in ``template``.

    Only the first occurrence of each placeholder is replaced. A missing PR
    number becomes ``unknown``; a missing run id becomes the current epoch
    time in milliseconds, so two runs without a run id in the same
    millisecond share a prefix. The timestamp is taken on every call, so a
    batch without a run id that spans several milliseconds is spread over
    several ``run-<ts>`` prefixes.
    """
    pr_value = str(pr_number) if pr_number else "unknown"
    run_value = str(run_id) if run_id else str(int(time.time() * 1000))
    return (
        template.replace("{pr}", pr_value, 1)
        .replace("{runId}", run_value, 1)
        .replace("{filename}", filename, 1)
    )
