"""Post or update the screenshot report on a GitHub pull request."""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .errors import GitHubCommentError
from .reporting.comment import COMMENT_MARKER

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
REQUEST_TIMEOUT = 30.0


def _request(
    method: str,
    url: str,
    *,
    token: str,
    payload: dict[str, Any] | None = None,
    timeout: float = REQUEST_TIMEOUT,
) -> Any:
    data = json.dumps(payload).encode("utf-8") if payload is not None else None
    request = Request(url, data=data, method=method)
    request.add_header("Accept", "application/vnd.github+json")
    request.add_header("Authorization", f"Bearer {token}")
    request.add_header("X-GitHub-Api-Version", "2022-11-28")
    if data is not None:
        request.add_header("Content-Type", "application/json")
    try:
        with urlopen(request, timeout=timeout) as response:
            body = response.read()
    except HTTPError as err:
        raise GitHubCommentError(f"GitHub API {method} {url} failed: {err}", cause=err) from err
    except URLError as err:
        raise GitHubCommentError(f"GitHub API {method} {url} unreachable: {err.reason}", cause=err) from err
    if not body:
        return None
    return json.loads(body.decode("utf-8"))


def find_existing_comment(
    *,
    token: str,
    owner: str,
    repo: str,
    pr_number: str | int,
    api_url: str = GITHUB_API_URL,
) -> dict[str, Any] | None:
    """Return the first PR comment carrying the report marker, if any."""
    url = f"{api_url.rstrip('/')}/repos/{owner}/{repo}/issues/{pr_number}/comments?per_page=100"
    comments = _request("GET", url, token=token) or []
    for comment in comments:
        if COMMENT_MARKER in (comment.get("body") or ""):
            return comment
    return None


def post_comment(
    body: str,
    *,
    token: str,
    owner: str,
    repo: str,
    pr_number: str | int,
    api_url: str = GITHUB_API_URL,
) -> str:
    """Create or update the screenshot comment and return its HTML URL."""
    if not token:
        raise GitHubCommentError("A GitHub token is required to post comments")
    if not pr_number:
        raise GitHubCommentError("A pull request number is required to post comments")

    if COMMENT_MARKER not in body:
        body = f"{body.rstrip()}\n{COMMENT_MARKER}\n"

    base = api_url.rstrip("/")
    existing = find_existing_comment(
        token=token, owner=owner, repo=repo, pr_number=pr_number, api_url=api_url
    )
    if existing is not None:
        logger.info("Updating existing screenshot comment %s", existing.get("id"))
        result = _request(
            "PATCH",
            f"{base}/repos/{owner}/{repo}/issues/comments/{existing['id']}",
            token=token,
            payload={"body": body},
        )
    else:
        logger.info("Creating screenshot comment on PR #%s", pr_number)
        result = _request(
            "POST",
            f"{base}/repos/{owner}/{repo}/issues/{pr_number}/comments",
            token=token,
            payload={"body": body},
        )
    return str((result or {}).get("html_url", ""))
