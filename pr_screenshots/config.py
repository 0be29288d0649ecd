"""Configuration helpers for environment-backed runtime settings."""

from __future__ import annotations

from dataclasses import dataclass
import os

from .models import S3Target, StorageTarget, SupabaseTarget


def _get_env(*names: str) -> str | None:
    """Return the first non-empty value among ``names``."""
    for name in names:
        raw = os.getenv(name)
        if raw is None:
            continue
        value = raw.strip()
        if value:
            return value
    return None


@dataclass(frozen=True)
class GitHubContext:
    """Resolved repository settings from GitHub Actions variables."""

    owner: str
    repo: str
    repository_url: str | None
    token: str | None


def load_s3_target() -> S3Target:
    """Load the S3 target from environment variables."""
    region = _get_env("AWS_REGION", "S3_REGION")
    bucket = _get_env("S3_BUCKET", "AWS_BUCKET")
    if not region or not bucket:
        raise ValueError(
            "AWS_REGION (or S3_REGION) and S3_BUCKET (or AWS_BUCKET) environment variables are required"
        )
    return S3Target(
        region=region,
        bucket=bucket,
        access_key_id=_get_env("AWS_ACCESS_KEY_ID"),
        secret_access_key=_get_env("AWS_SECRET_ACCESS_KEY"),
        endpoint=_get_env("S3_ENDPOINT"),
        public_read=(_get_env("S3_PUBLIC_READ") or "").lower() != "false",
    )


def load_supabase_target() -> SupabaseTarget:
    """Load the Supabase target from environment variables."""
    url = _get_env("SUPABASE_URL")
    key = _get_env("SUPABASE_PRIVATE_KEY", "SUPABASE_KEY")
    if not url or not key:
        raise ValueError("SUPABASE_URL and SUPABASE_PRIVATE_KEY environment variables are required")
    return SupabaseTarget(url=url, key=key, bucket=_get_env("SUPABASE_BUCKET"))


def load_storage_target(kind: str) -> StorageTarget:
    """Load the storage target for ``kind`` (``s3`` or ``supabase``)."""
    normalized = kind.strip().lower()
    if normalized == "s3":
        return load_s3_target()
    if normalized == "supabase":
        return load_supabase_target()
    raise ValueError(f"Unknown storage type: {kind}. Supported types: supabase, s3")


def load_github_context() -> GitHubContext:
    """Load repository owner/name, URL and token from the environment."""
    repository = _get_env("GITHUB_REPOSITORY")
    server_url = _get_env("GITHUB_SERVER_URL")
    repo = repository.split("/", 1)[1] if repository and "/" in repository else None
    return GitHubContext(
        owner=_get_env("GITHUB_REPOSITORY_OWNER") or "owner",
        repo=repo or "repo",
        repository_url=f"{server_url.rstrip('/')}/{repository}" if server_url and repository else None,
        token=_get_env("GITHUB_TOKEN"),
    )
