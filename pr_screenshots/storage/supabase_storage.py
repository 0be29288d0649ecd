"""Supabase Storage-backed screenshot storage."""

from __future__ import annotations

import logging
from typing import Any

from ..models import SupabaseTarget
from .base import SCREENSHOT_CONTENT_TYPE, BaseStorage

logger = logging.getLogger(__name__)

# 10MB per object on buckets this backend creates.
BUCKET_FILE_SIZE_LIMIT = 10 * 1024 * 1024


class SupabaseStorage(BaseStorage):
    """Screenshot storage backend for Supabase Storage.

    Unlike :class:`~pr_screenshots.storage.s3_storage.S3Storage`, the bucket is
    created (public) on first use when it does not exist yet.
    """

    @property
    def name(self) -> str:
        return "Supabase"

    def __init__(
        self,
        *,
        url: str,
        key: str,
        bucket: str,
        client: Any | None = None,
    ) -> None:
        super().__init__(bucket=bucket)
        self._client = client or self._build_client(url=url, key=key)

    @classmethod
    def from_target(cls, target: SupabaseTarget, *, client: Any | None = None) -> SupabaseStorage:
        return cls(url=target.url, key=target.key, bucket=target.bucket_name, client=client)

    @staticmethod
    def _build_client(*, url: str, key: str) -> Any:
        try:
            from supabase import create_client  # type: ignore[import-not-found]
        except ImportError as exc:  # pragma: no cover - import is environment-specific
            raise RuntimeError(
                "Supabase storage requires supabase. Install it to enable Supabase screenshot uploads."
            ) from exc
        return create_client(url, key)

    def _initialize(self) -> None:
        buckets = self._client.storage.list_buckets() or []
        if any(_bucket_name(b) == self.bucket for b in buckets):
            logger.info("Using Supabase bucket: %s", self.bucket)
            return

        logger.info("Creating Supabase bucket: %s", self.bucket)
        self._client.storage.create_bucket(
            self.bucket,
            options={"public": True, "file_size_limit": BUCKET_FILE_SIZE_LIMIT},
        )

    def _upload_bytes(self, *, data: bytes, remote_path: str) -> str:
        bucket = self._client.storage.from_(self.bucket)
        bucket.upload(
            remote_path,
            data,
            file_options={"content-type": SCREENSHOT_CONTENT_TYPE, "upsert": "true"},
        )

        public_url = bucket.get_public_url(remote_path)
        # supabase-py v1 returns a dict, v2 a plain string.
        if isinstance(public_url, dict):
            public_url = public_url.get("publicURL") or public_url.get("publicUrl")
        if not public_url:
            raise RuntimeError(f"Failed to get public URL for {remote_path}")
        return str(public_url)


def _bucket_name(bucket: Any) -> str | None:
    if isinstance(bucket, dict):
        return bucket.get("name")
    return getattr(bucket, "name", None)
