"""Factory helpers for storage backend resolution from a storage target."""

from __future__ import annotations

from ..models import S3Target, StorageTarget, SupabaseTarget
from .base import BaseStorage
from .s3_storage import S3Storage
from .supabase_storage import SupabaseStorage

STORAGE_KINDS = ("supabase", "s3")


def create_storage(target: StorageTarget) -> BaseStorage:
    """Create the storage backend matching ``target.kind``."""
    kind = getattr(target, "kind", None)

    if kind == "s3" and isinstance(target, S3Target):
        return S3Storage.from_target(target)

    if kind == "supabase" and isinstance(target, SupabaseTarget):
        return SupabaseStorage.from_target(target)

    raise ValueError(f"Unknown storage type: {kind!r}")
