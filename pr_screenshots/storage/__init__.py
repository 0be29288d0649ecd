"""Remote storage backends for screenshot uploads."""

from .base import BaseStorage
from .factory import STORAGE_KINDS, create_storage
from .s3_storage import S3Storage
from .supabase_storage import SupabaseStorage

__all__ = [
    "BaseStorage",
    "S3Storage",
    "SupabaseStorage",
    "STORAGE_KINDS",
    "create_storage",
]
