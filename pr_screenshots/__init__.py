"""pr-screenshots — upload test screenshots and report them on pull requests."""

from .discovery import find_screenshots
from .errors import (
    AllUploadsFailedError,
    GitHubCommentError,
    NoScreenshotsFoundError,
    ScreenshotDirectoryNotFoundError,
    ScreenshotReviewError,
    StorageInitializationError,
    UploadFailedError,
)
from .models import RunContext, S3Target, StorageTarget, SupabaseTarget, UploadedScreenshot
from .paths import DEFAULT_PATH_TEMPLATE, resolve_remote_path
from .reporting.comment import build_comment_markdown
from .storage import BaseStorage, S3Storage, SupabaseStorage, create_storage
from .upload import upload_screenshots

__version__ = "0.1.0"

__all__ = [
    "AllUploadsFailedError",
    "BaseStorage",
    "DEFAULT_PATH_TEMPLATE",
    "GitHubCommentError",
    "NoScreenshotsFoundError",
    "RunContext",
    "S3Storage",
    "S3Target",
    "ScreenshotDirectoryNotFoundError",
    "ScreenshotReviewError",
    "StorageInitializationError",
    "StorageTarget",
    "SupabaseStorage",
    "SupabaseTarget",
    "UploadFailedError",
    "UploadedScreenshot",
    "build_comment_markdown",
    "create_storage",
    "find_screenshots",
    "resolve_remote_path",
    "upload_screenshots",
]
