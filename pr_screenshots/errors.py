"""Error taxonomy for the upload-and-report pipeline."""

from __future__ import annotations


class ScreenshotReviewError(Exception):
    """Base class for every failure raised by pr-screenshots."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ScreenshotDirectoryNotFoundError(ScreenshotReviewError, FileNotFoundError):
    """The screenshot root directory does not exist."""

    def __init__(self, directory: str) -> None:
        super().__init__(f"Directory {directory} does not exist")
        self.directory = directory


class StorageInitializationError(ScreenshotReviewError):
    """The storage backend could not be verified or provisioned. Fatal."""


class UploadFailedError(ScreenshotReviewError):
    """A single screenshot could not be uploaded. Recoverable."""

    def __init__(
        self,
        message: str,
        *,
        remote_path: str,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.remote_path = remote_path


class NoScreenshotsFoundError(ScreenshotReviewError):
    """Discovery found nothing to upload."""

    def __init__(self, directory: str) -> None:
        super().__init__(f"No screenshots found in {directory}")
        self.directory = directory


class AllUploadsFailedError(ScreenshotReviewError):
    """Every discovered screenshot failed to upload."""

    def __init__(self, attempted: int) -> None:
        super().__init__(f"Failed to upload any screenshots ({attempted} attempted)")
        self.attempted = attempted


class GitHubCommentError(ScreenshotReviewError):
    """Posting or updating the pull-request comment failed."""
