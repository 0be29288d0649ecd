"""Base abstractions for screenshot storage backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from pathlib import Path

from ..errors import StorageInitializationError, UploadFailedError

logger = logging.getLogger(__name__)

SCREENSHOT_CONTENT_TYPE = "image/png"


class BaseStorage(ABC):
    """Abstract storage backend that publishes screenshots under a public URL."""

    def __init__(self, *, bucket: str) -> None:
        bucket_name = bucket.strip()
        if not bucket_name:
            raise ValueError("bucket must be non-empty")
        self.bucket = bucket_name
        self._initialized = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable backend name used in log lines."""

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Prepare the backend once per instance; later calls are no-ops."""
        if self._initialized:
            return
        try:
            self._initialize()
        except StorageInitializationError:
            raise
        except Exception as err:
            raise StorageInitializationError(
                f"Failed to initialize {self.name} storage: {err}", cause=err
            ) from err
        self._initialized = True

    def upload(self, file_path: str | Path, remote_path: str) -> str:
        """Upload one screenshot and return its public URL."""
        self.initialize()
        try:
            data = Path(file_path).read_bytes()
            logger.info(
                "Uploading %s (%.2fMB) to %s...",
                remote_path,
                len(data) / 1024 / 1024,
                self.name,
            )
            url = self._upload_bytes(data=data, remote_path=remote_path)
        except UploadFailedError:
            raise
        except Exception as err:
            raise UploadFailedError(
                f"Failed to upload {remote_path}: {err}",
                remote_path=remote_path,
                cause=err,
            ) from err
        logger.info("Uploaded: %s", url)
        return url

    @abstractmethod
    def _initialize(self) -> None:
        """Verify or provision the bucket."""

    @abstractmethod
    def _upload_bytes(self, *, data: bytes, remote_path: str) -> str:
        """Persist bytes under ``remote_path`` and return the public URL."""
