"""S3-backed screenshot storage."""

from __future__ import annotations

import logging
from typing import Any

from ..errors import StorageInitializationError
from ..models import S3Target
from .base import SCREENSHOT_CONTENT_TYPE, BaseStorage

logger = logging.getLogger(__name__)

_MISSING_BUCKET_CODES = {"404", "NoSuchBucket", "NotFound"}


class S3Storage(BaseStorage):
    """Screenshot storage backend for Amazon S3 and S3-compatible services.

    The bucket must already exist; this backend never creates it.
    """

    @property
    def name(self) -> str:
        return "S3"

    def __init__(
        self,
        *,
        bucket: str,
        region: str,
        aws_access_key_id: str | None = None,
        aws_secret_access_key: str | None = None,
        endpoint: str | None = None,
        public_read: bool = True,
        client: Any | None = None,
    ) -> None:
        super().__init__(bucket=bucket)
        self.region = region
        self.endpoint = endpoint
        self.public_read = public_read
        self._client = client or self._build_client(
            region=region,
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
            endpoint=endpoint,
        )

    @classmethod
    def from_target(cls, target: S3Target, *, client: Any | None = None) -> S3Storage:
        return cls(
            bucket=target.bucket,
            region=target.region,
            aws_access_key_id=target.access_key_id,
            aws_secret_access_key=target.secret_access_key,
            endpoint=target.endpoint,
            public_read=target.public_read,
            client=client,
        )

    @staticmethod
    def _build_client(
        *,
        region: str,
        aws_access_key_id: str | None,
        aws_secret_access_key: str | None,
        endpoint: str | None,
    ) -> Any:
        try:
            import boto3  # type: ignore[import-not-found]
            from botocore.config import Config  # type: ignore[import-not-found]
        except ImportError as exc:  # pragma: no cover - import is environment-specific
            raise RuntimeError(
                "S3 storage requires boto3. Install boto3 to enable S3 screenshot uploads."
            ) from exc

        kwargs: dict[str, Any] = {"region_name": region}
        # Partial credentials fall through to the default credential chain.
        if aws_access_key_id and aws_secret_access_key:
            kwargs["aws_access_key_id"] = aws_access_key_id
            kwargs["aws_secret_access_key"] = aws_secret_access_key
        if endpoint:
            kwargs["endpoint_url"] = endpoint
            kwargs["config"] = Config(s3={"addressing_style": "path"})
        return boto3.client("s3", **kwargs)

    def _initialize(self) -> None:
        try:
            self._client.head_bucket(Bucket=self.bucket)
        except Exception as err:
            code = _error_code(err)
            if code in _MISSING_BUCKET_CODES:
                raise StorageInitializationError(
                    f'S3 bucket "{self.bucket}" does not exist. Please create it first.',
                    cause=err,
                ) from err
            raise StorageInitializationError(
                f"Failed to access S3 bucket: {err}", cause=err
            ) from err
        logger.info("Using S3 bucket: %s", self.bucket)

    def _upload_bytes(self, *, data: bytes, remote_path: str) -> str:
        put_kwargs: dict[str, Any] = {
            "Bucket": self.bucket,
            "Key": remote_path,
            "Body": data,
            "ContentType": SCREENSHOT_CONTENT_TYPE,
        }
        if self.public_read:
            put_kwargs["ACL"] = "public-read"
        self._client.put_object(**put_kwargs)
        return self.public_url(remote_path)

    def public_url(self, remote_path: str) -> str:
        if self.endpoint:
            return f"{self.endpoint.rstrip('/')}/{self.bucket}/{remote_path}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{remote_path}"


def _error_code(err: Exception) -> str | None:
    """Extract the error code from a botocore ``ClientError``-shaped exception."""
    response = getattr(err, "response", None)
    if not isinstance(response, dict):
        return None
    code = (response.get("Error") or {}).get("Code")
    return str(code) if code is not None else None
