"""Data model shared by storage, upload orchestration and reporting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Union

DEFAULT_SUPABASE_BUCKET = "screenshots"


@dataclass(frozen=True)
class S3Target:
    """S3 (or S3-compatible) bucket that receives screenshots."""

    region: str
    bucket: str
    access_key_id: str | None = None
    secret_access_key: str | None = None
    endpoint: str | None = None
    public_read: bool = True

    @property
    def kind(self) -> Literal["s3"]:
        return "s3"


@dataclass(frozen=True)
class SupabaseTarget:
    """Supabase Storage project that receives screenshots."""

    url: str
    key: str
    bucket: str | None = None

    @property
    def kind(self) -> Literal["supabase"]:
        return "supabase"

    @property
    def bucket_name(self) -> str:
        return self.bucket or DEFAULT_SUPABASE_BUCKET


StorageTarget = Union[S3Target, SupabaseTarget]


@dataclass(frozen=True)
class RunContext:
    """Pull request and CI run a batch of screenshots belongs to."""

    pr_number: str | int | None = None
    run_id: str | int | None = None


@dataclass(frozen=True)
class UploadedScreenshot:
    """One successfully uploaded screenshot."""

    name: str
    url: str
    path: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "url": self.url, "path": self.path}

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> UploadedScreenshot:
        return cls(
            name=str(payload["name"]),
            url=str(payload["url"]),
            path=str(payload.get("path", "")),
        )
