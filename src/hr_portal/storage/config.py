from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import AVATAR_BUCKET


@dataclass(frozen=True)
class S3Config:
    """S3-compatible object store settings (AWS, MinIO, Supabase storage...)."""

    endpoint_url: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    region: str = "us-east-1"
    bucket_name: str = AVATAR_BUCKET
    # Base URL objects are publicly served from; defaults to endpoint/bucket.
    public_base_url: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: dict) -> "S3Config":
        return cls(
            endpoint_url=settings.get("endpoint_url") or None,
            access_key_id=settings.get("access_key_id") or None,
            secret_access_key=settings.get("secret_access_key") or None,
            region=settings.get("region") or "us-east-1",
            bucket_name=settings.get("bucket_name") or AVATAR_BUCKET,
            public_base_url=settings.get("public_base_url") or None,
        )

    def public_url(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket_name}/{key}"
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{key}"
