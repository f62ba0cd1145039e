from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import BinaryIO, Optional

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..core.constants import MAX_AVATAR_BYTES
from ..core.exceptions import StorageError, ValidationError
from .config import S3Config

logger = logging.getLogger(__name__)


def avatar_key(owner_id: str, filename: str) -> str:
    """One avatar per owner; re-uploads overwrite `{owner}/avatar.{ext}`."""
    ext = PurePosixPath(filename or "").suffix.lstrip(".").lower() or "png"
    return f"{owner_id}/avatar.{ext}"


def validate_avatar(*, content_type: Optional[str], size: int) -> None:
    if not content_type or not content_type.startswith("image/"):
        raise ValidationError("Invalid file type: please select an image file")
    if size > MAX_AVATAR_BYTES:
        raise ValidationError(f"File too large: please select an image under {MAX_AVATAR_BYTES // (1024 * 1024)}MB")


class AvatarStorage:
    """Avatar uploads to an S3-compatible bucket using boto3."""

    def __init__(self, config: S3Config, *, client=None):
        self.config = config
        self._client = client

    def _ensure_client(self):
        if self._client is None:
            self._client = boto3.client(
                "s3",
                endpoint_url=self.config.endpoint_url,
                aws_access_key_id=self.config.access_key_id,
                aws_secret_access_key=self.config.secret_access_key,
                region_name=self.config.region,
                config=Config(signature_version="s3v4"),
            )
        return self._client

    def upload_avatar(
        self,
        *,
        owner_id: str,
        stream: BinaryIO,
        filename: str,
        content_type: Optional[str],
        size: int,
    ) -> str:
        """Upload and return the public URL."""
        validate_avatar(content_type=content_type, size=size)
        key = avatar_key(owner_id, filename)

        try:
            self._ensure_client().upload_fileobj(
                stream,
                self.config.bucket_name,
                key,
                ExtraArgs={"ContentType": content_type},
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("Avatar upload failed for %s: %s", owner_id, e)
            raise StorageError("Failed to upload avatar") from e

        url = self.config.public_url(key)
        logger.info("Uploaded avatar for %s -> %s", owner_id, url)
        return url
