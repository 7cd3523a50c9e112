"""S3 staging area for lesson recordings and Transcribe output."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlparse

from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class MediaStorageError(RuntimeError):
    """Raised when an S3 object cannot be written or read."""


def parse_s3_uri(uri: str) -> tuple[str, str] | None:
    """Split ``s3://bucket/key`` into its parts; ``None`` for anything else."""

    parsed = urlparse(uri)
    key = parsed.path.lstrip("/")
    if parsed.scheme != "s3" or not parsed.netloc or not key:
        return None
    return parsed.netloc, key


class MediaStorage:
    """Blocking S3 operations; callers run them in a worker thread."""

    def __init__(self, s3_client: Any, bucket: str) -> None:
        self._s3 = s3_client
        self._bucket = bucket

    @property
    def bucket(self) -> str:
        return self._bucket

    def upload_bytes(self, key: str, data: bytes, content_type: str | None = None) -> str:
        extra: dict[str, Any] = {}
        if content_type:
            extra["ContentType"] = content_type
        try:
            self._s3.put_object(Bucket=self._bucket, Key=key, Body=data, **extra)
        except (BotoCoreError, ClientError) as exc:
            raise MediaStorageError(f"Failed to upload s3://{self._bucket}/{key}: {exc}") from exc
        return f"s3://{self._bucket}/{key}"

    def read_text(self, key: str) -> str:
        try:
            response = self._s3.get_object(Bucket=self._bucket, Key=key)
            return response["Body"].read().decode("utf-8")
        except (BotoCoreError, ClientError) as exc:
            raise MediaStorageError(f"Failed to read s3://{self._bucket}/{key}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self._s3.delete_object(Bucket=self._bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            logger.warning("Could not delete s3://%s/%s: %s", self._bucket, key, exc)


__all__ = ["MediaStorage", "MediaStorageError", "parse_s3_uri"]
