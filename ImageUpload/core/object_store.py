from __future__ import annotations

import logging
from io import BytesIO

from minio import Minio
from minio.error import S3Error

from .config import Settings
from .errors import StorageError

logger = logging.getLogger("imageupload")


class S3ObjectStore:
    """Thin wrapper over a shared Minio client bound to one bucket."""

    def __init__(self, client: Minio, bucket_name: str) -> None:
        self.client = client
        self.bucket_name = bucket_name

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3ObjectStore":
        client = Minio(
            settings.S3_ENDPOINT,
            access_key=settings.AWS_ACCESS_KEY_ID,
            secret_key=settings.AWS_SECRET_ACCESS_KEY,
            region=settings.AWS_REGION,
            secure=settings.S3_SECURE,
        )
        return cls(client, settings.AWS_BUCKET_NAME)

    def put(self, key: str, content: bytes, content_type: str) -> None:
        # No ACL: public readability is governed by the bucket policy.
        try:
            self.client.put_object(
                bucket_name=self.bucket_name,
                object_name=key,
                data=BytesIO(content),
                length=len(content),
                content_type=content_type,
            )
        except S3Error as exc:
            logger.error("S3 Upload Error: %s (%s)", exc.message, exc.code)
            raise StorageError(exc.message, exc.code) from exc
        except Exception as exc:
            logger.error("S3 Upload Error: %s", exc)
            raise StorageError(str(exc), None) from exc
