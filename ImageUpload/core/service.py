from __future__ import annotations

import logging
from functools import partial

import anyio

from .config import Settings
from .models import UploadedFile, UploadResult
from .naming import build_object_key, public_url
from .object_store import S3ObjectStore

logger = logging.getLogger("imageupload")


class UploadService:
    """
    Keys an accepted file, hands it to the object store and shapes the result.
    """

    def __init__(self, store: S3ObjectStore, settings: Settings) -> None:
        self.store = store
        self.settings = settings

    async def upload(self, uploaded: UploadedFile) -> UploadResult:
        key = build_object_key(uploaded.original_name, prefix=self.settings.KEY_PREFIX)

        # Minio is blocking; keep the event loop free while the PUT is in flight.
        await anyio.to_thread.run_sync(
            partial(self.store.put, key, uploaded.content, uploaded.mime_type)
        )

        url = public_url(
            self.settings.PUBLIC_URL_TEMPLATE,
            bucket=self.settings.AWS_BUCKET_NAME,
            region=self.settings.AWS_REGION,
            key=key,
        )
        logger.info("File uploaded successfully: %s", url)
        return UploadResult(
            url=url,
            file_name=key,
            file_size=uploaded.size_bytes,
            mime_type=uploaded.mime_type,
        )
