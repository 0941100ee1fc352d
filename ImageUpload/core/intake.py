"""
Multipart intake for the upload endpoint.

The request passes through an ordered chain of checks; each one either hands
back what the next step needs or raises an ``UploadError`` subclass that the
API layer turns into a JSON response:

1. parse the form (at most one file part)
2. reject file parts under any other field name
3. require the file field
4. check the declared media type against the allow-list
5. read the body, refusing anything over the size cap
"""

from __future__ import annotations

from typing import Iterable, Optional

from fastapi import Request
from starlette.datastructures import FormData, UploadFile

from .config import Settings
from .errors import BadRequest, ValidationError
from .models import UploadedFile


def reject_unexpected_files(form: FormData, field_name: str) -> None:
    for name, value in form.multi_items():
        if isinstance(value, UploadFile) and name != field_name:
            raise BadRequest("Unexpected field")


def require_file(form: FormData, field_name: str) -> UploadFile:
    value = form.get(field_name)
    if not isinstance(value, UploadFile):
        raise BadRequest("No file provided")
    return value


def check_media_type(upload: UploadFile, allowed: Iterable[str]) -> str:
    """Match the bare media type, ignoring parameters such as ``; charset=binary``."""
    declared: Optional[str] = upload.content_type
    mime_type = (declared or "").split(";")[0].strip().lower()
    if mime_type not in set(allowed):
        raise ValidationError.invalid_type()
    return mime_type


async def read_within_limit(upload: UploadFile, max_bytes: int) -> bytes:
    if upload.size is not None and upload.size > max_bytes:
        raise ValidationError.too_large()
    content = await upload.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise ValidationError.too_large()
    return content


async def parse_upload(request: Request, settings: Settings) -> UploadedFile:
    async with request.form(max_files=1) as form:
        reject_unexpected_files(form, settings.FILE_FIELD)
        upload = require_file(form, settings.FILE_FIELD)
        mime_type = check_media_type(upload, settings.ALLOWED_MIME_TYPES)
        content = await read_within_limit(upload, settings.MAX_UPLOAD_BYTES)

    return UploadedFile(
        original_name=upload.filename or "",
        mime_type=mime_type,
        content=content,
    )
