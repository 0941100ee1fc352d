from __future__ import annotations

import logging

from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ImageUpload.core.errors import ValidationError

logger = logging.getLogger("imageupload")


class BodySizeLimitMiddleware:
    """
    Caps the number of request body bytes the app will ever read.

    A declared Content-Length over the cap is refused without touching the
    body. Otherwise bytes are counted as they arrive (chunked bodies
    included) and the read is aborted with ``ValidationError`` as soon as the
    running total passes the cap.
    """

    def __init__(self, app: ASGIApp, max_bytes: int) -> None:
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_bytes:
            logger.warning("Rejected %s %s: body of %s bytes", scope["method"], scope["path"], content_length)
            error = ValidationError.too_large()
            response = JSONResponse(status_code=error.status_code, content=error.to_payload())
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    raise ValidationError.too_large()
            return message

        await self.app(scope, limited_receive, send)
