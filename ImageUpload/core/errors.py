from __future__ import annotations

from typing import Dict, Optional

from fastapi import status


class UploadError(Exception):
    """Base class for failures that end an upload request with a JSON error body."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def to_payload(self) -> Dict[str, str]:
        payload = {"error": self.message}
        if self.code:
            payload["code"] = self.code
        return payload


class BadRequest(UploadError):
    status_code = status.HTTP_400_BAD_REQUEST


class ValidationError(UploadError):
    """Rejected by the intake layer before any storage work happens."""

    def __init__(self, message: str, code: str, status_code: int) -> None:
        super().__init__(message, code)
        self.status_code = status_code

    @classmethod
    def invalid_type(cls) -> "ValidationError":
        return cls(
            "Only image files (JPEG, PNG, GIF, WebP) are allowed!",
            code="INVALID_FILE_TYPE",
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
        )

    @classmethod
    def too_large(cls) -> "ValidationError":
        return cls(
            "File too large",
            code="LIMIT_FILE_SIZE",
            status_code=413,
        )


class StorageError(UploadError):
    """The object store rejected or failed the put-object call."""

    def __init__(self, message: Optional[str], code: Optional[str]) -> None:
        super().__init__(message or "Upload failed", code or "UNKNOWN_ERROR")


class MethodNotAllowed(UploadError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED

    def __init__(self, method: str) -> None:
        super().__init__(f"Method '{method}' Not Allowed")
