from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class UploadedFile:
    original_name: str
    mime_type: str
    content: bytes

    @property
    def size_bytes(self) -> int:
        return len(self.content)


class UploadResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    file_name: str = Field(..., alias="fileName")
    file_size: int = Field(..., ge=0, alias="fileSize")
    mime_type: str = Field(..., alias="mimeType")
