from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List

from pydantic import field_validator

class Settings(BaseSettings):
    APP_NAME: str = "Image Upload Service"
    VERSION: str = "0.1.0"

    # Object storage (no defaults: the app refuses to start without them)
    AWS_REGION: str
    AWS_ACCESS_KEY_ID: str
    AWS_SECRET_ACCESS_KEY: str
    AWS_BUCKET_NAME: str
    S3_ENDPOINT: str = "s3.amazonaws.com"
    S3_SECURE: bool = True
    PUBLIC_URL_TEMPLATE: str = "https://{bucket}.s3.{region}.amazonaws.com/{key}"
    KEY_PREFIX: str = "uploads"

    # Upload limits
    FILE_FIELD: str = "file"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024
    MULTIPART_OVERHEAD_BYTES: int = 64 * 1024
    ALLOWED_MIME_TYPES: List[str] = [
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "image/webp",
    ]

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def MAX_REQUEST_BYTES(self) -> int:
        return self.MAX_UPLOAD_BYTES + self.MULTIPART_OVERHEAD_BYTES

    class Config:
        env_file = ".env"

@lru_cache()
def get_settings():
    return Settings()
