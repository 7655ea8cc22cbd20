#config.py
from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration, read from the environment and an optional .env file."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, populate_by_name=True)

    # Service
    APP_NAME: str = "Gallery CMS API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    DOCS_ENABLED: bool = True
    BASE_URL: str = "http://localhost:8000"
    DATABASE_URL: str = "sqlite:///./gallery.db"

    # Admin session
    SECRET_KEY: str = Field(default="change-me-in-prod", alias="JWT_SECRET_KEY")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    SESSION_COOKIE_NAME: str = "access_token"
    SESSION_COOKIE_SECURE: bool = False
    # only read by seed_admin.py
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin123"

    # Comma-separated; CORS_ORIGINS is accepted as an alias
    ALLOWED_ORIGINS: str = Field(default="*", validation_alias=AliasChoices("ALLOWED_ORIGINS", "CORS_ORIGINS"))

    # Upload acceptance
    MAX_FILE_SIZE: int = 10 * 1024 * 1024
    ALLOWED_IMAGE_TYPES: List[str] = ["image/jpeg", "image/jpg", "image/png", "image/webp"]

    # Every stored image is normalized to these
    IMAGE_MAX_WIDTH: int = 1200
    IMAGE_MAX_HEIGHT: int = 1200
    IMAGE_QUALITY: int = Field(default=80, ge=1, le=100)
    IMAGE_FORMAT: str = "jpeg"

    # Object storage: "local" serves files from UPLOAD_DIR, "s3" writes to a bucket
    STORAGE_BACKEND: str = "local"
    STORAGE_KEY_NAMESPACE: str = "artworks"
    UPLOAD_DIR: str = "uploads"
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    AWS_REGION: Optional[str] = None
    AWS_S3_BUCKET_NAME: Optional[str] = None
    S3_PUBLIC_READ: bool = True

    # Middleware
    GZIP_MIN_SIZE: int = 500
    RATE_LIMIT_PER_MINUTE: int = 120
    UPLOAD_RATE_LIMIT_PER_MINUTE: int = 30

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @field_validator("IMAGE_FORMAT", "STORAGE_BACKEND")
    @classmethod
    def _lowercase(cls, value: str) -> str:
        return value.strip().lower()

    @property
    def allowed_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @property
    def max_request_size(self) -> int:
        # room for one file plus multipart framing and form fields
        return self.MAX_FILE_SIZE * 2


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings: Settings = get_settings()
