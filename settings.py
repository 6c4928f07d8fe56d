"""
Application settings and logging for Brainjot API.

Values come from environment variables or a local .env file.
"""

import logging
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "brainjot-development-secret-change-me-in-production"


class Settings(BaseSettings):
    """Environment-backed settings for the API service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Database
    database_url: str = Field(default="sqlite:///./brainjot.db")

    # Auth tokens
    jwt_secret: str = Field(default=DEFAULT_JWT_SECRET)
    jwt_algorithm: str = Field(default="HS256")
    token_ttl_minutes: int = Field(default=60)

    # Uploaded media
    media_root: str = Field(default=".")
    upload_dir: str = Field(default="uploads/videos")
    placeholder_video_url: str = Field(
        default="https://test-videos.co.uk/vids/bigbuckbunny/mp4/h264/1080/Big_Buck_Bunny_1080_10s_1MB.mp4"
    )

    # Comma separated list, only used outside development
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:5173")

    @model_validator(mode="after")
    def check_jwt_secret(self) -> "Settings":
        if self.environment != "development" and self.jwt_secret == DEFAULT_JWT_SECRET:
            raise ValueError("JWT_SECRET must be set outside development")
        return self

    @property
    def allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()


def _configure_logger() -> logging.Logger:
    log = logging.getLogger("brainjot")
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s [%(name)s] %(message)s"
        ))
        log.addHandler(handler)
    log.setLevel(get_settings().log_level.upper())
    return log


logger = _configure_logger()
