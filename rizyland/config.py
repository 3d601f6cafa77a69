"""Configuration for the RIZY LAND API."""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Service configuration.

    All settings can be overridden via environment variables or a ``.env``
    file in the working directory.
    """

    APP_NAME: str = Field(default="RIZY LAND API")
    API_PREFIX: str = Field(default="/api")
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )
    LOG_JSON: bool = Field(default=False)

    # Load the fixture catalogue when the app creates its own store
    SEED_DATA: bool = Field(default=True)

    # Image uploads
    PUBLIC_DIR: str = Field(default="client/public")
    PUBLIC_URL_PREFIX: str = Field(default="/")
    UPLOAD_TEMP_DIR: str = Field(default="temp_uploads")
    MAX_UPLOAD_BYTES: int = Field(default=5 * 1024 * 1024, ge=1)
    IMAGEMAGICK_BINARY: str = Field(default="convert")
    IMAGE_QUALITY: int = Field(default=80, ge=1, le=100)

    CORS_ORIGINS: str = Field(default="*")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins string into list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
