"""Configuration management using pydantic-settings."""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Defaults for the path-based helpers and logging, loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REVLINES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Reader Configuration
    buffer_size: int = Field(default=4096, gt=0, description="Bytes fetched per backward read")
    encoding: str = Field(default="utf-8", description="Text encoding of read files")
    errors: str = Field(default="strict", description="Decoding error handler (strict, replace, ignore, ...)")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_file: Optional[str] = Field(default=None, description="Log file path")


# Global settings instance
settings = Settings()
