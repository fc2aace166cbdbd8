"""Application configuration using Pydantic Settings.

This module defines all application configuration loaded from environment variables.
Configuration is validated at startup and provides type-safe access throughout the app.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# 50 MB, the largest JSON body accepted on /upload
DEFAULT_MAX_BODY_SIZE = 50 * 1024 * 1024

# Resumable upload chunk size (1MB)
DEFAULT_CHUNK_SIZE = 1024 * 1024


class Config(BaseSettings):
    """Application configuration.

    All configuration is loaded from environment variables or .env file.
    Validation happens automatically via Pydantic.

    Example:
        >>> config = Config()
        >>> print(config.port)
        3000
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================
    # Application Settings
    # ============================================
    app_name: str = Field(default="yt-upload-relay", description="Application name")
    app_env: Literal["development", "staging", "production"] = Field(
        default="development", description="Application environment"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )

    # ============================================
    # API Server
    # ============================================
    host: str = Field(default="0.0.0.0", description="API server host")
    port: int = Field(default=3000, description="API server port", ge=1, le=65535)
    max_body_size: int = Field(
        default=DEFAULT_MAX_BODY_SIZE, description="Max JSON body size in bytes", ge=1
    )

    # ============================================
    # YouTube Upload
    # ============================================
    upload_chunk_size: int = Field(
        default=DEFAULT_CHUNK_SIZE,
        description="Resumable upload chunk size in bytes (-1 sends the file in one request)",
    )
    upload_timeout: float | None = Field(
        default=None, description="Socket timeout in seconds for YouTube API calls", gt=0
    )
    upload_mimetype: str = Field(default="video/*", description="MIME type sent with the media")

    @field_validator("upload_chunk_size")
    @classmethod
    def validate_chunk_size(cls, v: int) -> int:
        """Ensure chunk size is positive or the single-request sentinel.

        Args:
            v: Chunk size in bytes

        Returns:
            Validated chunk size

        Raises:
            ValueError: If chunk size is zero or below -1
        """
        if v == 0 or v < -1:
            raise ValueError("upload_chunk_size must be positive or -1")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode.

        Returns:
            True if app_env is 'development'
        """
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if app_env is 'production'
        """
        return self.app_env == "production"


# =============================================================================
# Singleton accessor
# =============================================================================

_config: Config | None = None


def get_config() -> Config:
    """Get the global Config singleton.

    This function provides a lazy-loaded singleton instance of Config.
    Use this instead of importing `container.config()` to avoid circular imports.

    Returns:
        The global Config instance
    """
    global _config
    if _config is None:
        _config = Config()
    return _config
