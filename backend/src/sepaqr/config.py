"""
Application configuration loaded from environment variables.

All configuration is validated at startup to fail fast on misconfiguration.
The domain package never reads these settings; services receive them
as constructor arguments.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with validation.

    All settings are loaded from environment variables with the same name.
    Use .env file for local development.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Validation
    strict_iban: bool = Field(
        default=False,
        description="Also verify IBAN country length and mod-97 checksum",
    )

    # Payload
    epc_version: Literal["001", "002"] = Field(
        default="002",
        description="EPC QR payload version (001 requires a BIC)",
    )

    # Rendering
    qr_size: int = Field(
        default=250,
        ge=64,
        le=2048,
        description="Default QR image width and height in pixels",
    )
    qr_error_correction: Literal["L", "M", "Q", "H"] = Field(
        default="M",
        description="QR error correction level (EPC guidelines require M)",
    )

    # Server
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with detailed error messages",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once at startup and cached for subsequent calls.
    """
    return Settings()
