"""
Shared settings base.

Reads `.env` and the process environment. Fields defined here are
available on every settings class derived from it.

Dependencies: pydantic_settings
System role: Foundation for the top-level configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Settings loaded from `.env` with case-insensitive variable names."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level passed to configure_logging (DEBUG, INFO, WARNING, ...)",
    )
