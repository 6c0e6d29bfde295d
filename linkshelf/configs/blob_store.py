"""
Blob store bucket configuration.

Settings for the S3 bucket holding raw fetched content.

Dependencies: pydantic_settings
System role: S3 content bucket configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BlobStoreSettings(BaseSettings):
    """Settings for S3 content bucket operations."""

    model_config = SettingsConfigDict(
        env_prefix="S3_CONTENT_",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="linkshelf-dev-content",
        description="S3 bucket for raw link content",
    )
    region: str = Field(
        default="ap-southeast-2",
        description="AWS region for S3 bucket",
    )
    key_prefix: str = Field(
        default="content",
        description="Key prefix for stored content (content/<id>.<ext>)",
    )
