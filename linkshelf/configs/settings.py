"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from linkshelf.configs.base import BaseSettings
from linkshelf.configs.blob_store import BlobStoreSettings
from linkshelf.configs.database import DatabaseSettings
from linkshelf.configs.retrieval import RetrievalSettings
from linkshelf.configs.vector_store import VectorStoreSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    blob_store: BlobStoreSettings = Field(default_factory=BlobStoreSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for reuse across services.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from linkshelf.configs import get_settings
        settings = get_settings()
    """
    return Settings()
