"""
Configuration settings for the link ingestion pipeline.

Provides environment-based configuration for fetching, summarizing,
chunking and embedding.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

import enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DuplicateUrlPolicy(str, enum.Enum):
    """
    What ingestion does when the metadata store rejects a second record for a URL.

    Two first-time requests for the same URL can both pass the dedup check;
    the metadata store lets only one record in and the loser gets
    DuplicateDocumentError at its final write.

    REJECT: surface DuplicateDocumentError to the caller
    KEEP_EXISTING: return the record that won the race
    """

    REJECT = "reject"
    KEEP_EXISTING = "keep_existing"


class IngestionSettings(BaseSettings):
    """Settings for the link ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="INGESTION_",
        case_sensitive=False,
        extra="ignore",
    )

    # Fetching
    fetch_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for downloading link content",
    )
    max_content_bytes: int = Field(
        default=20 * 1024 * 1024,
        description="Largest response body accepted by the fetcher",
    )
    user_agent: str = Field(
        default="LinkShelf/0.1 (+https://github.com/linkshelf)",
        description="User-Agent header sent when fetching links",
    )

    # Summarizing
    summarizer_model: str = Field(
        default="gemini-2.5-flash",
        description="Google Gemini chat model used for title and summary",
    )
    summary_input_chars: int = Field(
        default=30000,
        description="Characters of extracted text sent to the summarizer",
    )

    # Chunking
    chunk_size: int = Field(
        default=1000,
        description="Maximum chunk size in characters",
    )
    chunk_overlap: int = Field(
        default=200,
        description="Overlap between consecutive chunks",
    )

    # Embedding
    embedding_concurrency: int = Field(
        default=1,
        ge=1,
        description="Concurrent embedding calls per document (1 = sequential)",
    )

    duplicate_url_policy: DuplicateUrlPolicy = Field(
        default=DuplicateUrlPolicy.REJECT,
        description="Handling of a URL ingested concurrently by two requests",
    )


@lru_cache
def get_ingestion_settings() -> IngestionSettings:
    """
    Get cached ingestion settings instance.

    Returns:
        IngestionSettings: Singleton settings loaded from environment
    """
    return IngestionSettings()
