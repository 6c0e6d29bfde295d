"""
Retrieval configuration settings.

Design constants of the search aggregation: how many chunk candidates are
pulled from the vector index and how many documents are returned.

Dependencies: pydantic, pydantic_settings
System role: Search ranking configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetrievalSettings(BaseSettings):
    """Search aggregation limits."""

    model_config = SettingsConfigDict(
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    candidate_pool_size: int = Field(
        default=20,
        ge=1,
        description="Number of chunk matches requested from the vector store",
    )
    max_documents: int = Field(
        default=5,
        ge=1,
        description="Maximum number of documents returned per search",
    )
