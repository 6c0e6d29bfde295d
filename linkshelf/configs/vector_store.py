"""
Vector store configuration settings.

Manages S3 Vectors (production) and FAISS (local development) configuration,
including the embedding model used for chunk and query vectors.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for chunk retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (FAISS for dev, S3 Vectors for prod)."""

    model_config = SettingsConfigDict(
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="s3",
        description="Vector store type: 'faiss' for local dev, 's3' for production",
    )
    aws_region: str = Field(default="ap-southeast-2", description="AWS region for S3 Vectors")
    vectors_bucket: str = Field(
        default="linkshelf-dev-vectors",
        description="S3 Vectors bucket name",
    )
    index_name: str = Field(default="chunks", description="Vector index name")

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID (gemini-embedding-001 supports 768-dim output)",
    )
    embedding_dimension: int = Field(
        default=768,
        description="Embedding vector dimension (must match the S3 Vectors index)",
    )

    faiss_index_dir: str = Field(
        default="/tmp/.linkshelf_faiss",
        description="Directory where the local FAISS index is persisted",
    )
