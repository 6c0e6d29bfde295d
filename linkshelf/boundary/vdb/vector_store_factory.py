"""
Vector store factory for selecting between FAISS (dev) and S3Vectors (prod).

Depends on VECTOR_STORE_STORE_TYPE environment variable.
Provides consistent interface regardless of underlying implementation.

Dependencies: linkshelf.boundary.vdb, linkshelf.configs
System role: Vector store instantiation and selection
"""

import logging

from langchain_core.embeddings import Embeddings

from linkshelf.boundary.vdb.faiss_vectors_store import FAISSVectorsStore
from linkshelf.boundary.vdb.s3_vectors_store import S3VectorsStore
from linkshelf.configs import get_settings
from linkshelf.core.ingestion.embeddings_wrapper import FixedDimensionEmbeddings

logger = logging.getLogger(__name__)


def get_vector_store(embeddings: Embeddings | None = None) -> FAISSVectorsStore | S3VectorsStore:
    """
    Factory function to get vector store based on environment configuration.

    Args:
        embeddings: Embeddings model for query text (built from settings if None)

    Returns:
        FAISSVectorsStore or S3VectorsStore: Configured vector store instance

    Raises:
        ValueError: If the configured store type is invalid
    """
    config = get_settings().vector_store
    store_type = config.store_type.lower()

    if store_type not in ("faiss", "s3"):
        raise ValueError(
            f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. "
            f"Must be 'faiss' (dev) or 's3' (production)."
        )

    embeddings = embeddings or FixedDimensionEmbeddings(
        model=config.embedding_model,
        output_dimensionality=config.embedding_dimension,
    )

    if store_type == "faiss":
        logger.info(f"{__name__}:get_vector_store - Creating FAISS vector store (local dev mode)")
        return FAISSVectorsStore(
            embeddings=embeddings,
            index_dir=config.faiss_index_dir,
            index_name=config.index_name,
            dimension=config.embedding_dimension,
        )

    logger.info(f"{__name__}:get_vector_store - Creating S3 Vectors store (production mode)")
    return S3VectorsStore(
        embeddings=embeddings,
        vectors_bucket=config.vectors_bucket,
        index_name=config.index_name,
        region=config.aws_region,
    )
