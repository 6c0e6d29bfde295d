"""
Vector database boundary layer.

Provides vector store clients for chunk storage and retrieval.
- S3VectorsStore: Production S3 Vectors client (boto3)
- FAISSVectorsStore: Local FAISS index (langchain_community)
- get_vector_store(): picks one from settings (vector_store_factory)

Dependencies: boto3, faiss-cpu, langchain_community
System role: Vector store adapter for link retrieval
"""

from linkshelf.boundary.vdb.vector_schemas import (
    VectorMatch,
    VectorMetadata,
    build_vector_id,
    document_vector_ids,
)

__all__ = [
    "VectorMatch",
    "VectorMetadata",
    "build_vector_id",
    "document_vector_ids",
]
