"""
Vector database schemas.

Pydantic models for vector operations (metadata, matches).
Used for type-safe vector store interactions.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from pydantic import BaseModel, Field


def build_vector_id(document_id: str, chunk_id: int) -> str:
    """
    Build the deterministic vector id for a chunk.

    The id encodes chunk position, so it is the same regardless of the
    order in which embeddings were produced.

    Args:
        document_id: Owning document id
        chunk_id: Zero-based chunk position

    Returns:
        str: "{document_id}-{chunk_id}"
    """
    return f"{document_id}-{chunk_id}"


def document_vector_ids(document_id: str, count: int) -> list[str]:
    """All vector ids owned by a document with `count` chunks."""
    return [build_vector_id(document_id, i) for i in range(count)]


class VectorMetadata(BaseModel):
    """
    Metadata attached to each vector.

    Note: document_id is not a foreign key anywhere; the orchestrators are
    the only guardians of the link between a vector and its document.
    """

    document_id: str = Field(description="Owning document id")
    chunk_id: int = Field(ge=0, description="Zero-based chunk position within the document")


class VectorMatch(BaseModel):
    """Single result from vector search."""

    vector_id: str = Field(description="Vector identifier")
    score: float = Field(description="Similarity score, higher is more similar")
    metadata: VectorMetadata = Field(description="Chunk metadata")
