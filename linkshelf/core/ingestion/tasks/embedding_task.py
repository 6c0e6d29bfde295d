"""
Chunk embedding task using Google Gemini embeddings.

Generates one fixed-dimension vector per chunk text.

Dependencies: langchain_core, linkshelf.core.ingestion.embeddings_wrapper
System role: Third stage of link ingestion pipeline
"""

import asyncio

from langchain_core.embeddings import Embeddings

from linkshelf.core.exceptions import EmbeddingError
from linkshelf.core.ingestion.embeddings_wrapper import FixedDimensionEmbeddings


class EmbeddingTask:
    """Generate embeddings with a fixed output dimension."""

    def __init__(
        self,
        model_id: str = "models/gemini-embedding-001",
        dimension: int = 768,
        embeddings: Embeddings | None = None,
    ) -> None:
        """
        Initialize embedding task.

        Args:
            model_id: Google embedding model ID
            dimension: Expected vector dimension
            embeddings: Optional embeddings model (created from model_id if None)

        Raises:
            ValueError: When model_id is empty
        """
        if not model_id:
            raise ValueError("model_id cannot be empty")

        self._dimension = dimension
        self._embeddings = embeddings or FixedDimensionEmbeddings(
            model=model_id,
            output_dimensionality=dimension,
        )

    @property
    def embeddings(self) -> Embeddings:
        """Underlying langchain embeddings model (shared with vector stores)."""
        return self._embeddings

    async def embed(self, text: str) -> list[float]:
        """
        Embed a single chunk.

        Args:
            text: Chunk text

        Returns:
            list[float]: Embedding vector

        Raises:
            EmbeddingError: When the model call fails or returns the wrong dimension
        """
        try:
            vector = await asyncio.to_thread(self._embeddings.embed_query, text)
        except Exception as e:
            raise EmbeddingError(f"Failed to generate embedding: {e}") from e

        if len(vector) != self._dimension:
            raise EmbeddingError(
                f"Embedding has dimension {len(vector)}, expected {self._dimension}",
                details={"dimension": len(vector), "expected": self._dimension},
            )
        return list(vector)
