"""
Gemini embeddings pinned to the vector index dimension.

GoogleGenerativeAIEmbeddings accepts output_dimensionality only per call.
Chunks (EmbeddingTask) and search queries (S3VectorsStore,
FAISSVectorsStore) are both embedded through embed_query, so pinning that
one method keeps every vector the size of the index.

Dependencies: langchain_google_genai
System role: Embedding dimension consistency for the vector index
"""

import logging

from dotenv import load_dotenv
from langchain_google_genai import GoogleGenerativeAIEmbeddings

load_dotenv()
logger = logging.getLogger(__name__)


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """Gemini embeddings whose query vectors always have the configured size."""

    _output_dimensionality: int = 768

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 768,
        **kwargs,
    ) -> None:
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - model={model}, dimension={output_dimensionality}"
        )

    def embed_query(
        self,
        text: str,
        task_type: str | None = None,
        title: str | None = None,
        output_dimensionality: int | None = None,
    ) -> list[float]:
        """Embed one text at the pinned dimension unless the caller overrides it."""
        return super().embed_query(
            text,
            task_type=task_type,
            title=title,
            output_dimensionality=output_dimensionality or self._output_dimensionality,
        )
