"""
FAISS vector store for local development.

Provides same interface as S3VectorsStore but uses a local FAISS index
(inner product, persisted to disk after every write). Uses Google Gemini
embeddings for consistency with production.

Dependencies: faiss-cpu, langchain_community
System role: Local vector store for development
"""

import asyncio
import logging
from pathlib import Path

import faiss
from langchain_community.docstore.in_memory import InMemoryDocstore
from langchain_community.vectorstores import FAISS
from langchain_community.vectorstores.utils import DistanceStrategy
from langchain_core.embeddings import Embeddings

from linkshelf.boundary.vdb.vector_schemas import (
    VectorMatch,
    VectorMetadata,
    document_vector_ids,
)

logger = logging.getLogger(__name__)


class FAISSVectorsStore:
    """
    FAISS vector store for local development.

    Wraps LangChain FAISS keyed by vector id. The stored page content is the
    vector id itself; chunk text lives only in the blob store.
    """

    def __init__(
        self,
        embeddings: Embeddings,
        index_dir: str = "/tmp/.linkshelf_faiss",
        index_name: str = "chunks",
        dimension: int = 768,
    ) -> None:
        """
        Initialize FAISS vector store.

        Args:
            embeddings: Embeddings model used for query text
            index_dir: Directory where the index is persisted
            index_name: Local index name
            dimension: Vector dimension for a new index
        """
        self._embeddings = embeddings
        self._index_dir = Path(index_dir)
        self._index_name = index_name
        self._dimension = dimension

        # Create index directory if it doesn't exist
        self._index_dir.mkdir(parents=True, exist_ok=True)
        self._vector_store = self._load_or_create_index()

    def _load_or_create_index(self) -> FAISS:
        """Load existing FAISS index or create an empty one."""
        if (self._index_dir / f"{self._index_name}.faiss").exists():
            logger.info(f"{__name__}:_load_or_create_index - Loading index from {self._index_dir}")
            return FAISS.load_local(
                str(self._index_dir),
                self._embeddings,
                index_name=self._index_name,
                allow_dangerous_deserialization=True,
                distance_strategy=DistanceStrategy.MAX_INNER_PRODUCT,
            )

        logger.info(
            f"{__name__}:_load_or_create_index - Creating new FAISS index (dimension={self._dimension})"
        )
        return FAISS(
            embedding_function=self._embeddings,
            index=faiss.IndexFlatIP(self._dimension),
            docstore=InMemoryDocstore(),
            index_to_docstore_id={},
            distance_strategy=DistanceStrategy.MAX_INNER_PRODUCT,
        )

    def _save(self) -> None:
        self._vector_store.save_local(str(self._index_dir), index_name=self._index_name)

    def _stored_ids(self) -> set[str]:
        return set(self._vector_store.index_to_docstore_id.values())

    def _insert_sync(self, vector_id: str, metadata: VectorMetadata, vector: list[float]) -> None:
        self._vector_store.add_embeddings(
            text_embeddings=[(vector_id, vector)],
            metadatas=[metadata.model_dump()],
            ids=[vector_id],
        )
        self._save()

    async def insert(
        self,
        vector_id: str,
        metadata: VectorMetadata,
        vector: list[float],
    ) -> None:
        """Add one chunk vector and persist the index."""
        await asyncio.to_thread(self._insert_sync, vector_id, metadata, vector)
        logger.debug(f"{__name__}:insert - Added vector {vector_id}")

    async def query(self, query_text: str, k: int) -> list[VectorMatch]:
        """
        Similarity search for query text.

        Returns:
            list[VectorMatch]: Matches, highest inner product first
        """
        results = await asyncio.to_thread(
            self._vector_store.similarity_search_with_score,
            query_text,
            k,
        )
        matches = [
            VectorMatch(
                vector_id=doc.page_content,
                score=float(score),
                metadata=VectorMetadata(**(doc.metadata or {})),
            )
            for doc, score in results
        ]
        logger.info(f"{__name__}:query - Found {len(matches)} results", extra={"k": k})
        return matches

    def _delete_sync(self, document_id: str, count: int) -> int:
        expected = document_vector_ids(document_id, count)
        stored = self._stored_ids()
        present = [vector_id for vector_id in expected if vector_id in stored]
        if present:
            self._vector_store.delete(ids=present)
            self._save()
        return len(present)

    async def delete_by_document(self, document_id: str, count: int) -> None:
        """Delete the vectors "{document_id}-0" .. "{document_id}-{count - 1}" that exist."""
        deleted = await asyncio.to_thread(self._delete_sync, document_id, count)
        if deleted < count:
            logger.warning(
                f"{__name__}:delete_by_document - Expected {count} vectors, found {deleted}",
                extra={"document_id": document_id},
            )
        else:
            logger.info(
                f"{__name__}:delete_by_document - Deleted document vectors",
                extra={"document_id": document_id, "chunk_count": deleted},
            )
