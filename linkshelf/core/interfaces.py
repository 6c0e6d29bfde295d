"""
Collaborator contracts for the orchestrators.

The orchestrators only see these protocols; the concrete S3, S3 Vectors,
FAISS, SQLAlchemy, httpx and Gemini adapters live in linkshelf.boundary and
linkshelf.core.ingestion.tasks.

Dependencies: typing, linkshelf.models, linkshelf.boundary.vdb.vector_schemas
System role: Ports between core orchestration and external systems
"""

from typing import Protocol, Sequence

from linkshelf.boundary.vdb.vector_schemas import VectorMatch, VectorMetadata
from linkshelf.core.ingestion.models import ProcessedContent
from linkshelf.models.document import DocumentRecord


class MetadataStore(Protocol):
    """CRUD over document records keyed by id and by URL."""

    async def find_by_url(self, url: str) -> DocumentRecord:
        """Return the record for `url` or raise DocumentNotFoundError."""
        ...

    async def save(self, record: DocumentRecord) -> None:
        """Persist a new record; DuplicateDocumentError if the URL is taken."""
        ...

    async def get_by_id(self, document_id: str) -> DocumentRecord | None:
        """Return the record with `document_id`, or None when absent."""
        ...

    async def delete_by_url(self, url: str) -> DocumentRecord:
        """Delete and return the record for `url` or raise DocumentNotFoundError."""
        ...

    async def list_recent(self, limit: int, offset: int = 0) -> Sequence[DocumentRecord]:
        """Return records newest first."""
        ...


class BlobStore(Protocol):
    """Path-addressed byte storage."""

    async def put(self, path: str, content: bytes, content_type: str) -> None: ...

    async def delete(self, path: str) -> None: ...


class VectorStore(Protocol):
    """Chunk embedding index."""

    async def insert(
        self,
        vector_id: str,
        metadata: VectorMetadata,
        vector: list[float],
    ) -> None: ...

    async def query(self, query_text: str, k: int) -> list[VectorMatch]:
        """Top `k` matches for `query_text`, highest score first."""
        ...

    async def delete_by_document(self, document_id: str, count: int) -> None:
        """Delete vectors "{document_id}-0" .. "{document_id}-{count - 1}"."""
        ...


class ContentFetcher(Protocol):
    async def fetch(self, url: str) -> tuple[bytes, str]:
        """Return (content, content_type) or raise FetchError."""
        ...


class Summarizer(Protocol):
    async def process(self, content: bytes, content_type: str) -> ProcessedContent:
        """Return title, summary and ordered chunks or raise ProcessingError."""
        ...


class Embedder(Protocol):
    async def embed(self, text: str) -> list[float]:
        """Return a fixed-dimension vector or raise EmbeddingError."""
        ...
