"""
Link service orchestrator.

Entry point for saving, searching, listing and deleting links. Composes the
dedup resolver and the ingestion, retrieval and deletion orchestrators over
one shared set of store clients.

Dependencies: linkshelf.boundary, linkshelf.core
System role: Link management orchestration
"""

import logging
from typing import Sequence
from urllib.parse import urlsplit

from sqlalchemy.ext.asyncio import AsyncSession

from linkshelf.boundary.aws.s3_client import S3BlobStore
from linkshelf.boundary.db.document_store import DocumentStore
from linkshelf.boundary.vdb.vector_store_factory import get_vector_store
from linkshelf.configs import Settings, get_settings
from linkshelf.core.deletion.orchestrator import DeletionOrchestrator
from linkshelf.core.exceptions import ValidationError
from linkshelf.core.ingestion.configs import IngestionSettings, get_ingestion_settings
from linkshelf.core.ingestion.dedup import DedupResolver
from linkshelf.core.ingestion.entrypoint import IngestionPipeline
from linkshelf.core.ingestion.tasks import EmbeddingTask, FetchTask, SummarizingTask
from linkshelf.core.interfaces import (
    BlobStore,
    ContentFetcher,
    Embedder,
    MetadataStore,
    Summarizer,
    VectorStore,
)
from linkshelf.core.retrieval.aggregator import RetrievalAggregator
from linkshelf.models.document import DocumentRecord
from linkshelf.models.search import SearchResult
from linkshelf.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http", "https")


def validate_url(url: str) -> str:
    """
    Check that a URL is an absolute http(s) URL.

    Args:
        url: Candidate URL

    Returns:
        str: The URL with surrounding whitespace removed

    Raises:
        ValidationError: Blank, relative or non-http(s) URL
    """
    candidate = (url or "").strip()
    if not candidate:
        raise ValidationError("URL must not be empty", field="url")
    parts = urlsplit(candidate)
    if parts.scheme.lower() not in ALLOWED_SCHEMES or not parts.netloc:
        raise ValidationError(f"Not an absolute http(s) URL: {candidate}", field="url")
    return candidate


class LinkService:
    """
    Link service orchestrator.

    Collaborators are lazily built from settings unless injected.
    """

    def __init__(
        self,
        db: AsyncSession | None = None,
        metadata_store: MetadataStore | None = None,
        blob_store: BlobStore | None = None,
        vector_store: VectorStore | None = None,
        fetcher: ContentFetcher | None = None,
        summarizer: Summarizer | None = None,
        embedder: Embedder | None = None,
        settings: Settings | None = None,
        ingestion_settings: IngestionSettings | None = None,
    ) -> None:
        """
        Initialize link service.

        Args:
            db: AsyncSession for the metadata store (required unless metadata_store is given)
            metadata_store: Optional metadata store (DocumentStore over db if None)
            blob_store: Optional blob store (S3BlobStore if None)
            vector_store: Optional vector store (get_vector_store() if None)
            fetcher: Optional content fetcher (FetchTask if None)
            summarizer: Optional summarizer/chunker (SummarizingTask if None)
            embedder: Optional embedder (EmbeddingTask if None)
            settings: Application settings (get_settings() if None)
            ingestion_settings: Ingestion settings (get_ingestion_settings() if None)
        """
        if db is None and metadata_store is None:
            raise ValueError("Either db or metadata_store must be provided")

        self.db = db
        self._settings = settings or get_settings()
        self._ingestion_settings = ingestion_settings or get_ingestion_settings()
        self._metadata_store = metadata_store
        self._blob_store = blob_store
        self._vector_store = vector_store
        self._fetcher = fetcher
        self._summarizer = summarizer
        self._embedder = embedder

    @property
    def metadata_store(self) -> MetadataStore:
        if self._metadata_store is None:
            self._metadata_store = DocumentStore(self.db)
        return self._metadata_store

    @property
    def blob_store(self) -> BlobStore:
        """Lazy-load S3 client to avoid initialization cost."""
        if self._blob_store is None:
            config = self._settings.blob_store
            self._blob_store = S3BlobStore(bucket=config.bucket, region=config.region)
        return self._blob_store

    @property
    def embedder(self) -> Embedder:
        """Lazy-load embedder to avoid initialization cost."""
        if self._embedder is None:
            config = self._settings.vector_store
            self._embedder = EmbeddingTask(
                model_id=config.embedding_model,
                dimension=config.embedding_dimension,
            )
        return self._embedder

    @property
    def vector_store(self) -> VectorStore:
        """Lazy-load vector store; shares the embedding model with the embedder."""
        if self._vector_store is None:
            embeddings = getattr(self.embedder, "embeddings", None)
            self._vector_store = get_vector_store(embeddings=embeddings)
        return self._vector_store

    @property
    def fetcher(self) -> ContentFetcher:
        if self._fetcher is None:
            config = self._ingestion_settings
            self._fetcher = FetchTask(
                timeout=config.fetch_timeout_seconds,
                max_content_bytes=config.max_content_bytes,
                user_agent=config.user_agent,
            )
        return self._fetcher

    @property
    def summarizer(self) -> Summarizer:
        if self._summarizer is None:
            config = self._ingestion_settings
            self._summarizer = SummarizingTask(
                model_name=config.summarizer_model,
                chunk_size=config.chunk_size,
                chunk_overlap=config.chunk_overlap,
                summary_input_chars=config.summary_input_chars,
            )
        return self._summarizer

    async def ingest(self, url: str) -> DocumentRecord:
        """
        Save a link, or return the existing record when the URL is known.

        Args:
            url: Absolute http(s) URL

        Returns:
            DocumentRecord: Existing or newly created record

        Raises:
            ValidationError: Invalid URL
            FetchError, ProcessingError, EmbeddingError, StoreError: Ingestion failed
        """
        url = validate_url(url)
        set_correlation_id()
        try:
            logger.info(f"{__name__}:ingest - Start", extra={"url": url})

            existing = await DedupResolver(self.metadata_store).resolve(url)
            if existing is not None:
                return existing

            pipeline = IngestionPipeline(
                metadata_store=self.metadata_store,
                blob_store=self.blob_store,
                vector_store=self.vector_store,
                fetcher=self.fetcher,
                summarizer=self.summarizer,
                embedder=self.embedder,
                settings=self._ingestion_settings,
                key_prefix=self._settings.blob_store.key_prefix,
            )
            record = await pipeline.ingest(url)
            logger.info(
                f"{__name__}:ingest - Done",
                extra={"url": url, "document_id": record.id},
            )
            return record
        finally:
            clear_correlation_id()

    async def search(self, query: str) -> list[SearchResult]:
        """
        Search saved links.

        Args:
            query: Free-text query

        Returns:
            list[SearchResult]: Ranked documents with matching chunk ids

        Raises:
            ValidationError: Blank query
            StoreError: Vector query or metadata lookup failed
        """
        if not query or not query.strip():
            raise ValidationError("Query must not be empty", field="query")

        set_correlation_id()
        try:
            logger.info(f"{__name__}:search - Start", extra={"query_length": len(query)})
            aggregator = RetrievalAggregator(
                vector_store=self.vector_store,
                metadata_store=self.metadata_store,
                settings=self._settings.retrieval,
            )
            results = await aggregator.search(query.strip())
            logger.info(f"{__name__}:search - Done", extra={"result_count": len(results)})
            return results
        finally:
            clear_correlation_id()

    async def delete(self, url: str) -> DocumentRecord:
        """
        Delete a saved link from all stores.

        Args:
            url: URL of the saved link

        Returns:
            DocumentRecord: The deleted record

        Raises:
            ValidationError: Invalid URL
            DocumentNotFoundError: URL was never saved
            StoreError: A store delete failed
        """
        url = validate_url(url)
        set_correlation_id()
        try:
            logger.info(f"{__name__}:delete - Start", extra={"url": url})
            orchestrator = DeletionOrchestrator(
                metadata_store=self.metadata_store,
                blob_store=self.blob_store,
                vector_store=self.vector_store,
            )
            record = await orchestrator.delete(url)
            logger.info(f"{__name__}:delete - Done", extra={"url": url, "document_id": record.id})
            return record
        finally:
            clear_correlation_id()

    async def get_document(self, url: str) -> DocumentRecord:
        """
        Look up a saved link without ingesting it.

        Raises:
            ValidationError: Invalid URL
            DocumentNotFoundError: URL was never saved
        """
        url = validate_url(url)
        return await self.metadata_store.find_by_url(url)

    async def list_documents(self, limit: int = 20, offset: int = 0) -> Sequence[DocumentRecord]:
        """
        List saved links, newest first.

        Raises:
            ValidationError: Negative offset or non-positive limit
        """
        if limit < 1:
            raise ValidationError("limit must be at least 1", field="limit")
        if offset < 0:
            raise ValidationError("offset must not be negative", field="offset")
        return await self.metadata_store.list_recent(limit=limit, offset=offset)
