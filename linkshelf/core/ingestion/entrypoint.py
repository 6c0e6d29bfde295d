"""
Link ingestion orchestrator.

Coordinates fetch, summarize/chunk, embed, vector insert, blob put and
metadata save for one URL. The three stores share no transaction: each step
runs inside a StepLedger stage and a failure aborts the remaining steps,
leaving earlier writes in place and listed on the raised error.

Dependencies: All task protocols, configs, linkshelf.core.saga
System role: Pipeline orchestration (coordinates only)
"""

import asyncio
import logging
import time
import uuid
from datetime import datetime, timezone

from linkshelf.boundary.vdb.vector_schemas import VectorMetadata, build_vector_id
from linkshelf.core.exceptions import (
    DocumentNotFoundError,
    DuplicateDocumentError,
    EmbeddingError,
    ProcessingError,
)
from linkshelf.core.ingestion.bucket_paths import build_bucket_path
from linkshelf.core.ingestion.configs import (
    DuplicateUrlPolicy,
    IngestionSettings,
    get_ingestion_settings,
)
from linkshelf.core.interfaces import (
    BlobStore,
    ContentFetcher,
    Embedder,
    MetadataStore,
    Summarizer,
    VectorStore,
)
from linkshelf.core.saga import Stage, StepLedger
from linkshelf.models.document import DocumentRecord

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """Orchestrate link ingestion: fetch -> summarize -> embed -> vectors -> blob -> metadata."""

    def __init__(
        self,
        metadata_store: MetadataStore,
        blob_store: BlobStore,
        vector_store: VectorStore,
        fetcher: ContentFetcher,
        summarizer: Summarizer,
        embedder: Embedder,
        settings: IngestionSettings | None = None,
        key_prefix: str = "content",
    ) -> None:
        """
        Initialize pipeline with its collaborators.

        Args:
            metadata_store: Document record store
            blob_store: Raw content store
            vector_store: Chunk embedding index
            fetcher: Content downloader
            summarizer: Summarizer/chunker
            embedder: Chunk embedder
            settings: Ingestion settings (uses defaults if None)
            key_prefix: Blob key prefix for raw content
        """
        self._metadata_store = metadata_store
        self._blob_store = blob_store
        self._vector_store = vector_store
        self._fetcher = fetcher
        self._summarizer = summarizer
        self._embedder = embedder
        self._settings = settings or get_ingestion_settings()
        self._key_prefix = key_prefix

    async def ingest(self, url: str) -> DocumentRecord:
        """
        Ingest a URL into the three stores.

        Args:
            url: Link URL (validated by the caller)

        Returns:
            DocumentRecord: The persisted record (or, under the keep_existing
            duplicate policy, the record that won a concurrent ingestion)

        Raises:
            FetchError: Content could not be downloaded
            ProcessingError: Summarizing/chunking failed or produced no chunks
            EmbeddingError: A chunk could not be embedded
            StoreError: A store write failed
            DuplicateDocumentError: Another request saved the URL first (reject policy)
        """
        start_time = time.perf_counter()
        document_id = str(uuid.uuid4())
        created_at = datetime.now(timezone.utc)
        ledger = StepLedger("ingest", subject=url)

        with ledger.stage(Stage.FETCH):
            content, content_type = await self._fetcher.fetch(url)
        bucket_path = build_bucket_path(content_type, document_id, prefix=self._key_prefix)

        with ledger.stage(Stage.SUMMARIZE):
            processed = await self._summarizer.process(content, content_type)
            if not processed.chunks:
                raise ProcessingError(
                    "Summarizer returned no chunks",
                    content_type=content_type,
                )

        with ledger.stage(Stage.EMBED):
            embeddings = await self._embed_chunks(processed.chunks)

        for chunk_id, vector in enumerate(embeddings):
            vector_id = build_vector_id(document_id, chunk_id)
            with ledger.stage(Stage.VECTOR_INSERT):
                await self._vector_store.insert(
                    vector_id,
                    VectorMetadata(document_id=document_id, chunk_id=chunk_id),
                    vector,
                )
            ledger.complete(Stage.VECTOR_INSERT, vector_id, compensation="delete vector")

        with ledger.stage(Stage.BLOB_PUT):
            await self._blob_store.put(bucket_path, content, content_type)
        ledger.complete(Stage.BLOB_PUT, bucket_path, compensation="delete blob")

        record = DocumentRecord(
            id=document_id,
            url=url,
            created_at=created_at,
            bucket_path=bucket_path,
            content_type=content_type,
            size=len(content),
            title=processed.title,
            summary=processed.summary,
            chunk_count=len(processed.chunks),
        )
        try:
            with ledger.stage(Stage.METADATA_SAVE):
                await self._metadata_store.save(record)
        except DuplicateDocumentError as e:
            if self._settings.duplicate_url_policy is DuplicateUrlPolicy.REJECT:
                raise
            with ledger.stage(Stage.METADATA_SAVE):
                return await self._keep_existing(url, record, e)
        ledger.complete(Stage.METADATA_SAVE, document_id, compensation="delete metadata record")

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{__name__}:ingest - Ingested {record.chunk_count} chunks in {elapsed_ms:.0f}ms",
            extra={"url": url, "document_id": document_id, "bucket_path": bucket_path},
        )
        return record

    async def _embed_chunks(self, chunks: list[str]) -> list[list[float]]:
        """
        Embed every chunk, result i belonging to chunk i.

        Sequential when embedding_concurrency is 1; otherwise a bounded
        fan-out where each task writes into its own slot. If one task fails
        the others are cancelled before the error propagates.
        """
        slots: list[list[float] | None] = [None] * len(chunks)
        concurrency = self._settings.embedding_concurrency

        if concurrency <= 1:
            for index, text in enumerate(chunks):
                slots[index] = await self._embedder.embed(text)
        else:
            semaphore = asyncio.Semaphore(concurrency)

            async def embed_into(index: int, text: str) -> None:
                async with semaphore:
                    slots[index] = await self._embedder.embed(text)

            tasks = [asyncio.create_task(embed_into(i, text)) for i, text in enumerate(chunks)]
            try:
                await asyncio.gather(*tasks)
            except BaseException:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

        missing = [index for index, vector in enumerate(slots) if vector is None]
        if missing:
            raise EmbeddingError(
                f"Got {len(chunks) - len(missing)} embeddings for {len(chunks)} chunks",
                details={"missing_chunk_ids": missing},
            )
        return slots  # type: ignore[return-value]

    async def _keep_existing(
        self,
        url: str,
        record: DocumentRecord,
        error: DuplicateDocumentError,
    ) -> DocumentRecord:
        """Return the record that won a concurrent ingestion of the same URL."""
        try:
            existing = await self._metadata_store.find_by_url(url)
        except DocumentNotFoundError:
            # Winner was deleted in between; nothing to fall back to
            raise error

        logger.warning(
            f"{__name__}:ingest - Lost concurrent ingestion, keeping existing record; "
            f"blob and {record.chunk_count} vectors of this attempt are orphaned",
            extra={
                "url": url,
                "document_id": existing.id,
                "orphaned_document_id": record.id,
                "orphaned_bucket_path": record.bucket_path,
            },
        )
        return existing
