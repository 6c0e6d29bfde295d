"""
Test suite for IngestionPipeline.

Tests step ordering, the chunk/vector count invariant, deterministic vector
ids, failure staging with the step ledger, and the duplicate URL policy.
Uses mocked stores and collaborators.

System role: Verification of the ingestion orchestrator
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from linkshelf.boundary.vdb.vector_schemas import VectorMetadata
from linkshelf.core.exceptions import (
    DuplicateDocumentError,
    EmbeddingError,
    FetchError,
    ProcessingError,
    StoreError,
)
from linkshelf.core.ingestion.configs import DuplicateUrlPolicy, IngestionSettings
from linkshelf.core.ingestion.entrypoint import IngestionPipeline
from linkshelf.core.ingestion.models import ProcessedContent

URL = "https://example.com/article"


@pytest.fixture
def pipeline(
    mock_metadata_store,
    mock_blob_store,
    mock_vector_store,
    mock_fetcher,
    mock_summarizer,
    mock_embedder,
    ingestion_settings,
) -> IngestionPipeline:
    """Provide IngestionPipeline wired to mocks."""
    return IngestionPipeline(
        metadata_store=mock_metadata_store,
        blob_store=mock_blob_store,
        vector_store=mock_vector_store,
        fetcher=mock_fetcher,
        summarizer=mock_summarizer,
        embedder=mock_embedder,
        settings=ingestion_settings,
    )


class TestIngestionPipelineSuccess:
    """Test suite for a successful ingestion."""

    @pytest.mark.asyncio
    async def test_ingest_should_return_record_with_chunk_count(self, pipeline) -> None:
        """Test the record describes the fetched content and its chunks."""
        # Act
        record = await pipeline.ingest(URL)

        # Assert
        assert record.url == URL
        assert record.chunk_count == 3
        assert record.title == "Hello"
        assert record.summary == "A page that says hello."
        assert record.content_type == "text/html"
        assert record.size == len(b"<html><body>hello</body></html>")
        assert record.bucket_path == f"content/{record.id}.html"

    @pytest.mark.asyncio
    async def test_ingest_should_insert_one_vector_per_chunk_in_order(
        self, pipeline, mock_vector_store
    ) -> None:
        """Test vector ids are "{id}-{i}" for i in 0..chunk_count-1."""
        # Act
        record = await pipeline.ingest(URL)

        # Assert
        calls = mock_vector_store.insert.await_args_list
        assert [call.args[0] for call in calls] == [f"{record.id}-{i}" for i in range(3)]
        assert [call.args[1] for call in calls] == [
            VectorMetadata(document_id=record.id, chunk_id=i) for i in range(3)
        ]
        assert [call.args[2][0] for call in calls] == [
            float(len("chunk zero")),
            float(len("chunk one")),
            float(len("chunk two")),
        ]

    @pytest.mark.asyncio
    async def test_ingest_should_write_vectors_then_blob_then_metadata(
        self, pipeline, mock_vector_store, mock_blob_store, mock_metadata_store
    ) -> None:
        """Test the store writes happen in the documented order."""
        # Arrange
        order: list[str] = []
        mock_vector_store.insert.side_effect = lambda *a: order.append("vector")
        mock_blob_store.put.side_effect = lambda *a: order.append("blob")
        mock_metadata_store.save.side_effect = lambda *a: order.append("metadata")

        # Act
        record = await pipeline.ingest(URL)

        # Assert
        assert order == ["vector", "vector", "vector", "blob", "metadata"]
        mock_blob_store.put.assert_awaited_once_with(
            record.bucket_path,
            b"<html><body>hello</body></html>",
            "text/html",
        )
        mock_metadata_store.save.assert_awaited_once_with(record)

    @pytest.mark.asyncio
    async def test_ingest_should_use_bin_extension_for_unknown_type(
        self, pipeline, mock_fetcher
    ) -> None:
        """Test unknown MIME types are stored with the .bin extension."""
        # Arrange
        mock_fetcher.fetch.return_value = (b"\x00\x01", "application/x-unknown")

        # Act
        record = await pipeline.ingest(URL)

        # Assert
        assert record.bucket_path.endswith(".bin")

    @pytest.mark.asyncio
    async def test_ingest_should_generate_distinct_ids(self, pipeline) -> None:
        """Test each ingestion gets a fresh document id."""
        # Act
        first = await pipeline.ingest(URL)
        second = await pipeline.ingest("https://example.com/other")

        # Assert
        assert first.id != second.id


class TestIngestionPipelineEmbeddingFanOut:
    """Test suite for concurrent embedding."""

    @pytest.mark.asyncio
    async def test_vector_ids_should_not_depend_on_completion_order(
        self,
        mock_metadata_store,
        mock_blob_store,
        mock_vector_store,
        mock_fetcher,
        mock_summarizer,
    ) -> None:
        """Test chunk i gets embedding i even when later chunks finish first."""
        # Arrange
        chunks = [f"chunk-{i}" for i in range(5)]
        mock_summarizer.process.return_value = ProcessedContent(
            title="t", summary="s", chunks=chunks
        )
        finished: list[str] = []

        async def slow_first(text: str) -> list[float]:
            index = int(text.split("-")[1])
            await asyncio.sleep(0.01 * (len(chunks) - index))
            finished.append(text)
            return [float(index)]

        embedder = MagicMock()
        embedder.embed = AsyncMock(side_effect=slow_first)
        pipeline = IngestionPipeline(
            metadata_store=mock_metadata_store,
            blob_store=mock_blob_store,
            vector_store=mock_vector_store,
            fetcher=mock_fetcher,
            summarizer=mock_summarizer,
            embedder=embedder,
            settings=IngestionSettings(embedding_concurrency=5),
        )

        # Act
        record = await pipeline.ingest(URL)

        # Assert
        assert finished == list(reversed(chunks))
        calls = mock_vector_store.insert.await_args_list
        assert [call.args[0] for call in calls] == [f"{record.id}-{i}" for i in range(5)]
        assert [call.args[2] for call in calls] == [[float(i)] for i in range(5)]

    @pytest.mark.asyncio
    async def test_failed_embedding_should_cancel_siblings(
        self,
        mock_metadata_store,
        mock_blob_store,
        mock_vector_store,
        mock_fetcher,
        mock_summarizer,
    ) -> None:
        """Test one failing chunk aborts the fan-out with EmbeddingError."""
        # Arrange
        cancelled: list[str] = []

        async def embed(text: str) -> list[float]:
            if text == "chunk zero":
                raise EmbeddingError("quota exceeded")
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.append(text)
                raise
            return [1.0]

        embedder = MagicMock()
        embedder.embed = AsyncMock(side_effect=embed)
        pipeline = IngestionPipeline(
            metadata_store=mock_metadata_store,
            blob_store=mock_blob_store,
            vector_store=mock_vector_store,
            fetcher=mock_fetcher,
            summarizer=mock_summarizer,
            embedder=embedder,
            settings=IngestionSettings(embedding_concurrency=3),
        )

        # Act & Assert
        with pytest.raises(EmbeddingError) as exc_info:
            await pipeline.ingest(URL)

        assert exc_info.value.stage == "embed"
        assert sorted(cancelled) == ["chunk one", "chunk two"]
        mock_vector_store.insert.assert_not_awaited()


class TestIngestionPipelineFailures:
    """Test suite for aborted ingestions."""

    @pytest.mark.asyncio
    async def test_fetch_failure_should_touch_no_store(
        self, pipeline, mock_fetcher, mock_vector_store, mock_blob_store, mock_metadata_store
    ) -> None:
        """Test a fetch failure aborts before any write."""
        # Arrange
        mock_fetcher.fetch.side_effect = FetchError("404", url=URL, status_code=404)

        # Act & Assert
        with pytest.raises(FetchError) as exc_info:
            await pipeline.ingest(URL)

        assert exc_info.value.stage == "fetch"
        assert exc_info.value.completed_steps == []
        mock_vector_store.insert.assert_not_awaited()
        mock_blob_store.put.assert_not_awaited()
        mock_metadata_store.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_chunk_list_should_raise_processing_error(
        self, pipeline, mock_summarizer, mock_embedder
    ) -> None:
        """Test zero chunks is treated as unusable summarizer output."""
        # Arrange
        mock_summarizer.process.return_value = ProcessedContent(title="t", summary="s", chunks=[])

        # Act & Assert
        with pytest.raises(ProcessingError) as exc_info:
            await pipeline.ingest(URL)

        assert exc_info.value.stage == "summarize"
        mock_embedder.embed.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unexpected_summarizer_error_should_be_wrapped(
        self, pipeline, mock_summarizer
    ) -> None:
        """Test exceptions outside the hierarchy become ProcessingError."""
        # Arrange
        mock_summarizer.process.side_effect = RuntimeError("model exploded")

        # Act & Assert
        with pytest.raises(ProcessingError) as exc_info:
            await pipeline.ingest(URL)

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert exc_info.value.details["operation"] == "ingest"

    @pytest.mark.asyncio
    async def test_embedding_failure_should_insert_no_vectors(
        self, pipeline, mock_embedder, mock_vector_store
    ) -> None:
        """Test an embedding failure happens before any vector insert."""
        # Arrange
        mock_embedder.embed.side_effect = [[1.0], RuntimeError("boom"), [1.0]]

        # Act & Assert
        with pytest.raises(EmbeddingError):
            await pipeline.ingest(URL)

        mock_vector_store.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_vector_insert_failure_should_report_inserted_vectors(
        self, pipeline, mock_vector_store, mock_blob_store
    ) -> None:
        """Test the ledger lists vectors written before the failing insert."""
        # Arrange
        mock_vector_store.insert.side_effect = [None, StoreError("down", store="vector")]

        # Act & Assert
        with pytest.raises(StoreError) as exc_info:
            await pipeline.ingest(URL)

        error = exc_info.value
        assert error.stage == "vector_insert"
        assert len(error.completed_steps) == 1
        assert error.completed_steps[0]["stage"] == "vector_insert"
        assert error.completed_steps[0]["resource"].endswith("-0")
        mock_blob_store.put.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_blob_failure_should_leave_vectors_and_skip_metadata(
        self, pipeline, mock_blob_store, mock_metadata_store
    ) -> None:
        """Test a blob failure reports all vectors and never saves metadata."""
        # Arrange
        mock_blob_store.put.side_effect = ConnectionError("s3 unreachable")

        # Act & Assert
        with pytest.raises(StoreError) as exc_info:
            await pipeline.ingest(URL)

        error = exc_info.value
        assert error.stage == "blob_put"
        assert error.details["store"] == "blob"
        assert [step["stage"] for step in error.completed_steps] == ["vector_insert"] * 3
        mock_metadata_store.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_metadata_failure_should_report_vectors_and_blob(
        self, pipeline, mock_metadata_store
    ) -> None:
        """Test a metadata failure lists vectors and blob as leftovers."""
        # Arrange
        mock_metadata_store.save.side_effect = StoreError("db down", store="metadata")

        # Act & Assert
        with pytest.raises(StoreError) as exc_info:
            await pipeline.ingest(URL)

        stages = [step["stage"] for step in exc_info.value.completed_steps]
        assert stages == ["vector_insert"] * 3 + ["blob_put"]
        assert exc_info.value.stage == "metadata_save"


class TestIngestionPipelineDuplicatePolicy:
    """Test suite for concurrent ingestion of the same URL."""

    @pytest.mark.asyncio
    async def test_reject_policy_should_raise_duplicate_error(
        self, pipeline, mock_metadata_store
    ) -> None:
        """Test the race loser gets DuplicateDocumentError by default."""
        # Arrange
        mock_metadata_store.save.side_effect = DuplicateDocumentError(URL)

        # Act & Assert
        with pytest.raises(DuplicateDocumentError) as exc_info:
            await pipeline.ingest(URL)

        assert exc_info.value.stage == "metadata_save"

    @pytest.mark.asyncio
    async def test_keep_existing_policy_should_return_winner(
        self,
        mock_metadata_store,
        mock_blob_store,
        mock_vector_store,
        mock_fetcher,
        mock_summarizer,
        mock_embedder,
        sample_record,
    ) -> None:
        """Test the race loser returns the record that was saved first."""
        # Arrange
        mock_metadata_store.save.side_effect = DuplicateDocumentError(URL)
        mock_metadata_store.find_by_url.side_effect = None
        mock_metadata_store.find_by_url.return_value = sample_record
        pipeline = IngestionPipeline(
            metadata_store=mock_metadata_store,
            blob_store=mock_blob_store,
            vector_store=mock_vector_store,
            fetcher=mock_fetcher,
            summarizer=mock_summarizer,
            embedder=mock_embedder,
            settings=IngestionSettings(duplicate_url_policy=DuplicateUrlPolicy.KEEP_EXISTING),
        )

        # Act
        record = await pipeline.ingest(URL)

        # Assert
        assert record is sample_record
        mock_metadata_store.find_by_url.assert_awaited_once_with(URL)

    @pytest.mark.asyncio
    async def test_keep_existing_should_reraise_when_winner_vanished(
        self,
        mock_metadata_store,
        mock_blob_store,
        mock_vector_store,
        mock_fetcher,
        mock_summarizer,
        mock_embedder,
    ) -> None:
        """Test DuplicateDocumentError surfaces if the winning record is gone."""
        # Arrange
        mock_metadata_store.save.side_effect = DuplicateDocumentError(URL)
        pipeline = IngestionPipeline(
            metadata_store=mock_metadata_store,
            blob_store=mock_blob_store,
            vector_store=mock_vector_store,
            fetcher=mock_fetcher,
            summarizer=mock_summarizer,
            embedder=mock_embedder,
            settings=IngestionSettings(duplicate_url_policy=DuplicateUrlPolicy.KEEP_EXISTING),
        )

        # Act & Assert
        with pytest.raises(DuplicateDocumentError):
            await pipeline.ingest(URL)

    @pytest.mark.asyncio
    async def test_keep_existing_lookup_failure_should_report_orphaned_writes(
        self,
        mock_metadata_store,
        mock_blob_store,
        mock_vector_store,
        mock_fetcher,
        mock_summarizer,
        mock_embedder,
    ) -> None:
        """Test a store failure while fetching the winner still carries the ledger."""
        # Arrange
        mock_metadata_store.save.side_effect = DuplicateDocumentError(URL)
        mock_metadata_store.find_by_url.side_effect = StoreError(
            "connection lost", store="metadata", operation="find_by_url"
        )
        pipeline = IngestionPipeline(
            metadata_store=mock_metadata_store,
            blob_store=mock_blob_store,
            vector_store=mock_vector_store,
            fetcher=mock_fetcher,
            summarizer=mock_summarizer,
            embedder=mock_embedder,
            settings=IngestionSettings(duplicate_url_policy=DuplicateUrlPolicy.KEEP_EXISTING),
        )

        # Act & Assert
        with pytest.raises(StoreError) as exc_info:
            await pipeline.ingest(URL)

        error = exc_info.value
        assert error.details["operation"] == "ingest"
        assert error.stage == "metadata_save"
        assert [step["stage"] for step in error.completed_steps] == [
            "vector_insert",
            "vector_insert",
            "vector_insert",
            "blob_put",
        ]
