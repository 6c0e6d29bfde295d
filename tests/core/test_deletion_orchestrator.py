"""
Test suite for DeletionOrchestrator.

Tests delete ordering, vector id range, NotFound handling and aborted deletes.

System role: Verification of the cascading delete
"""

import pytest

from linkshelf.core.deletion.orchestrator import DeletionOrchestrator
from linkshelf.core.exceptions import DocumentNotFoundError, StoreError


@pytest.fixture
def orchestrator(mock_metadata_store, mock_blob_store, mock_vector_store) -> DeletionOrchestrator:
    """Provide DeletionOrchestrator wired to mocks."""
    return DeletionOrchestrator(mock_metadata_store, mock_blob_store, mock_vector_store)


class TestDeletionOrchestrator:
    """Test suite for DeletionOrchestrator.delete."""

    @pytest.mark.asyncio
    async def test_delete_should_remove_metadata_blob_and_vectors(
        self, orchestrator, mock_metadata_store, mock_blob_store, mock_vector_store, sample_record
    ) -> None:
        """Test all three stores are cleared for the record."""
        # Arrange
        mock_metadata_store.delete_by_url.side_effect = None
        mock_metadata_store.delete_by_url.return_value = sample_record

        # Act
        deleted = await orchestrator.delete(sample_record.url)

        # Assert
        assert deleted is sample_record
        mock_metadata_store.delete_by_url.assert_awaited_once_with(sample_record.url)
        mock_blob_store.delete.assert_awaited_once_with(sample_record.bucket_path)
        mock_vector_store.delete_by_document.assert_awaited_once_with(
            sample_record.id, sample_record.chunk_count
        )

    @pytest.mark.asyncio
    async def test_unknown_url_should_raise_not_found(
        self, orchestrator, mock_blob_store, mock_vector_store
    ) -> None:
        """Test deleting an unknown URL touches no other store."""
        # Act & Assert
        with pytest.raises(DocumentNotFoundError) as exc_info:
            await orchestrator.delete("https://example.com/missing")

        assert exc_info.value.stage == "metadata_delete"
        mock_blob_store.delete.assert_not_awaited()
        mock_vector_store.delete_by_document.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_second_delete_should_raise_not_found(
        self, orchestrator, mock_metadata_store, sample_record
    ) -> None:
        """Test a URL can only be deleted once."""
        # Arrange
        mock_metadata_store.delete_by_url.side_effect = [
            sample_record,
            DocumentNotFoundError(url=sample_record.url),
        ]

        # Act
        await orchestrator.delete(sample_record.url)

        # Assert
        with pytest.raises(DocumentNotFoundError):
            await orchestrator.delete(sample_record.url)

    @pytest.mark.asyncio
    async def test_blob_failure_should_abort_and_report_metadata_deleted(
        self, orchestrator, mock_metadata_store, mock_blob_store, mock_vector_store, sample_record
    ) -> None:
        """Test a blob failure stops before vectors and lists the metadata delete."""
        # Arrange
        mock_metadata_store.delete_by_url.side_effect = None
        mock_metadata_store.delete_by_url.return_value = sample_record
        mock_blob_store.delete.side_effect = StoreError("denied", store="blob", operation="delete")

        # Act & Assert
        with pytest.raises(StoreError) as exc_info:
            await orchestrator.delete(sample_record.url)

        error = exc_info.value
        assert error.stage == "blob_delete"
        assert [step["stage"] for step in error.completed_steps] == ["metadata_delete"]
        mock_vector_store.delete_by_document.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_vector_failure_should_report_metadata_and_blob_deleted(
        self, orchestrator, mock_metadata_store, mock_vector_store, sample_record
    ) -> None:
        """Test a vector failure lists both earlier deletions."""
        # Arrange
        mock_metadata_store.delete_by_url.side_effect = None
        mock_metadata_store.delete_by_url.return_value = sample_record
        mock_vector_store.delete_by_document.side_effect = RuntimeError("index offline")

        # Act & Assert
        with pytest.raises(StoreError) as exc_info:
            await orchestrator.delete(sample_record.url)

        error = exc_info.value
        assert error.details["store"] == "vector"
        assert [step["stage"] for step in error.completed_steps] == [
            "metadata_delete",
            "blob_delete",
        ]
