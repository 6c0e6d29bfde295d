"""
Link deletion orchestrator.

Removes a document from the metadata store, then its blob, then its chunk
vectors. Earlier deletions are not undone when a later one fails; the step
ledger on the raised error lists what is already gone.

Dependencies: linkshelf.core.interfaces, linkshelf.core.saga
System role: Cascading delete across the three stores
"""

import logging

from linkshelf.core.interfaces import BlobStore, MetadataStore, VectorStore
from linkshelf.core.saga import Stage, StepLedger
from linkshelf.models.document import DocumentRecord

logger = logging.getLogger(__name__)


class DeletionOrchestrator:
    """Delete a link from metadata, blob and vector stores."""

    def __init__(
        self,
        metadata_store: MetadataStore,
        blob_store: BlobStore,
        vector_store: VectorStore,
    ) -> None:
        self._metadata_store = metadata_store
        self._blob_store = blob_store
        self._vector_store = vector_store

    async def delete(self, url: str) -> DocumentRecord:
        """
        Delete everything stored for a URL.

        Args:
            url: Link URL

        Returns:
            DocumentRecord: The deleted record

        Raises:
            DocumentNotFoundError: No record for the URL
            StoreError: A store delete failed
        """
        ledger = StepLedger("delete", subject=url)

        with ledger.stage(Stage.METADATA_DELETE):
            record = await self._metadata_store.delete_by_url(url)
        ledger.complete(Stage.METADATA_DELETE, record.id, compensation="re-save metadata record")

        with ledger.stage(Stage.BLOB_DELETE):
            await self._blob_store.delete(record.bucket_path)
        ledger.complete(Stage.BLOB_DELETE, record.bucket_path, compensation="re-upload blob")

        with ledger.stage(Stage.VECTOR_DELETE):
            await self._vector_store.delete_by_document(record.id, record.chunk_count)
        ledger.complete(
            Stage.VECTOR_DELETE,
            f"{record.id}-0..{record.chunk_count - 1}",
            compensation="re-embed and re-insert vectors",
        )

        logger.info(
            f"{__name__}:delete - Deleted document and {record.chunk_count} vectors",
            extra={"url": url, "document_id": record.id},
        )
        return record
