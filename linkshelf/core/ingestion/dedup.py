"""
URL deduplication check.

Dependencies: linkshelf.core.interfaces
System role: Short-circuits ingestion of URLs that already have a record
"""

import logging

from linkshelf.core.exceptions import DocumentNotFoundError
from linkshelf.core.interfaces import MetadataStore
from linkshelf.models.document import DocumentRecord

logger = logging.getLogger(__name__)


class DedupResolver:
    """Decide whether a URL needs ingesting."""

    def __init__(self, metadata_store: MetadataStore) -> None:
        self._metadata_store = metadata_store

    async def resolve(self, url: str) -> DocumentRecord | None:
        """
        Look up an existing record for the URL.

        The lookup and the final metadata write of a later ingestion are not
        atomic; the metadata store's unique URL index is what finally
        prevents a second record.

        Args:
            url: Link URL

        Returns:
            DocumentRecord | None: Existing record, or None when ingestion should proceed

        Raises:
            StoreError: Metadata store failure (not absence)
        """
        try:
            record = await self._metadata_store.find_by_url(url)
        except DocumentNotFoundError:
            return None

        logger.info(
            f"{__name__}:resolve - URL already ingested",
            extra={"url": url, "document_id": record.id},
        )
        return record
