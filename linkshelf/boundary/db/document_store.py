"""
Metadata store adapter.

Exposes DocumentCRUD as the metadata store used by the orchestrators:
commits after each write and translates SQLAlchemy errors into the
LinkShelf exception hierarchy.

Dependencies: sqlalchemy, linkshelf.boundary.db.CRUD
System role: Metadata store for document records
"""

import logging
from typing import Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from linkshelf.boundary.db.CRUD.document_crud import document_crud
from linkshelf.core.exceptions import (
    DocumentNotFoundError,
    DuplicateDocumentError,
    StoreError,
)
from linkshelf.models.document import DocumentRecord

logger = logging.getLogger(__name__)


class DocumentStore:
    """Document records in the SQL database."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize store with database session.

        Args:
            db: Async database session
        """
        self.db = db

    async def find_by_url(self, url: str) -> DocumentRecord:
        """
        Raises:
            DocumentNotFoundError: No record for the URL
            StoreError: Database failure
        """
        try:
            document = await document_crud.get_by_url(self.db, url)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to look up document: {e}", store="metadata", operation="find") from e
        if document is None:
            raise DocumentNotFoundError(url=url)
        return DocumentRecord.model_validate(document)

    async def get_by_id(self, document_id: str) -> DocumentRecord | None:
        try:
            document = await document_crud.get_by_id(self.db, document_id)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to load document: {e}", store="metadata", operation="get") from e
        if document is None:
            return None
        return DocumentRecord.model_validate(document)

    async def save(self, record: DocumentRecord) -> None:
        """
        Insert a new record and commit.

        Raises:
            DuplicateDocumentError: A record for the URL already exists
            StoreError: Database failure
        """
        try:
            await document_crud.create(self.db, **record.model_dump())
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise DuplicateDocumentError(record.url, details={"document_id": record.id}) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(f"Failed to save document: {e}", store="metadata", operation="save") from e

        logger.info(
            f"{__name__}:save - Saved document",
            extra={"document_id": record.id, "url": record.url},
        )

    async def delete_by_url(self, url: str) -> DocumentRecord:
        """
        Delete the record for a URL and commit.

        Returns:
            DocumentRecord: The deleted record

        Raises:
            DocumentNotFoundError: No record for the URL
            StoreError: Database failure
        """
        try:
            document = await document_crud.delete_by_url(self.db, url)
            if document is None:
                raise DocumentNotFoundError(url=url)
            record = DocumentRecord.model_validate(document)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(f"Failed to delete document: {e}", store="metadata", operation="delete") from e

        logger.info(
            f"{__name__}:delete_by_url - Deleted document",
            extra={"document_id": record.id, "url": url},
        )
        return record

    async def list_recent(self, limit: int = 20, offset: int = 0) -> Sequence[DocumentRecord]:
        try:
            documents = await document_crud.list_recent(self.db, limit=limit, offset=offset)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to list documents: {e}", store="metadata", operation="list") from e
        return [DocumentRecord.model_validate(document) for document in documents]
