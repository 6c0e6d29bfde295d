"""
Document CRUD operations.

Provides Create, Read, Delete operations for DocumentModel
with URL lookups and newest-first listing.

Dependencies: sqlalchemy, linkshelf.boundary.db.models.document_model
System role: Document persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from linkshelf.boundary.db.CRUD.base_crud import BaseCRUD
from linkshelf.boundary.db.models.document_model import DocumentModel


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with lookups by URL, the business key.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def get_by_url(self, session: AsyncSession, url: str) -> DocumentModel | None:
        """
        Retrieve the document for a URL.

        Args:
            session: Async database session
            url: Source URL

        Returns:
            DocumentModel if found, None otherwise
        """
        stmt = select(DocumentModel).where(DocumentModel.url == url)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_url(self, session: AsyncSession, url: str) -> DocumentModel | None:
        """
        Delete the document for a URL.

        Args:
            session: Async database session
            url: Source URL

        Returns:
            The deleted DocumentModel, or None if no row matched
        """
        document = await self.get_by_url(session, url)
        if document is None:
            return None
        await session.delete(document)
        await session.flush()
        return document

    async def list_recent(
        self,
        session: AsyncSession,
        limit: int = 20,
        offset: int = 0,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve documents newest first.

        Args:
            session: Async database session
            limit: Maximum number of documents to return
            offset: Number of documents to skip

        Returns:
            Sequence of DocumentModels ordered by created_at descending
        """
        stmt = (
            select(DocumentModel)
            .order_by(DocumentModel.created_at.desc(), DocumentModel.id)
            .offset(offset)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


# Singleton instance for convenience
document_crud = DocumentCRUD()
