"""
Document ORM model.

One row per ingested URL. The URL carries a unique index: it is the only
cross-request guard against two records for the same link.

Dependencies: sqlalchemy, linkshelf.boundary.db.base
System role: Metadata store table
"""

from datetime import datetime

from sqlalchemy import BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from linkshelf.boundary.db.base import Base, UTCDateTime


class DocumentModel(Base):
    """
    Document entity for an ingested link.

    Attributes:
        id: Document id (UUID4 string generated at ingestion)
        url: Source URL, unique
        created_at: Ingestion timestamp (UTC)
        bucket_path: Object key of the raw content
        content_type: MIME type of the content
        size: Byte length of the content
        title: Summarizer title
        summary: Summarizer summary
        chunk_count: Number of chunk vectors for this document
    """

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    url: Mapped[str] = mapped_column(String(2048), unique=True, index=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    bucket_path: Mapped[str] = mapped_column(String(512), nullable=False)
    content_type: Mapped[str] = mapped_column(String(255), nullable=False)
    size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    chunk_count: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<DocumentModel(id={self.id}, url={self.url}, chunks={self.chunk_count})>"
