"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base: Model building block
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - DocumentModel: Document record table
  - document_crud: CRUD operation singleton
  - DocumentStore: Metadata store used by the orchestrators

Dependencies: sqlalchemy, linkshelf.configs
System role: Metadata store adapter
"""

from linkshelf.boundary.db.base import Base
from linkshelf.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from linkshelf.boundary.db.CRUD import BaseCRUD, DocumentCRUD, document_crud
from linkshelf.boundary.db.document_store import DocumentStore
from linkshelf.boundary.db.models.document_model import DocumentModel

__all__ = [
    "Base",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "DocumentModel",
    "BaseCRUD",
    "DocumentCRUD",
    "document_crud",
    "DocumentStore",
]
