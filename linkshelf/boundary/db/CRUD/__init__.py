"""
CRUD operations for database models.

Exports: BaseCRUD, DocumentCRUD, document_crud
"""

from linkshelf.boundary.db.CRUD.base_crud import BaseCRUD
from linkshelf.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud

__all__ = [
    "BaseCRUD",
    "DocumentCRUD",
    "document_crud",
]
