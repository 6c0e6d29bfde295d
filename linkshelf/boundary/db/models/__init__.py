"""
ORM models.

Exports: DocumentModel
"""

from linkshelf.boundary.db.models.document_model import DocumentModel

__all__ = ["DocumentModel"]
