"""
Core business logic module.

Contains the three store orchestrators (ingestion, retrieval, deletion),
the dedup resolver, the step ledger and the exception hierarchy.
"""

from linkshelf.core.exceptions import (
    DocumentNotFoundError,
    DuplicateDocumentError,
    EmbeddingError,
    FetchError,
    LinkShelfException,
    ProcessingError,
    StoreError,
    ValidationError,
)

__all__ = [
    "DocumentNotFoundError",
    "DuplicateDocumentError",
    "EmbeddingError",
    "FetchError",
    "LinkShelfException",
    "ProcessingError",
    "StoreError",
    "ValidationError",
]
