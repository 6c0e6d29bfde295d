"""Domain models shared by the orchestrators and the application service."""

from linkshelf.models.document import DocumentRecord
from linkshelf.models.search import SearchResult

__all__ = ["DocumentRecord", "SearchResult"]
