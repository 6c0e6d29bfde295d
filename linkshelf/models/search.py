"""
Search result model.

Dependencies: pydantic, linkshelf.models.document
System role: Return type of the retrieval aggregator
"""

from pydantic import BaseModel, Field

from linkshelf.models.document import DocumentRecord


class SearchResult(BaseModel):
    """One ranked document with its matching chunk positions."""

    document: DocumentRecord
    chunk_ids: list[int] = Field(
        description="Zero-based chunk positions, best matching chunk first",
    )
