"""
Document domain model.

The persisted descriptor of one ingested URL. Content lives in the blob
store at `bucket_path`; chunk vectors live in the vector store under
ids "{id}-0" .. "{id}-{chunk_count - 1}".

Dependencies: pydantic
System role: Root entity shared by ingestion, retrieval and deletion
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DocumentRecord(BaseModel):
    """Metadata record for an ingested link."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str = Field(description="Document id generated at ingestion (UUID4 string)")
    url: str = Field(description="Source URL, unique business key")
    created_at: datetime = Field(description="Ingestion timestamp (UTC)")
    bucket_path: str = Field(description="Object key of the raw content in the blob store")
    content_type: str = Field(description="MIME type reported by the fetcher")
    size: int = Field(ge=0, description="Byte length of the raw content")
    title: str = Field(description="Title produced by the summarizer")
    summary: str = Field(description="Summary produced by the summarizer")
    chunk_count: int = Field(ge=0, description="Number of chunks embedded for this document")
