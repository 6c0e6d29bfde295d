"""
Summarizer output models.

Dependencies: pydantic
System role: Contract between the summarizer/chunker and the ingestion pipeline
"""

from pydantic import BaseModel, Field


class LinkSummary(BaseModel):
    """Structured LLM output for a fetched page."""

    title: str = Field(description="Short descriptive title of the content")
    summary: str = Field(description="Summary of the content in a few sentences")


class ProcessedContent(BaseModel):
    """Title, summary and ordered chunk texts for one fetched link."""

    title: str = Field(description="Document title")
    summary: str = Field(description="Document summary")
    chunks: list[str] = Field(
        default_factory=list,
        description="Chunk texts in document order; position is the chunk id",
    )
