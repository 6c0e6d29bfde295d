"""
Models for the ingestion pipeline.

Exports: ProcessedContent, LinkSummary
"""

from .processed_content import LinkSummary, ProcessedContent

__all__ = [
    "LinkSummary",
    "ProcessedContent",
]
