"""
Task modules for the link ingestion pipeline.

Exports: FetchTask, SummarizingTask, ChunkingTask, EmbeddingTask
"""

from .chunking_task import ChunkingTask
from .embedding_task import EmbeddingTask
from .fetch_task import FetchTask
from .summarizing_task import SummarizingTask

__all__ = [
    "FetchTask",
    "SummarizingTask",
    "ChunkingTask",
    "EmbeddingTask",
]
