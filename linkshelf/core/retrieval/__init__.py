"""
Similarity search over ingested links.

Exports: RetrievalAggregator
"""

from .aggregator import RetrievalAggregator

__all__ = ["RetrievalAggregator"]
