"""
Observability module.

Provides structured logging and correlation ID tracking.
"""

from linkshelf.observability.correlation import (
    CorrelationIdFilter,
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from linkshelf.observability.logger import configure_logging

__all__ = [
    "CorrelationIdFilter",
    "clear_correlation_id",
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
]
