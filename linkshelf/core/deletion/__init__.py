"""
Cascading link deletion.

Exports: DeletionOrchestrator
"""

from .orchestrator import DeletionOrchestrator

__all__ = ["DeletionOrchestrator"]
