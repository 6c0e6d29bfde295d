"""Service orchestrators."""

from .link_service import LinkService

__all__ = ["LinkService"]
