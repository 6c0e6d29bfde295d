"""
Exception hierarchy for LinkShelf.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Orchestrator failures additionally carry the step ledger in `details`
(`operation`, `stage`, `completed_steps`) so the caller can see which
store writes were left behind; see linkshelf.core.saga.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class LinkShelfException(Exception):
    """Base exception for all LinkShelf application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    @property
    def stage(self) -> str | None:
        """Orchestrator step that failed, when raised from an orchestrator."""
        return self.details.get("stage")

    @property
    def completed_steps(self) -> list[dict[str, Any]]:
        """Steps that finished before the failure (uncompensated writes/deletes)."""
        return self.details.get("completed_steps", [])


class ValidationError(LinkShelfException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class FetchError(LinkShelfException):
    """Raised when link content cannot be retrieved."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize fetch error.

        Args:
            message: Error message
            url: URL that failed to download
            status_code: HTTP status code when the server answered
            details: Additional context
        """
        details = details or {}
        if url:
            details["url"] = url
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)


class ProcessingError(LinkShelfException):
    """Raised when summarizing/chunking fails or returns unusable output."""

    def __init__(
        self,
        message: str,
        content_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize processing error.

        Args:
            message: Error message
            content_type: MIME type of the content being processed
            details: Additional context
        """
        details = details or {}
        if content_type:
            details["content_type"] = content_type
        super().__init__(message, details)


class EmbeddingError(LinkShelfException):
    """Raised when embedding generation fails."""

    pass


class StoreError(LinkShelfException):
    """Raised when the blob, metadata or vector store rejects a read/write."""

    def __init__(
        self,
        message: str,
        store: str | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize store error.

        Args:
            message: Error message
            store: Store that failed (blob, metadata, vector)
            operation: Store operation that failed (put, save, query, delete, ...)
            details: Additional context
        """
        details = details or {}
        if store:
            details["store"] = store
        if operation:
            details["store_operation"] = operation
        super().__init__(message, details)


class DuplicateDocumentError(StoreError):
    """Raised when the metadata store already holds a record for the URL."""

    def __init__(self, url: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize duplicate document error.

        Args:
            url: URL that already has a document record
            details: Additional context
        """
        details = details or {}
        details["url"] = url
        super().__init__(
            f"Document already exists for url: {url}",
            store="metadata",
            operation="save",
            details=details,
        )


class DocumentNotFoundError(LinkShelfException):
    """Raised when a document cannot be found by URL or id."""

    def __init__(
        self,
        url: str | None = None,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document not found error.

        Args:
            url: URL that was looked up
            document_id: Document id that was looked up
            details: Additional context
        """
        details = details or {}
        if url:
            details["url"] = url
        if document_id:
            details["document_id"] = document_id
        target = url or document_id or "<unknown>"
        super().__init__(f"Document not found: {target}", details)
