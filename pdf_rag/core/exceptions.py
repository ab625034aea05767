"""
Exception hierarchy for the PDF RAG assistant.

Provides layered exception structure for domain-specific errors.
All exceptions carry a details dict for logging and troubleshooting.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class PdfRagException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context
        """
        self.message = message
        self.details = dict(details or {})
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(PdfRagException):
    """Raised when required configuration (credentials, models) is missing or invalid."""

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if setting:
            details["setting"] = setting
        super().__init__(message, details)


class DocumentProcessingError(PdfRagException):
    """Base exception for ingestion errors."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            source: Path of the document being ingested
            details: Additional context
        """
        details = dict(details or {})
        if source:
            details["source"] = source
        self.source = source
        super().__init__(message, details)


class ParsingError(DocumentProcessingError):
    """Raised when the PDF cannot be read or has no extractable text."""


class EmbeddingError(DocumentProcessingError):
    """Raised when embeddings cannot be produced for a whole ingestion run."""


class DimensionMismatchError(DocumentProcessingError):
    """Raised when a vector's length differs from the collection dimensionality."""

    def __init__(self, expected: int, actual: int, details: dict[str, Any] | None = None) -> None:
        details = dict(details or {})
        details.update({"expected": expected, "actual": actual})
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Embedding dimensionality mismatch: expected {expected}, got {actual}",
            details=details,
        )


class VectorStoreError(PdfRagException):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (initialize, upsert, replace, query, delete)
            details: Additional context
        """
        details = dict(details or {})
        if operation:
            details["operation"] = operation
        self.operation = operation
        super().__init__(message, details)


class VectorStoreConnectionError(VectorStoreError):
    """Raised when the store cannot be reached or prepared at initialization."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, operation="initialize", details=details)


class StoreNotReadyError(VectorStoreError):
    """Raised when an operation needs a store that never finished initializing."""

    def __init__(self, message: str = "Vector store has not been initialized. Run ingestion first.") -> None:
        super().__init__(message, operation="query")


class RetrievalError(PdfRagException):
    """Raised when retrieval fails inside the answer pipeline."""

    def __init__(
        self,
        message: str,
        query: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if query:
            details["query"] = query[:200]
        super().__init__(message, details)
