"""Tests for the exception hierarchy."""

from pdf_rag.core.exceptions import (
    ConfigurationError,
    DimensionMismatchError,
    DocumentProcessingError,
    ParsingError,
    PdfRagException,
    StoreNotReadyError,
    VectorStoreConnectionError,
    VectorStoreError,
)


class TestExceptions:
    """Test messages, details and inheritance."""

    def test_str_includes_details(self) -> None:
        """Should append details to the message."""
        error = PdfRagException("boom", {"key": "value"})

        assert str(error) == "boom | Details: {'key': 'value'}"

    def test_str_without_details(self) -> None:
        """Should return the bare message."""
        assert str(PdfRagException("boom")) == "boom"

    def test_configuration_error_records_setting(self) -> None:
        """Should record the offending setting."""
        error = ConfigurationError("missing", setting="GOOGLE_API_KEY")

        assert error.details == {"setting": "GOOGLE_API_KEY"}

    def test_caller_details_not_mutated(self) -> None:
        """Should copy the details dict instead of writing into the caller's."""
        shared = {"table": "pdf_documents"}

        error = VectorStoreError("write failed", operation="upsert", details=shared)
        ConfigurationError("missing", setting="GOOGLE_API_KEY", details=shared)

        assert shared == {"table": "pdf_documents"}
        assert error.details == {"table": "pdf_documents", "operation": "upsert"}

    def test_dimension_mismatch(self) -> None:
        """Should carry expected and actual sizes."""
        error = DimensionMismatchError(expected=3072, actual=768)

        assert isinstance(error, DocumentProcessingError)
        assert (error.expected, error.actual) == (3072, 768)
        assert "expected 3072, got 768" in error.message

    def test_parsing_error_source(self) -> None:
        """Should record the document path."""
        error = ParsingError("bad pdf", source="doc.pdf")

        assert error.source == "doc.pdf"
        assert error.details["source"] == "doc.pdf"

    def test_store_errors_record_operation(self) -> None:
        """Should tag store errors with the failed operation."""
        assert VectorStoreConnectionError("down").operation == "initialize"
        assert StoreNotReadyError().operation == "query"
        assert isinstance(StoreNotReadyError(), VectorStoreError)
