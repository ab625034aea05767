"""
Document parsing task using LangChain PyPDFLoader.

Converts a PDF file into one LangChain Document per page.

Dependencies: langchain_community.document_loaders, pypdf
System role: First stage of document ingestion pipeline
"""

import logging
from pathlib import Path

from langchain_community.document_loaders import PyPDFLoader
from langchain_core.documents import Document

from pdf_rag.core.exceptions import ParsingError

logger = logging.getLogger(__name__)


class ParsingTask:
    """Parse PDF documents into LangChain Documents."""

    def parse(self, file_path: str) -> list[Document]:
        """
        Parse PDF document into LangChain Documents.

        Args:
            file_path: Path to PDF document

        Returns:
            list[Document]: One document per page, metadata from the loader

        Raises:
            ParsingError: When the file is missing, not a PDF, unreadable, or
                has no extractable text
        """
        path = Path(file_path)
        if not path.exists():
            raise ParsingError(f"File not found: {file_path}", source=file_path)

        if not path.suffix.lower() == ".pdf":
            raise ParsingError(
                f"Unsupported file format: {path.suffix}. Only PDF files are supported.",
                source=file_path,
            )

        try:
            documents = PyPDFLoader(file_path).load()
        except Exception as e:
            raise ParsingError(f"Failed to parse PDF: {e}", source=file_path) from e

        if not any(doc.page_content.strip() for doc in documents):
            raise ParsingError("PDF document contains no extractable text", source=file_path)

        logger.info(f"Loaded {len(documents)} pages from {file_path}")
        return documents
