"""
Text chunking task using RecursiveCharacterTextSplitter.

Splits page text into overlapping chunks, preferring paragraph, line,
sentence and word boundaries before falling back to single characters.

Dependencies: langchain_text_splitters, langchain_core
System role: Second stage of document ingestion pipeline
"""

import logging

from langchain_core.documents import Document
from langchain_text_splitters import RecursiveCharacterTextSplitter

logger = logging.getLogger(__name__)

DEFAULT_SEPARATORS = ["\n\n", "\n", ". ", "? ", "! ", " ", ""]


class ChunkingTask:
    """Split documents into chunks using RecursiveCharacterTextSplitter."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        separators: list[str] | None = None,
    ) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks
            separators: Split boundaries in priority order

        Raises:
            ValueError: When sizes are not positive or overlap >= size
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if chunk_overlap < 0:
            raise ValueError("chunk_overlap cannot be negative")
        if chunk_overlap >= chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            separators=separators or DEFAULT_SEPARATORS,
            keep_separator="end",
            strip_whitespace=True,
            length_function=len,
        )

    def split_text(self, text: str) -> list[str]:
        """
        Split raw text into chunks.

        Args:
            text: Source text

        Returns:
            list[str]: Non-empty chunks, each at most chunk_size characters
        """
        if not text.strip():
            return []
        return [piece for piece in self._splitter.split_text(text) if piece.strip()]

    def chunk(self, documents: list[Document]) -> list[Document]:
        """
        Split documents into chunks and stamp sequence metadata.

        Whitespace-only pages are dropped. Each chunk keeps its page's loader
        metadata and gets source, page (1-based chunk position), totalPages
        (chunk count) and pdf_page (1-based page of the PDF).

        Args:
            documents: LangChain Documents to split (one per PDF page)

        Returns:
            list[Document]: Chunked documents in reading order

        Raises:
            ValueError: When documents list is empty
        """
        if not documents:
            raise ValueError("No documents to chunk")

        pages = [doc for doc in documents if doc.page_content.strip()]
        skipped = len(documents) - len(pages)
        if skipped:
            logger.info(f"Skipped {skipped} empty pages")

        chunks = self._splitter.split_documents(pages)
        chunks = [c for c in chunks if c.page_content.strip()]
        total = len(chunks)

        for position, chunk in enumerate(chunks, start=1):
            loader_page = chunk.metadata.get("page")
            if isinstance(loader_page, int):
                chunk.metadata["pdf_page"] = loader_page + 1
            chunk.metadata["source"] = chunk.metadata.get("source", "")
            chunk.metadata["page"] = position
            chunk.metadata["totalPages"] = total

        logger.info(f"Split {len(pages)} pages into {total} chunks")
        return chunks
