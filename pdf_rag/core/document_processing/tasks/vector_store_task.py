"""
Vector store upload task.

Replaces a document's chunks in the collection. Rows from a previous
ingestion of the same source are deleted and the new chunks upserted in one
store transaction, so a failed upload keeps the earlier rows.

Dependencies: pdf_rag.boundary.vdb
System role: Final stage of document ingestion pipeline
"""

import logging
from typing import TYPE_CHECKING

from ..models import Chunk

if TYPE_CHECKING:
    from pdf_rag.boundary.vdb import VectorStore

logger = logging.getLogger(__name__)


class VectorStoreTask:
    """Upload embedded chunks to the vector store."""

    def __init__(self, store: "VectorStore") -> None:
        """
        Initialize vector store task.

        Args:
            store: Initialized vector store
        """
        self._store = store

    def upload(self, chunks: list[Chunk], source: str) -> int:
        """
        Replace the stored chunks of one source document.

        Args:
            chunks: Chunks with embeddings
            source: Document path recorded in chunk metadata

        Returns:
            int: Number of chunks written

        Raises:
            ValueError: When chunks list is empty
            VectorStoreError: When the replacement fails (previous rows kept)
            DimensionMismatchError: When an embedding has the wrong length
        """
        if not chunks:
            raise ValueError("No chunks to upload")

        removed, written = self._store.replace_source(source, chunks)
        if removed:
            logger.info(f"Replaced {removed} previously ingested chunks of {source}")

        logger.info(f"Uploaded {written} chunks to {self._store.table_name}")
        return written
