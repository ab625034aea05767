"""
Ingestion pipeline orchestrator.

Coordinates parsing, chunking, embedding and vector store upload for one PDF.

Dependencies: All task modules, pdf_rag.configs, pdf_rag.core.providers
System role: Pipeline orchestration (coordinates only)
"""

import logging
import time
from typing import TYPE_CHECKING

from pdf_rag.configs import Settings, get_settings
from pdf_rag.core.providers import GeminiEmbeddingProvider
from pdf_rag.observability import log_with_context

from .models import PipelineResult
from .tasks import (
    ChunkingTask,
    EmbeddingTask,
    ParsingTask,
    VectorStoreTask,
)

if TYPE_CHECKING:
    from pdf_rag.boundary.vdb import VectorStore

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """Orchestrate document ingestion: parse -> chunk -> embed -> upload."""

    def __init__(
        self,
        settings: Settings | None = None,
        embedding_provider: GeminiEmbeddingProvider | None = None,
        store: "VectorStore | None" = None,
    ) -> None:
        """
        Initialize pipeline with configuration.

        Args:
            settings: Application settings (loaded from environment if None)
            embedding_provider: Embedding provider (built from settings if None)
            store: Vector store (a PGVectorStore from settings if None). It is
                initialized here when not already ready.

        Raises:
            ConfigurationError: When GOOGLE_API_KEY is missing
            VectorStoreConnectionError: When the store cannot be initialized
        """
        self._settings = settings or get_settings()
        self._embedding_provider = embedding_provider or GeminiEmbeddingProvider(self._settings.google)

        if store is None:
            from pdf_rag.boundary.vdb import PGVectorStore

            store = PGVectorStore(
                self._settings.database,
                dimension=self._settings.google.embedding_dimension,
            )
        if not store.is_ready:
            store.initialize()
        self._store = store

        self._parsing_task = ParsingTask()
        self._chunking_task = ChunkingTask(
            chunk_size=self._settings.ingestion.chunk_size,
            chunk_overlap=self._settings.ingestion.chunk_overlap,
        )
        self._embedding_task = EmbeddingTask(self._embedding_provider)
        self._vector_store_task = VectorStoreTask(self._store)

    def process(self, file_path: str | None = None) -> PipelineResult:
        """
        Process one PDF through the full pipeline.

        Args:
            file_path: Path to the PDF (defaults to PDF_PATH)

        Returns:
            PipelineResult: Processing result with chunk and failure counts

        Raises:
            ParsingError: Document could not be read
            ValueError: Document produced no chunks
            EmbeddingError: No chunk could be embedded
            DimensionMismatchError: Embeddings do not match the collection
            VectorStoreError: Upload failed
        """
        source = file_path or self._settings.ingestion.pdf_path
        start_time = time.perf_counter()
        logger.info(f"Starting ingestion of {source}")

        # Parse document
        pages = self._parsing_task.parse(source)
        for page in pages:
            page.metadata["source"] = source

        # Chunk documents
        chunked_documents = self._chunking_task.chunk(pages)
        if not chunked_documents:
            raise ValueError(f"No chunks produced from {source}")

        # Embed chunks
        chunks = self._embedding_task.embed(chunked_documents)

        # Replace previous rows of this source and upload
        written = self._vector_store_task.upload(chunks, source)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        result = PipelineResult(
            document_id=source,
            chunk_count=written,
            failed_embeddings=self._embedding_task.failed_count,
            table_name=self._store.table_name,
            processing_time_ms=elapsed_ms,
        )
        log_with_context(
            logger,
            logging.INFO,
            f"Ingestion completed: {result.chunk_count} chunks in {result.table_name}",
            document_id=source,
            chunk_count=result.chunk_count,
            failed_embeddings=result.failed_embeddings,
            processing_time_ms=round(elapsed_ms),
        )
        return result

    def close(self) -> None:
        """Release the vector store connection."""
        self._store.close()
