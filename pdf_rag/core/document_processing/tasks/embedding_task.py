"""
Embedding generation task using the Gemini embedding provider.

Turns chunked LangChain Documents into Chunk models with deterministic IDs
and embeddings of the collection dimensionality.

Dependencies: hashlib, langchain_core, pdf_rag.core.providers
System role: Third stage of document ingestion pipeline
"""

import hashlib
import logging

from langchain_core.documents import Document

from pdf_rag.core.exceptions import EmbeddingError
from pdf_rag.core.providers import GeminiEmbeddingProvider

from ..models import Chunk

logger = logging.getLogger(__name__)


class EmbeddingTask:
    """Generate embeddings for chunked documents."""

    def __init__(self, provider: GeminiEmbeddingProvider) -> None:
        """
        Initialize embedding task.

        Args:
            provider: Embedding provider (batching and per-item fallback)
        """
        self._provider = provider
        self.failed_count = 0

    def embed(self, documents: list[Document]) -> list[Chunk]:
        """
        Generate embeddings for documents.

        Texts whose embedding failed keep the zero-vector fallback and are
        counted in failed_count.

        Args:
            documents: LangChain Documents to embed

        Returns:
            list[Chunk]: Chunks with embeddings, same order as documents

        Raises:
            EmbeddingError: When no document could be embedded at all
        """
        self.failed_count = 0
        if not documents:
            return []

        texts = [doc.page_content for doc in documents]
        results = self._provider.embed_with_status(texts)

        self.failed_count = sum(1 for r in results if not r.ok)
        if self.failed_count == len(results):
            raise EmbeddingError(
                "Failed to generate embeddings for every chunk",
                source=documents[0].metadata.get("source"),
                details={"chunk_count": len(results), "last_error": results[-1].error},
            )
        if self.failed_count:
            logger.warning(f"{self.failed_count}/{len(results)} chunks stored with zero-vector fallback")

        return [
            Chunk(
                id=self._generate_chunk_id(doc.page_content, doc.metadata),
                content=doc.page_content,
                metadata=doc.metadata,
                embedding=result.vector,
            )
            for doc, result in zip(documents, results)
        ]

    def _generate_chunk_id(self, content: str, metadata: dict) -> str:
        """
        Generate deterministic chunk ID from content and metadata.

        Args:
            content: Chunk text content
            metadata: Chunk metadata

        Returns:
            str: SHA-256 hash prefix of content + source + sequence position
        """
        source = metadata.get("source", "")
        position = metadata.get("page", 0)
        hash_input = f"{content}:{source}:{position}"
        return hashlib.sha256(hash_input.encode()).hexdigest()[:16]
