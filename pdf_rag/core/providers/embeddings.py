"""
Gemini embedding provider with batching and per-item fallback.

Texts are embedded in sequential batches; inside a batch each text is its own
remote call so a failure only degrades that text. Chunks go through the
model's embed_documents (document task type) and questions through its
embed_query (query task type). Failed texts get a zero vector of the
collection dimensionality and are reported through EmbeddingResult instead
of aborting the batch.

Dependencies: langchain_core, langchain_google_genai, pdf_rag.configs
System role: Embedding generation adapter
"""

import logging
from collections.abc import Sequence

from langchain_core.embeddings import Embeddings

from pdf_rag.configs import GoogleSettings
from pdf_rag.core.exceptions import ConfigurationError, DimensionMismatchError
from pdf_rag.core.providers.models import EmbeddingResult
from pdf_rag.observability import preview

logger = logging.getLogger(__name__)


class GeminiEmbeddingProvider(Embeddings):
    """
    Embedding provider used by both ingestion and query time.

    Implements the LangChain Embeddings interface so it can be handed to any
    LangChain component, and adds embed_with_status for callers that need to
    detect degraded vectors.
    """

    def __init__(
        self,
        settings: GoogleSettings,
        embeddings: Embeddings | None = None,
    ) -> None:
        """
        Initialize the provider.

        Args:
            settings: Gemini settings (API key, model, dimension, batch size)
            embeddings: Optional underlying LangChain embeddings model. Built
                from settings when omitted.

        Raises:
            ConfigurationError: When no model is injected and GOOGLE_API_KEY is blank
        """
        self._dimension = settings.embedding_dimension
        self._batch_size = settings.embedding_batch_size

        if embeddings is None:
            if not settings.api_key.strip():
                raise ConfigurationError(
                    "Google API key is not set in environment variables.",
                    setting="GOOGLE_API_KEY",
                )
            from pdf_rag.core.providers.embeddings_wrapper import PinnedDimensionEmbeddings

            embeddings = PinnedDimensionEmbeddings(
                model=settings.embedding_model,
                collection_dimension=settings.embedding_dimension,
                google_api_key=settings.api_key,
            )
            logger.info(f"Embeddings: {settings.embedding_model} ({settings.embedding_dimension} dims)")

        self._model = embeddings

    @property
    def dimension(self) -> int:
        """Embedding dimensionality D."""
        return self._dimension

    @property
    def batch_size(self) -> int:
        return self._batch_size

    def embed_with_status(self, texts: Sequence[str], as_query: bool = False) -> list[EmbeddingResult]:
        """
        Embed texts in sequential batches, one result per input, order-preserving.

        Args:
            texts: Texts to embed
            as_query: Embed as search questions instead of stored documents

        Returns:
            list[EmbeddingResult]: Same length and order as texts
        """
        if not texts:
            return []

        logger.info(f"Generating embeddings for {len(texts)} texts (batch_size={self._batch_size})")
        results: list[EmbeddingResult] = []

        for start in range(0, len(texts), self._batch_size):
            batch = texts[start:start + self._batch_size]
            batch_results = [self._embed_one(text, as_query) for text in batch]
            results.extend(batch_results)

            failed = sum(1 for r in batch_results if not r.ok)
            logger.info(
                f"Batch {start // self._batch_size + 1}: {len(batch)} texts processed"
                + (f" ({failed} failed)" if failed else "")
            )

        return results

    def embed(self, texts: Sequence[str]) -> list[list[float]]:
        """Embed texts and return vectors only (zero vectors for failures)."""
        return [result.vector for result in self.embed_with_status(texts)]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """LangChain Embeddings interface."""
        return self.embed(texts)

    def embed_query(self, text: str) -> list[float]:
        """Embed a single question (zero vector on failure)."""
        return self.embed_with_status([text], as_query=True)[0].vector

    def _embed_one(self, text: str, as_query: bool) -> EmbeddingResult:
        try:
            if as_query:
                vector = self._model.embed_query(text)
            else:
                vectors = self._model.embed_documents([text])
                vector = vectors[0] if vectors else []
        except Exception as e:
            logger.warning(
                f"Error generating embedding for text '{preview(text, 60)}': {type(e).__name__}: {e}"
            )
            return EmbeddingResult.failed(self._dimension, f"{type(e).__name__}: {e}")

        if not vector:
            logger.warning(f"No embedding returned for text '{preview(text, 60)}'")
            return EmbeddingResult.failed(self._dimension, "empty embedding returned")

        if len(vector) != self._dimension:
            mismatch = DimensionMismatchError(expected=self._dimension, actual=len(vector))
            logger.warning(f"Discarding embedding for text '{preview(text, 60)}': {mismatch.message}")
            return EmbeddingResult.failed(self._dimension, mismatch.message)

        return EmbeddingResult(vector=[float(x) for x in vector])
