"""
Retrieval and answer pipeline.

Embeds the question, fetches the nearest chunks from the vector store, builds
a grounded prompt and asks the chat model for an answer. Every public method
turns failures into fixed, user-presentable results instead of raising.

Dependencies: pdf_rag.core.providers, pdf_rag.boundary.vdb, pdf_rag.configs
System role: Question answering orchestration
"""

import logging

from pdf_rag.boundary.vdb import PGVectorStore, VectorQuery, VectorStore
from pdf_rag.configs import Settings
from pdf_rag.core.exceptions import PdfRagException, RetrievalError, StoreNotReadyError
from pdf_rag.core.providers import ChatMessage, GeminiChatProvider, GeminiEmbeddingProvider
from pdf_rag.core.rag_query.rag_prompt import (
    INTERNAL_ERROR_MESSAGE,
    REFUSAL_MESSAGE,
    build_context,
    render_prompt,
)
from pdf_rag.core.rag_query.schemas import (
    CorpusState,
    PipelineState,
    SearchResult,
    SystemStatus,
)
from pdf_rag.observability import log_exception_with_context, preview

logger = logging.getLogger(__name__)

STATUS_PROBE_QUERY = "test"


class RAGSearch:
    """
    Grounded question answering over the ingested document.

    State moves UNINITIALIZED -> READY on a successful store initialization,
    READY -> ANSWERING -> READY around each question, and UNINITIALIZED ->
    FAILED when the store cannot be reached.
    """

    def __init__(
        self,
        settings: Settings,
        embedding_provider: GeminiEmbeddingProvider,
        chat_provider: GeminiChatProvider,
        store: VectorStore,
    ) -> None:
        """
        Initialize the pipeline with its collaborators.

        Args:
            settings: Application settings (retrieval knobs)
            embedding_provider: Query embedding provider
            chat_provider: Answer generation provider
            store: Vector store (initialize() is called separately)
        """
        self._settings = settings
        self._embeddings = embedding_provider
        self._chat = chat_provider
        self._store = store
        self._state = PipelineState.READY if store.is_ready else PipelineState.UNINITIALIZED

    @property
    def state(self) -> PipelineState:
        return self._state

    def initialize(self) -> bool:
        """
        Initialize the vector store.

        Returns:
            bool: True when READY, False when the pipeline moved to FAILED
        """
        if self._state is PipelineState.READY:
            return True
        if self._state is PipelineState.FAILED:
            return False

        try:
            self._store.initialize()
        except PdfRagException as e:
            log_exception_with_context(logger, "Vector store initialization failed", e)
            self._state = PipelineState.FAILED
            return False

        self._state = PipelineState.READY
        return True

    def _require_ready(self) -> None:
        active = (PipelineState.READY, PipelineState.ANSWERING)
        if self._state not in active or not self._store.is_ready:
            raise StoreNotReadyError()

    def _retrieve(self, query: str, k: int) -> list[SearchResult]:
        self._require_ready()
        # A zero-vector fallback has no direction, so its distances rank nothing
        embedded = self._embeddings.embed_with_status([query], as_query=True)[0]
        if not embedded.ok:
            raise RetrievalError(
                "Query embedding failed",
                query=query,
                details={"reason": embedded.error},
            )
        vector_query = VectorQuery(embedding=embedded.vector, top_k=k)
        matches = self._store.nearest_neighbors(vector_query.embedding, vector_query.top_k)
        return [
            SearchResult(content=chunk.content, metadata=chunk.metadata, score=distance)
            for chunk, distance in matches
        ]

    def search_documents(self, query: str, k: int | None = None) -> list[SearchResult]:
        """
        Return the k chunks nearest to the query, ascending distance.

        Args:
            query: Question text
            k: Number of results (RAG_TOP_K when None; fewer rows than k
                returns them all, k < 1 returns [])

        Returns:
            list[SearchResult]: Results, or [] on any failure
        """
        if k is None:
            k = self._settings.retrieval.top_k
        if k < 1:
            return []
        try:
            return self._retrieve(query, k)
        except Exception as e:
            logger.error(f"Error searching documents: {type(e).__name__}: {e}")
            return []

    def generate_answer(self, query: str) -> str:
        """
        Answer a question from the retrieved context.

        Args:
            query: Raw user question

        Returns:
            str: Model answer, REFUSAL_MESSAGE when nothing was retrieved, or
                INTERNAL_ERROR_MESSAGE on any failure
        """
        logger.info(f"Processing question: {preview(query)}")
        try:
            self._require_ready()
            self._state = PipelineState.ANSWERING
            try:
                return self._answer(query)
            finally:
                self._state = PipelineState.READY
        except Exception as e:
            log_exception_with_context(logger, "Error generating answer", e, query=query)
            return INTERNAL_ERROR_MESSAGE

    def _answer(self, query: str) -> str:
        retrieval = self._settings.retrieval
        try:
            results = self._retrieve(query, retrieval.top_k)
        except PdfRagException:
            raise
        except Exception as e:
            raise RetrievalError(f"Retrieval failed: {e}", query=query) from e

        if not results:
            logger.info("No relevant chunks found")
            return REFUSAL_MESSAGE

        context = build_context([r.content for r in results], retrieval.max_context_chars)
        logger.info(f"Context assembled from {len(results)} chunks ({len(context)} chars)")

        prompt = render_prompt(context, query)
        answer = self._chat.chat_completion(
            [ChatMessage(role="user", content=prompt)],
            temperature=retrieval.temperature,
        )
        return answer.strip()

    def get_system_status(self) -> SystemStatus:
        """
        Probe the collection with a one-result search.

        Returns:
            SystemStatus: UNREADY on failure, EMPTY (not ready) when no rows
                came back, NONEMPTY_UNKNOWN_COUNT (ready) otherwise
        """
        try:
            results = self._retrieve(STATUS_PROBE_QUERY, 1)
        except Exception as e:
            logger.error(f"Error checking system status: {type(e).__name__}: {e}")
            return SystemStatus(is_ready=False, corpus=CorpusState.UNREADY)

        if not results:
            return SystemStatus(is_ready=False, corpus=CorpusState.EMPTY)
        return SystemStatus(is_ready=True, corpus=CorpusState.NONEMPTY_UNKNOWN_COUNT)

    def close(self) -> None:
        """Release the store connection. Safe to call more than once."""
        self._store.close()
        if self._state is not PipelineState.FAILED:
            self._state = PipelineState.UNINITIALIZED


def create_rag_search(
    settings: Settings,
    embedding_provider: GeminiEmbeddingProvider | None = None,
    chat_provider: GeminiChatProvider | None = None,
    store: VectorStore | None = None,
) -> RAGSearch:
    """
    Build and initialize the answer pipeline from settings.

    Store failures leave the returned pipeline in FAILED state instead of
    raising.

    Args:
        settings: Application settings
        embedding_provider: Optional provider override
        chat_provider: Optional provider override
        store: Optional store override

    Returns:
        RAGSearch: Pipeline in READY or FAILED state

    Raises:
        ConfigurationError: When GOOGLE_API_KEY is missing
    """
    embedding_provider = embedding_provider or GeminiEmbeddingProvider(settings.google)
    chat_provider = chat_provider or GeminiChatProvider(settings.google)
    if store is None:
        store = PGVectorStore(settings.database, dimension=settings.google.embedding_dimension)

    rag = RAGSearch(settings, embedding_provider, chat_provider, store)
    rag.initialize()
    return rag
