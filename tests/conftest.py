"""
Shared test fixtures and fakes for the test suite.

Provides: deterministic fake embeddings, scripted fake chat model, in-memory
vector store with real cosine distance, and small explicit Settings.
Dependencies: pytest, langchain_core
System role: Test infrastructure and fixture management
"""

import hashlib
import math
import re
from collections.abc import Callable
from types import SimpleNamespace

import pytest
from langchain_core.embeddings import Embeddings

from pdf_rag.configs import (
    DatabaseSettings,
    GoogleSettings,
    IngestionSettings,
    RetrievalSettings,
    Settings,
)
from pdf_rag.core.document_processing.models import Chunk
from pdf_rag.core.exceptions import (
    DimensionMismatchError,
    StoreNotReadyError,
    VectorStoreConnectionError,
)
from pdf_rag.core.providers import GeminiChatProvider, GeminiEmbeddingProvider

TEST_DIMENSION = 64


# ============================================================================
# Fakes
# ============================================================================


class FakeEmbeddings(Embeddings):
    """Bag-of-words hashing embeddings; identical texts get identical vectors."""

    def __init__(
        self,
        dimension: int = TEST_DIMENSION,
        fail_on: tuple[str, ...] = (),
        wrong_size_on: tuple[str, ...] = (),
    ) -> None:
        self.dimension = dimension
        self.fail_on = fail_on
        self.wrong_size_on = wrong_size_on
        self.calls: list[str] = []
        self.document_calls: list[str] = []
        self.query_calls: list[str] = []

    def _vector(self, text: str) -> list[float]:
        self.calls.append(text)
        if any(marker in text for marker in self.fail_on):
            raise RuntimeError("quota exceeded")
        if any(marker in text for marker in self.wrong_size_on):
            return [0.5] * (self.dimension + 1)

        vector = [0.0] * self.dimension
        for word in re.findall(r"\w+", text.lower()):
            index = int(hashlib.md5(word.encode()).hexdigest(), 16) % self.dimension
            vector[index] += 1.0
        if not any(vector):
            vector[0] = 1.0
        return vector

    def embed_query(self, text: str) -> list[float]:
        self.query_calls.append(text)
        return self._vector(text)

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.document_calls.extend(texts)
        return [self._vector(text) for text in texts]


class FakeChatModel:
    """Chat model double recording prompts; answers via a responder callable."""

    def __init__(self, responder: Callable[[str], object] | None = None) -> None:
        self.prompts: list[str] = []
        self.responder = responder or (lambda prompt: "  The answer is 42.  ")

    def invoke(self, prompt: str) -> SimpleNamespace:
        self.prompts.append(prompt)
        content = self.responder(prompt)
        if isinstance(content, Exception):
            raise content
        return SimpleNamespace(content=content)


def cosine_distance(a: list[float], b: list[float]) -> float:
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(x * x for x in b))
    if norm_a == 0 or norm_b == 0:
        return 1.0
    return 1.0 - sum(x * y for x, y in zip(a, b)) / (norm_a * norm_b)


class InMemoryVectorStore:
    """Vector store double with the PGVectorStore interface."""

    def __init__(self, dimension: int = TEST_DIMENSION, fail_initialize: bool = False) -> None:
        self.dimension = dimension
        self.fail_initialize = fail_initialize
        self.rows: dict[str, Chunk] = {}
        self.closed = 0
        self._ready = False

    @property
    def table_name(self) -> str:
        return "test_documents"

    @property
    def is_ready(self) -> bool:
        return self._ready

    def initialize(self) -> None:
        if self.fail_initialize:
            raise VectorStoreConnectionError("connection refused")
        self._ready = True

    def _check(self, vector: list[float] | None) -> None:
        if vector is None or len(vector) != self.dimension:
            raise DimensionMismatchError(expected=self.dimension, actual=len(vector or []))

    def upsert(self, chunks: list[Chunk]) -> int:
        if not self._ready:
            raise StoreNotReadyError()
        for chunk in chunks:
            self._check(chunk.embedding)
        for chunk in chunks:
            self.rows[chunk.id] = chunk
        return len(chunks)

    def delete_by_source(self, source: str) -> int:
        if not self._ready:
            raise StoreNotReadyError()
        doomed = [cid for cid, c in self.rows.items() if c.metadata.get("source") == source]
        for cid in doomed:
            del self.rows[cid]
        return len(doomed)

    def replace_source(self, source: str, chunks: list[Chunk]) -> tuple[int, int]:
        if not self._ready:
            raise StoreNotReadyError()
        for chunk in chunks:
            self._check(chunk.embedding)
        kept = {cid: c for cid, c in self.rows.items() if c.metadata.get("source") != source}
        removed = len(self.rows) - len(kept)
        kept.update({chunk.id: chunk for chunk in chunks})
        self.rows = kept
        return removed, len(chunks)

    def nearest_neighbors(self, vector: list[float], k: int) -> list[tuple[Chunk, float]]:
        if not self._ready:
            raise StoreNotReadyError()
        self._check(vector)
        scored = [(chunk, cosine_distance(vector, chunk.embedding)) for chunk in self.rows.values()]
        scored.sort(key=lambda pair: pair[1])
        return scored[:k]

    def close(self) -> None:
        self.closed += 1
        self._ready = False


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def google_settings() -> GoogleSettings:
    """Gemini settings with a dummy key and a small dimension."""
    return GoogleSettings(
        api_key="test-key",
        embedding_dimension=TEST_DIMENSION,
        embedding_batch_size=3,
    )


@pytest.fixture
def settings(google_settings: GoogleSettings) -> Settings:
    """Explicit settings independent of the developer's environment."""
    return Settings(
        google=google_settings,
        database=DatabaseSettings(collection_name="test_documents"),
        ingestion=IngestionSettings(chunk_size=1000, chunk_overlap=200),
        retrieval=RetrievalSettings(top_k=10, temperature=0.1),
    )


@pytest.fixture
def fake_embeddings() -> FakeEmbeddings:
    return FakeEmbeddings()


@pytest.fixture
def embedding_provider(google_settings: GoogleSettings, fake_embeddings: FakeEmbeddings) -> GeminiEmbeddingProvider:
    return GeminiEmbeddingProvider(google_settings, embeddings=fake_embeddings)


@pytest.fixture
def chat_model() -> FakeChatModel:
    return FakeChatModel()


@pytest.fixture
def chat_provider(google_settings: GoogleSettings, chat_model: FakeChatModel) -> GeminiChatProvider:
    return GeminiChatProvider(google_settings, model_factory=lambda temperature: chat_model)


@pytest.fixture
def store() -> InMemoryVectorStore:
    """Initialized, empty in-memory store."""
    memory_store = InMemoryVectorStore()
    memory_store.initialize()
    return memory_store
