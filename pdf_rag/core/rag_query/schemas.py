"""
Retrieval and status schemas.

Pydantic models returned by the answer pipeline and the enums describing
its lifecycle and corpus state.

Dependencies: pydantic
System role: Type definitions for retrieval results and system status
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, computed_field


class PipelineState(str, Enum):
    """Lifecycle of the answer pipeline."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    ANSWERING = "answering"
    FAILED = "failed"


class CorpusState(str, Enum):
    """What the status probe learned about the collection."""

    EMPTY = "empty"
    NONEMPTY_UNKNOWN_COUNT = "nonempty_unknown_count"
    UNREADY = "unready"


class SearchResult(BaseModel):
    """Single retrieved chunk."""

    content: str = Field(description="Chunk text content")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Chunk metadata")
    score: float = Field(description="Cosine distance to the query (lower is more similar)")


class SystemStatus(BaseModel):
    """Readiness report for the status command and startup check."""

    is_ready: bool = Field(description="True when the collection can answer questions")
    corpus: CorpusState = Field(description="Collection state observed by the probe")

    @computed_field
    @property
    def chunks_count(self) -> int:
        """0 for an empty or unreachable collection, -1 when nonempty with unknown count."""
        if self.corpus is CorpusState.NONEMPTY_UNKNOWN_COUNT:
            return -1
        return 0
