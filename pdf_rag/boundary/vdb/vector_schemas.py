"""
Vector database schemas.

Structural interface shared by the pgvector store and any substitute store
(for example an in-memory store in tests), plus the query model it accepts.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field

from pdf_rag.core.document_processing.models import Chunk


class VectorQuery(BaseModel):
    """Query parameters for nearest-neighbour search."""

    embedding: list[float] = Field(description="Query embedding vector")
    top_k: int = Field(default=10, description="Number of results to return", ge=1)


@runtime_checkable
class VectorStore(Protocol):
    """Operations the ingestion and retrieval pipelines need from a store."""

    @property
    def table_name(self) -> str: ...

    @property
    def is_ready(self) -> bool: ...

    def initialize(self) -> None: ...

    def upsert(self, chunks: list[Chunk]) -> int: ...

    def delete_by_source(self, source: str) -> int: ...

    def replace_source(self, source: str, chunks: list[Chunk]) -> tuple[int, int]: ...

    def nearest_neighbors(self, vector: list[float], k: int) -> list[tuple[Chunk, float]]: ...

    def close(self) -> None: ...
