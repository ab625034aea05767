"""
Chunk domain model for the ingestion pipeline.

Represents a stored passage with deterministic ID, content, metadata, and
embedding. The same model is returned by the vector store on retrieval.

Dependencies: pydantic
System role: Data structure for document chunks in ingestion and retrieval
"""

from typing import Any

from pydantic import BaseModel, Field


class Chunk(BaseModel):
    """Document chunk with optional embedding vector."""

    id: str = Field(description="Deterministic chunk identifier (content hash)")
    content: str = Field(description="Chunk text content")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Chunk metadata (source, page, totalPages, pdf_page)",
    )
    embedding: list[float] | None = Field(default=None, description="Embedding vector")
