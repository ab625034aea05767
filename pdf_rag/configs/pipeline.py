"""
Ingestion and retrieval pipeline settings.

Chunking knobs for ingestion and the retrieval/generation knobs used when
answering questions.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from pydantic import Field, model_validator
from pydantic_settings import SettingsConfigDict

from pdf_rag.configs.base import BaseSettings


class IngestionSettings(BaseSettings):
    """Settings for the document ingestion pipeline."""

    chunk_size: int = Field(default=1000, gt=0, description="Maximum chunk size in characters")
    chunk_overlap: int = Field(
        default=200,
        ge=0,
        description="Overlap between consecutive chunks in characters",
    )
    pdf_path: str = Field(default="./document.pdf", description="Default PDF to ingest")

    @model_validator(mode="after")
    def _check_overlap(self) -> "IngestionSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self


class RetrievalSettings(BaseSettings):
    """Settings for retrieval and answer generation (RAG_* variables)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RAG_",
        case_sensitive=False,
        extra="ignore",
    )

    top_k: int = Field(default=10, ge=1, le=100, description="Chunks retrieved per question")
    temperature: float = Field(
        default=0.1,
        ge=0.0,
        le=2.0,
        description="Generation temperature (low favors grounded phrasing)",
    )
    max_context_chars: int | None = Field(
        default=None,
        gt=0,
        description="Optional cap on assembled context length; unbounded when unset",
    )
