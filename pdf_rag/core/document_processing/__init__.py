"""
Document processing pipeline for ingestion.

Parses a PDF, splits it into chunks, embeds them and stores them in pgvector.

Dependencies: langchain_community, langchain_text_splitters, langchain_google_genai, pydantic
System role: Document ingestion pipeline entrypoint
"""

from .entrypoint import IngestionPipeline
from .models import Chunk, PipelineResult

__all__ = [
    "IngestionPipeline",
    "Chunk",
    "PipelineResult",
]
