"""
Pipeline result model for document ingestion.

Represents the outcome of processing one PDF through the pipeline.

Dependencies: pydantic
System role: Return type for IngestionPipeline.process()
"""

from pydantic import BaseModel, Field


class PipelineResult(BaseModel):
    """Result of ingestion pipeline execution."""

    document_id: str = Field(description="Document identifier (source path)")
    chunk_count: int = Field(description="Number of chunks stored")
    failed_embeddings: int = Field(default=0, description="Chunks stored with a zero-vector fallback")
    table_name: str = Field(description="Collection table the chunks were written to")
    processing_time_ms: float = Field(description="Total processing time in milliseconds")
