"""
Models for document processing pipeline.

Exports: Chunk, PipelineResult
"""

from .chunk import Chunk
from .pipeline_result import PipelineResult

__all__ = [
    "Chunk",
    "PipelineResult",
]
