"""
Retrieval and answer pipeline.

Exports: RAGSearch, create_rag_search, SearchResult, SystemStatus, CorpusState,
PipelineState, REFUSAL_MESSAGE, INTERNAL_ERROR_MESSAGE
"""

from pdf_rag.core.rag_query.rag_prompt import (
    INTERNAL_ERROR_MESSAGE,
    REFUSAL_MESSAGE,
    build_context,
    render_prompt,
)
from pdf_rag.core.rag_query.rag_search import RAGSearch, create_rag_search
from pdf_rag.core.rag_query.schemas import (
    CorpusState,
    PipelineState,
    SearchResult,
    SystemStatus,
)

__all__ = [
    "INTERNAL_ERROR_MESSAGE",
    "REFUSAL_MESSAGE",
    "CorpusState",
    "PipelineState",
    "RAGSearch",
    "SearchResult",
    "SystemStatus",
    "build_context",
    "create_rag_search",
    "render_prompt",
]
