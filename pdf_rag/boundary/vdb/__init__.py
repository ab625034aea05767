"""
Vector database boundary.

Exports: PGVectorStore, VectorStore, VectorQuery
"""

from pdf_rag.boundary.vdb.pgvector_store import PGVectorStore
from pdf_rag.boundary.vdb.vector_schemas import VectorQuery, VectorStore

__all__ = [
    "PGVectorStore",
    "VectorQuery",
    "VectorStore",
]
