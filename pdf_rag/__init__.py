"""
PDF question-answering assistant.

Ingests a single PDF into a pgvector collection and answers questions about it
with Google Gemini, strictly grounded in the retrieved chunks.

Subpackages:
- configs: pydantic-settings configuration
- observability: logging setup and helpers
- core: providers, ingestion pipeline, retrieval and answer pipeline
- boundary: database engine and vector store adapter
- cli: pdf-rag-ingest and pdf-rag-chat entry points
"""

__version__ = "0.1.0"
