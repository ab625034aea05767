"""
Command-line interfaces.

pdf-rag-ingest loads a PDF into the collection; pdf-rag-chat answers
questions about it.
"""
