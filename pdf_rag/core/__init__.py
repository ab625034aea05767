"""
Core business logic.

Providers, ingestion pipeline, and retrieval/answer pipeline.
"""
