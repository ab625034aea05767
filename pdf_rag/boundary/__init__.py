"""
Boundary layer.

Adapters for external systems: PostgreSQL engine and the pgvector store.
"""
