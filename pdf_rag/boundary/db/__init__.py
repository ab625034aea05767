"""
Database boundary.

Exports: get_engine
"""

from pdf_rag.boundary.db.connection import get_engine

__all__ = ["get_engine"]
