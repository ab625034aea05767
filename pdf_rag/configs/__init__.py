"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
"""

from pdf_rag.configs.database import DatabaseSettings
from pdf_rag.configs.google import GoogleSettings
from pdf_rag.configs.pipeline import IngestionSettings, RetrievalSettings
from pdf_rag.configs.settings import Settings, get_settings

__all__ = [
    "DatabaseSettings",
    "GoogleSettings",
    "IngestionSettings",
    "RetrievalSettings",
    "Settings",
    "get_settings",
]
