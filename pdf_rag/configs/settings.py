"""
Unified application settings.

Aggregates all configuration modules into a single Settings class that is
passed explicitly into every component constructor.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from pdf_rag.configs.base import BaseSettings
from pdf_rag.configs.database import DatabaseSettings
from pdf_rag.configs.google import GoogleSettings
from pdf_rag.configs.pipeline import IngestionSettings, RetrievalSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    google: GoogleSettings = Field(default_factory=GoogleSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables and .env are read once per process.

    Returns:
        Settings: Application settings instance

    Usage:
        from pdf_rag.configs import get_settings
        settings = get_settings()
    """
    return Settings()
