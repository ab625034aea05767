"""
Google Gemini provider settings.

Holds the API key and model identifiers for the embedding and chat providers.
The API key has no default: a blank key is rejected when a provider is built.

Dependencies: pydantic, pydantic_settings
System role: Generative provider configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from pdf_rag.configs.base import BaseSettings


class GoogleSettings(BaseSettings):
    """Gemini credentials and model selection (GOOGLE_* variables)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GOOGLE_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = Field(default="", description="Google Generative AI API key")
    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Embedding model identifier",
    )
    chat_model: str = Field(
        default="gemini-2.5-flash",
        description="Chat/generation model identifier",
    )
    embedding_dimension: int = Field(
        default=3072,
        gt=0,
        description="Embedding dimensionality D (also sizes the zero-vector fallback)",
    )
    embedding_batch_size: int = Field(
        default=10,
        gt=0,
        description="Number of texts embedded per sequential batch",
    )
    max_output_tokens: int = Field(default=1000, gt=0, description="Generation token cap")
    request_timeout: float | None = Field(
        default=None,
        description="Optional timeout in seconds for chat requests",
    )
