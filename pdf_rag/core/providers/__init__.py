"""
Hosted model providers.

Exports: GeminiEmbeddingProvider, GeminiChatProvider, ChatMessage, EmbeddingResult
"""

from pdf_rag.core.providers.chat import CHAT_FALLBACK_MESSAGE, GeminiChatProvider, build_prompt
from pdf_rag.core.providers.embeddings import GeminiEmbeddingProvider
from pdf_rag.core.providers.models import ChatMessage, EmbeddingResult

__all__ = [
    "CHAT_FALLBACK_MESSAGE",
    "ChatMessage",
    "EmbeddingResult",
    "GeminiChatProvider",
    "GeminiEmbeddingProvider",
    "build_prompt",
]
