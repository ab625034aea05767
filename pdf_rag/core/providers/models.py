"""
Provider data models.

ChatMessage is the role-tagged unit used to build one outbound prompt.
EmbeddingResult reports the outcome of embedding a single text so callers
can tell a real vector from the zero-vector fallback.

Dependencies: pydantic
System role: Data structures exchanged with the hosted model providers
"""

from typing import Literal

from pydantic import BaseModel, Field

Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    """Role-tagged message; never persisted."""

    role: Role = Field(description="Message author role")
    content: str = Field(description="Message text")


class EmbeddingResult(BaseModel):
    """Per-text embedding outcome."""

    vector: list[float] = Field(description="Embedding vector (zeros when the call failed)")
    ok: bool = Field(default=True, description="False when the vector is the zero fallback")
    error: str | None = Field(default=None, description="Failure reason for degraded items")

    @classmethod
    def failed(cls, dimension: int, reason: str) -> "EmbeddingResult":
        """Build the zero-vector fallback for a failed text."""
        return cls(vector=[0.0] * dimension, ok=False, error=reason)
