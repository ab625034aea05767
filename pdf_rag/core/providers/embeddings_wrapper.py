"""
Gemini embeddings pinned to the collection dimensionality.

GoogleGenerativeAIEmbeddings answers at the model's native size unless
output_dimensionality is sent with every request. PinnedDimensionEmbeddings
carries the collection's D as a model field and fills it into both the
document and the query calls. The base class still picks the task type
(RETRIEVAL_DOCUMENT for embed_documents, RETRIEVAL_QUERY for embed_query).

Dependencies: langchain_google_genai, pydantic
System role: Keeps stored and query vectors inside the vector(D) column size
"""

from typing import Any

from langchain_google_genai import GoogleGenerativeAIEmbeddings
from pydantic import Field


class PinnedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """GoogleGenerativeAIEmbeddings whose every request asks for collection_dimension."""

    collection_dimension: int = Field(
        default=3072,
        gt=0,
        description="output_dimensionality sent when the caller does not give one",
    )

    def _pin(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        if not kwargs.get("output_dimensionality"):
            kwargs["output_dimensionality"] = self.collection_dimension
        return kwargs

    def embed_documents(self, texts: list[str], **kwargs: Any) -> list[list[float]]:
        return super().embed_documents(texts, **self._pin(kwargs))

    def embed_query(self, text: str, **kwargs: Any) -> list[float]:
        return super().embed_query(text, **self._pin(kwargs))
