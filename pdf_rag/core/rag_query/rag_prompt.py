"""
Grounded answer prompt.

Fixed template that restricts the model to the retrieved context and
prescribes the refusal sentence, plus helpers to assemble the context block.

Dependencies: langchain_core.prompts
System role: Prompt template for grounded answering
"""

import logging

from langchain_core.prompts import PromptTemplate

logger = logging.getLogger(__name__)

REFUSAL_MESSAGE = "I don't have the information necessary to answer your question."

INTERNAL_ERROR_MESSAGE = (
    "Internal error: Unable to process your query. Please check if ingestion has been performed."
)

CONTEXT_SEPARATOR = "\n\n"

RAG_TEMPLATE = """CONTEXT PROVIDED:
{context}

CRITICAL INSTRUCTIONS:
- Answer EXCLUSIVELY from the CONTEXT PROVIDED above.
- If the information is not EXPLICITLY in the context, respond exactly:
  "I don't have the information necessary to answer your question."
- NEVER use outside knowledge or invent information.
- NEVER express personal opinions or interpretations beyond the given text.

EXAMPLES OF CORRECT ANSWERS FOR QUESTIONS WITHOUT CONTEXT:
- "What is the capital of France?" -> "I don't have the information necessary to answer your question."
- "How many employees does the company have?" -> "I don't have the information necessary to answer your question."
- "Do you recommend investing in this?" -> "I don't have the information necessary to answer your question."

USER QUESTION:
{question}

ANSWER (based only on the provided context):"""

RAG_PROMPT = PromptTemplate.from_template(RAG_TEMPLATE)


def build_context(contents: list[str], max_chars: int | None = None) -> str:
    """
    Join chunk contents, in the given order, separated by a blank line.

    With a budget, whole chunks are added while the joined text fits. A
    first chunk longer than the budget is cut to the budget so the context
    is never empty.

    Args:
        contents: Chunk texts, most similar first
        max_chars: Optional context length cap; unbounded when None

    Returns:
        str: Context block
    """
    if max_chars is None:
        return CONTEXT_SEPARATOR.join(contents)

    selected: list[str] = []
    length = 0
    for content in contents:
        extra = len(content) + (len(CONTEXT_SEPARATOR) if selected else 0)
        if length + extra > max_chars:
            if not selected:
                selected.append(content[:max_chars])
            break
        selected.append(content)
        length += extra

    if len(selected) < len(contents):
        logger.debug(f"Context budget kept {len(selected)}/{len(contents)} chunks")
    return CONTEXT_SEPARATOR.join(selected)


def render_prompt(context: str, question: str) -> str:
    """Fill the grounding template with context and the raw question."""
    return RAG_PROMPT.format(context=context, question=question)
