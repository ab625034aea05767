"""
Logging utilities for safe structured logging.

Chunk text and embedding vectors are large; these helpers shrink them to
short summaries before they reach a log record.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any


def safe_log_value(value: Any, max_length: int = 200) -> str:
    """
    Convert a value to a short string for logging.

    Float sequences are summarized as vectors, other containers by size, and
    long strings are cut with a marker.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, str):
            text = value.replace("\n", " ")
        elif isinstance(value, (list, tuple)):
            if value and all(isinstance(item, float) for item in value):
                return f"vector(dim={len(value)})"
            text = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            text = f"dict({len(value)} keys)"
        else:
            text = str(value)

        if len(text) > max_length:
            return text[:max_length] + f"... ({len(text)} chars)"
        return text
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"


def preview(text: str, length: int = 80) -> str:
    """Single-line preview of chunk text."""
    flat = " ".join(text.split())
    return flat if len(flat) <= length else flat[:length] + "..."


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """
    Log a message with structured context, safely converting all values.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs attached as record extras
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    logger.log(level, message, extra=safe_context)


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """
    Log an exception with its type, message and structured context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    safe_context.update(
        {
            "error_type": type(exc).__name__,
            "error_msg": safe_log_value(str(exc)),
        }
    )
    logger.error(f"{message}: {type(exc).__name__}: {exc}", exc_info=exc, extra=safe_context)
