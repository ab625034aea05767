"""
Observability module.

Logging configuration and structured logging helpers.
"""

from pdf_rag.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    preview,
    safe_log_value,
)
from pdf_rag.observability.logger import configure_logging

__all__ = [
    "configure_logging",
    "log_exception_with_context",
    "log_with_context",
    "preview",
    "safe_log_value",
]
