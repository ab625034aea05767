"""
Logger configuration.

Configures stdlib logging for the CLI processes. Log records go to stderr so
the answers printed on stdout stay readable.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NOISY_LOGGERS = (
    "urllib3",
    "httpx",
    "httpcore",
    "grpc",
    "google",
    "langchain_google_genai",
    "sqlalchemy.engine",
)


def configure_logging(level: str | int = "INFO") -> None:
    """
    Configure root logging with ISO timestamps.

    Replaces any handlers already installed on the root logger so repeated
    calls (tests, re-entry from the CLI) never duplicate output.

    Args:
        level: Root log level name or number
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

