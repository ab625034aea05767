"""
Chat CLI entry point (pdf-rag-chat).

Builds the answer pipeline from settings, verifies the collection is ready
and hands control to the interactive shell.

Dependencies: pdf_rag.configs, pdf_rag.core.rag_query, pdf_rag.observability
System role: Console entry point for question answering
"""

import logging
import sys

from pdf_rag.cli.shell import ChatShell, print_banner, print_critical_error
from pdf_rag.configs import get_settings
from pdf_rag.core.exceptions import ConfigurationError
from pdf_rag.core.rag_query import PipelineState, create_rag_search
from pdf_rag.observability import configure_logging

logger = logging.getLogger(__name__)


def main() -> int:
    """
    Start the chat.

    Returns:
        int: 0 on normal exit or interrupt, 1 when startup fails
    """
    rag = None
    try:
        settings = get_settings()
        configure_logging(settings.log_level)

        print_banner()
        print("\nPHASE 1: INITIALIZING RAG SYSTEM")

        try:
            rag = create_rag_search(settings)
        except ConfigurationError as e:
            logger.error(f"Configuration error: {e}")
            print_critical_error()
            return 1

        if rag.state is PipelineState.FAILED:
            rag.close()
            print_critical_error()
            return 1

        status = rag.get_system_status()
        if not status.is_ready:
            logger.error(f"Collection not ready (corpus={status.corpus.value})")
            rag.close()
            print_critical_error()
            return 1

        print("PHASE 1: RAG system initialized successfully!\n")
        shell, rag = ChatShell(rag), None
        return shell.run()

    except KeyboardInterrupt:
        if rag is not None:
            rag.close()
        print("\n\nInterrupt signal received. RAG Chat closed. See you later!")
        return 0
    except Exception as e:
        if rag is not None:
            rag.close()
        logger.critical(f"Fatal error: {type(e).__name__}: {e}", exc_info=True)
        print(f"\nFATAL ERROR in main application: {e}")
        print("Try restarting: pdf-rag-chat")
        return 1


if __name__ == "__main__":
    sys.exit(main())
