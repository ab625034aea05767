"""
Ingestion CLI entry point (pdf-rag-ingest).

Loads one PDF into the pgvector collection, replacing any rows previously
ingested from the same path.

Dependencies: argparse, pdf_rag.configs, pdf_rag.core.document_processing
System role: Console entry point for document ingestion
"""

import argparse
import logging
import sys

from pdf_rag.configs import get_settings
from pdf_rag.core.document_processing import IngestionPipeline
from pdf_rag.observability import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdf-rag-ingest",
        description="Ingest a PDF into the pgvector collection.",
    )
    parser.add_argument(
        "pdf_path",
        nargs="?",
        default=None,
        help="PDF file to ingest (default: PDF_PATH or ./document.pdf)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: LOG_LEVEL or INFO)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Run ingestion.

    Args:
        argv: Command-line arguments (sys.argv[1:] when None)

    Returns:
        int: 0 on success, 1 on any failure
    """
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
        configure_logging(args.log_level or settings.log_level)
        pdf_path = args.pdf_path or settings.ingestion.pdf_path

        pipeline = IngestionPipeline(settings)
        try:
            result = pipeline.process(pdf_path)
        finally:
            pipeline.close()

    except Exception as e:
        logger.error(f"Error during PDF ingestion: {type(e).__name__}: {e}")
        print(f"Ingestion failed: {e}", file=sys.stderr)
        return 1

    print("PDF ingestion completed successfully!")
    print(f"Total chunks processed: {result.chunk_count}")
    if result.failed_embeddings:
        print(f"Chunks stored with fallback embeddings: {result.failed_embeddings}")
    print(f"Collection: {result.table_name} ({result.processing_time_ms / 1000:.1f}s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
