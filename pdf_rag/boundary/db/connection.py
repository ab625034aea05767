"""
Database connection management.

Provides the SQLAlchemy engine used by the pgvector store.

Dependencies: sqlalchemy, psycopg, pdf_rag.configs
System role: Database connection lifecycle management
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from pdf_rag.configs import DatabaseSettings


def get_engine(database: DatabaseSettings) -> Engine:
    """
    Create SQLAlchemy engine with connection health checks.

    pool_pre_ping=True verifies connections before use to detect stale or
    broken connections early. Creating the engine does not open a connection.

    Args:
        database: Database settings (URL, echo flag)

    Returns:
        Engine: Configured SQLAlchemy engine

    Raises:
        ArgumentError: If the database URL is invalid

    Usage:
        engine = get_engine(settings.database)
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    """
    return create_engine(
        database.sqlalchemy_url,
        echo=database.echo_sql,
        pool_pre_ping=True,
    )
