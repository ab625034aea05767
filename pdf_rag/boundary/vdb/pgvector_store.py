"""
PostgreSQL + pgvector store for document chunks.

One table per collection with columns id (text primary key), vector
(vector(D)), content (text) and metadata (JSONB). Similarity search orders by
cosine distance (the pgvector <=> operator), lower meaning more similar.

Dependencies: sqlalchemy, pgvector, psycopg
System role: Vector store adapter used by ingestion and retrieval
"""

import logging

from pgvector.sqlalchemy import Vector
from sqlalchemy import Column, MetaData, Table, Text, delete, select, text
from sqlalchemy.dialects.postgresql import JSONB, insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from pdf_rag.boundary.db.connection import get_engine
from pdf_rag.configs import DatabaseSettings
from pdf_rag.core.document_processing.models import Chunk
from pdf_rag.core.exceptions import (
    DimensionMismatchError,
    StoreNotReadyError,
    VectorStoreConnectionError,
    VectorStoreError,
)

logger = logging.getLogger(__name__)


class PGVectorStore:
    """
    pgvector-backed chunk store.

    Not usable until initialize() succeeds; every operation on an
    uninitialized store raises StoreNotReadyError.
    """

    def __init__(
        self,
        database: DatabaseSettings,
        dimension: int,
        engine: Engine | None = None,
    ) -> None:
        """
        Initialize the store without touching the database.

        Args:
            database: Connection and collection settings
            dimension: Embedding dimensionality D of the collection
            engine: Optional pre-built engine (built from settings when omitted)
        """
        self._database = database
        self._dimension = dimension
        self._engine = engine
        self._ready = False
        self._metadata = MetaData()
        self._table = Table(
            database.collection_name,
            self._metadata,
            Column("id", Text, primary_key=True),
            Column("vector", Vector(dimension), nullable=False),
            Column("content", Text, nullable=False),
            Column("metadata", JSONB, nullable=False, server_default=text("'{}'::jsonb")),
        )

    @property
    def table_name(self) -> str:
        return self._table.name

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def is_ready(self) -> bool:
        """True once initialize() succeeded and close() has not been called."""
        return self._ready

    def initialize(self) -> None:
        """
        Connect, enable the vector extension and create the table if missing.

        Raises:
            VectorStoreConnectionError: When the database is unreachable, the
                extension or table cannot be created, or an existing table was
                created with a different dimensionality
        """
        try:
            if self._engine is None:
                self._engine = get_engine(self._database)

            with self._engine.begin() as conn:
                conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
            self._metadata.create_all(self._engine)

            existing = self._existing_dimension()
            if existing is not None and existing != self._dimension:
                raise DimensionMismatchError(expected=self._dimension, actual=existing)

        except DimensionMismatchError as e:
            self._ready = False
            raise VectorStoreConnectionError(
                f"Table '{self.table_name}' stores vectors of a different size",
                details={"table": self.table_name, **e.details},
            ) from e
        except SQLAlchemyError as e:
            self._ready = False
            logger.error(f"Error initializing vector store: {type(e).__name__}: {e}")
            raise VectorStoreConnectionError(
                f"Failed to initialize vector store: {e}",
                details={"table": self.table_name},
            ) from e

        self._ready = True
        logger.info(f"Vector store ready (table={self.table_name}, dimension={self._dimension})")

    def _existing_dimension(self) -> int | None:
        # pgvector stores the declared dimension in atttypmod
        query = text(
            "SELECT atttypmod FROM pg_attribute "
            "WHERE attrelid = CAST(:table AS regclass) AND attname = 'vector'"
        )
        with self._engine.connect() as conn:
            value = conn.execute(query, {"table": self.table_name}).scalar()
        if value is None or value < 0:
            return None
        return int(value)

    def _require_ready(self) -> Engine:
        if not self._ready or self._engine is None:
            raise StoreNotReadyError()
        return self._engine

    def _check_vector(self, vector: list[float] | None) -> list[float]:
        if vector is None:
            raise DimensionMismatchError(expected=self._dimension, actual=0)
        if len(vector) != self._dimension:
            raise DimensionMismatchError(expected=self._dimension, actual=len(vector))
        return vector

    def upsert(self, chunks: list[Chunk]) -> int:
        """
        Insert or replace chunks by id in a single transaction.

        Args:
            chunks: Chunks carrying embeddings of length D

        Returns:
            int: Number of chunks written

        Raises:
            StoreNotReadyError: When the store is not initialized
            DimensionMismatchError: When any embedding length differs from D
            VectorStoreError: When the write fails
        """
        if not chunks:
            return 0

        engine = self._require_ready()
        stmt = self._upsert_statement(chunks)

        try:
            with engine.begin() as conn:
                conn.execute(stmt)
        except SQLAlchemyError as e:
            raise VectorStoreError(
                f"Failed to upsert chunks: {e}",
                operation="upsert",
                details={"table": self.table_name, "chunk_count": len(chunks)},
            ) from e

        logger.info(f"Upserted {len(chunks)} chunks into {self.table_name}")
        return len(chunks)

    def _upsert_statement(self, chunks: list[Chunk]):
        rows = [
            {
                "id": chunk.id,
                "vector": self._check_vector(chunk.embedding),
                "content": chunk.content,
                "metadata": chunk.metadata,
            }
            for chunk in chunks
        ]
        stmt = insert(self._table).values(rows)
        return stmt.on_conflict_do_update(
            index_elements=[self._table.c.id],
            set_={
                "vector": stmt.excluded.vector,
                "content": stmt.excluded.content,
                "metadata": stmt.excluded["metadata"],
            },
        )

    def _delete_statement(self, source: str):
        return delete(self._table).where(self._table.c["metadata"]["source"].astext == source)

    def replace_source(self, source: str, chunks: list[Chunk]) -> tuple[int, int]:
        """
        Swap the rows of one document for new chunks in a single transaction.

        Either both the delete and the upsert commit or neither does, so a
        failed re-ingestion leaves the previous rows in place.

        Args:
            source: Document path stored in metadata.source
            chunks: Replacement chunks carrying embeddings of length D

        Returns:
            tuple[int, int]: (rows deleted, chunks written)

        Raises:
            StoreNotReadyError: When the store is not initialized
            DimensionMismatchError: When any embedding length differs from D
            VectorStoreError: When the transaction fails (rolled back)
        """
        engine = self._require_ready()
        upsert_stmt = self._upsert_statement(chunks) if chunks else None

        try:
            with engine.begin() as conn:
                deleted = conn.execute(self._delete_statement(source)).rowcount
                if upsert_stmt is not None:
                    conn.execute(upsert_stmt)
        except SQLAlchemyError as e:
            raise VectorStoreError(
                f"Failed to replace chunks of {source}: {e}",
                operation="replace",
                details={"table": self.table_name, "source": source, "chunk_count": len(chunks)},
            ) from e

        logger.info(f"Replaced {deleted} rows of {source} with {len(chunks)} chunks in {self.table_name}")
        return deleted, len(chunks)

    def delete_by_source(self, source: str) -> int:
        """
        Remove every chunk whose metadata.source equals source.

        Returns:
            int: Number of rows deleted

        Raises:
            StoreNotReadyError: When the store is not initialized
            VectorStoreError: When the delete fails
        """
        engine = self._require_ready()

        try:
            with engine.begin() as conn:
                deleted = conn.execute(self._delete_statement(source)).rowcount
        except SQLAlchemyError as e:
            raise VectorStoreError(
                f"Failed to delete chunks: {e}",
                operation="delete",
                details={"table": self.table_name, "source": source},
            ) from e

        if deleted:
            logger.info(f"Deleted {deleted} existing chunks for {source}")
        return deleted

    def nearest_neighbors(self, vector: list[float], k: int) -> list[tuple[Chunk, float]]:
        """
        Return up to k chunks ordered by ascending cosine distance.

        Args:
            vector: Query embedding of length D
            k: Maximum number of results

        Returns:
            list[tuple[Chunk, float]]: (chunk, distance) pairs, nearest first

        Raises:
            StoreNotReadyError: When the store is not initialized
            DimensionMismatchError: When the query vector length differs from D
            VectorStoreError: When the query fails
        """
        engine = self._require_ready()
        self._check_vector(vector)

        distance = self._table.c.vector.cosine_distance(vector).label("distance")
        stmt = (
            select(
                self._table.c.id,
                self._table.c.content,
                self._table.c["metadata"],
                distance,
            )
            .order_by(distance)
            .limit(k)
        )

        try:
            with engine.connect() as conn:
                rows = conn.execute(stmt).all()
        except SQLAlchemyError as e:
            raise VectorStoreError(
                f"Similarity search failed: {e}",
                operation="query",
                details={"table": self.table_name, "k": k},
            ) from e

        return [
            (Chunk(id=row[0], content=row[1], metadata=row[2] or {}), float(row[3]))
            for row in rows
        ]

    def close(self) -> None:
        """Dispose the engine. Safe to call more than once."""
        self._ready = False
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            logger.debug(f"Vector store connection closed ({self.table_name})")
