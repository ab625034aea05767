"""Tests for PGVectorStore against a mocked SQLAlchemy engine."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from pdf_rag.boundary.vdb import PGVectorStore, VectorStore
from pdf_rag.configs import DatabaseSettings
from pdf_rag.core.document_processing.models import Chunk
from pdf_rag.core.exceptions import (
    DimensionMismatchError,
    StoreNotReadyError,
    VectorStoreConnectionError,
    VectorStoreError,
)

DIMENSION = 4


def _engine(existing_dimension: int | None = DIMENSION) -> MagicMock:
    engine = MagicMock()
    engine.connect.return_value.__enter__.return_value.execute.return_value.scalar.return_value = existing_dimension
    return engine


def _sql(engine: MagicMock, method: str = "begin") -> str:
    """Compile the last statement executed through engine.<method>()."""
    conn = getattr(engine, method).return_value.__enter__.return_value
    statement = conn.execute.call_args.args[0]
    return str(statement.compile(dialect=postgresql.dialect()))


@pytest.fixture
def engine() -> MagicMock:
    return _engine()


@pytest.fixture
def pg_store(engine) -> PGVectorStore:
    store = PGVectorStore(DatabaseSettings(collection_name="pdf_documents"), dimension=DIMENSION, engine=engine)
    store.initialize()
    return store


def _chunk(cid: str = "c1", embedding: list[float] | None = None) -> Chunk:
    return Chunk(
        id=cid,
        content="text",
        metadata={"source": "doc.pdf", "page": 1, "totalPages": 1},
        embedding=embedding if embedding is not None else [0.1, 0.2, 0.3, 0.4],
    )


# ============================================================================
# initialize
# ============================================================================


class TestInitialize:
    """Test extension/table setup and failure mapping."""

    def test_ready_after_initialize(self, pg_store, engine) -> None:
        """Should enable the vector extension and report ready."""
        assert pg_store.is_ready
        assert "CREATE EXTENSION IF NOT EXISTS vector" in _sql(engine)

    def test_satisfies_store_protocol(self, pg_store) -> None:
        """Should be usable wherever a VectorStore is expected."""
        assert isinstance(pg_store, VectorStore)

    def test_unreachable_database(self) -> None:
        """Should raise VectorStoreConnectionError and stay not ready."""
        # Arrange
        engine = _engine()
        engine.begin.side_effect = OperationalError("connect", {}, Exception("connection refused"))
        store = PGVectorStore(DatabaseSettings(), dimension=DIMENSION, engine=engine)

        # Act / Assert
        with pytest.raises(VectorStoreConnectionError):
            store.initialize()
        assert not store.is_ready

    def test_existing_table_other_dimension(self) -> None:
        """Should refuse a table created for another vector size."""
        store = PGVectorStore(DatabaseSettings(), dimension=DIMENSION, engine=_engine(existing_dimension=768))

        with pytest.raises(VectorStoreConnectionError) as exc_info:
            store.initialize()

        assert exc_info.value.details["actual"] == 768
        assert not store.is_ready


# ============================================================================
# Operations
# ============================================================================


class TestOperations:
    """Test upsert, delete, search and close."""

    def test_operations_need_initialize(self, engine) -> None:
        """Should raise StoreNotReadyError before initialize()."""
        store = PGVectorStore(DatabaseSettings(), dimension=DIMENSION, engine=engine)

        with pytest.raises(StoreNotReadyError):
            store.upsert([_chunk()])
        with pytest.raises(StoreNotReadyError):
            store.nearest_neighbors([0.0] * DIMENSION, 1)

    def test_upsert_on_conflict(self, pg_store, engine) -> None:
        """Should write with ON CONFLICT (id) DO UPDATE."""
        written = pg_store.upsert([_chunk("a"), _chunk("b")])

        sql = _sql(engine)
        assert written == 2
        assert "INSERT INTO pdf_documents" in sql
        assert "ON CONFLICT (id) DO UPDATE" in sql

    def test_upsert_rejects_wrong_dimension(self, pg_store) -> None:
        """Should validate every embedding before writing."""
        with pytest.raises(DimensionMismatchError):
            pg_store.upsert([_chunk("a"), _chunk("b", embedding=[1.0, 2.0])])

    def test_upsert_rejects_missing_embedding(self, pg_store) -> None:
        """Should refuse chunks that were never embedded."""
        chunk = Chunk(id="x", content="x")

        with pytest.raises(DimensionMismatchError):
            pg_store.upsert([chunk])

    def test_upsert_empty_is_noop(self, pg_store, engine) -> None:
        """Should not open a transaction for nothing."""
        engine.begin.reset_mock()

        assert pg_store.upsert([]) == 0
        engine.begin.assert_not_called()

    def test_upsert_failure_wrapped(self, pg_store, engine) -> None:
        """Should wrap database errors with the operation name."""
        engine.begin.side_effect = OperationalError("insert", {}, Exception("disk full"))

        with pytest.raises(VectorStoreError) as exc_info:
            pg_store.upsert([_chunk()])

        assert exc_info.value.operation == "upsert"

    def test_delete_by_source(self, pg_store, engine) -> None:
        """Should delete by metadata source and return the row count."""
        engine.begin.return_value.__enter__.return_value.execute.return_value.rowcount = 3

        deleted = pg_store.delete_by_source("doc.pdf")

        assert deleted == 3
        assert "->>" in _sql(engine)

    def test_replace_source_single_transaction(self, pg_store, engine) -> None:
        """Should delete and upsert through one connection of one transaction."""
        # Arrange
        engine.begin.reset_mock()
        conn = engine.begin.return_value.__enter__.return_value
        conn.execute.return_value.rowcount = 2

        # Act
        deleted, written = pg_store.replace_source("doc.pdf", [_chunk("a")])

        # Assert
        engine.begin.assert_called_once()
        statements = [str(c.args[0].compile(dialect=postgresql.dialect())) for c in conn.execute.call_args_list]
        assert statements[0].startswith("DELETE FROM pdf_documents")
        assert statements[1].startswith("INSERT INTO pdf_documents")
        assert (deleted, written) == (2, 1)

    def test_replace_source_failed_upsert_rolls_back(self, pg_store, engine) -> None:
        """Should let the transaction see the insert failure so the delete is rolled back."""
        # Arrange
        engine.begin.reset_mock()
        transaction = engine.begin.return_value
        transaction.__exit__.return_value = False
        transaction.__enter__.return_value.execute.side_effect = [
            MagicMock(rowcount=2),
            OperationalError("insert", {}, Exception("connection reset")),
        ]

        # Act
        with pytest.raises(VectorStoreError) as exc_info:
            pg_store.replace_source("doc.pdf", [_chunk("a")])

        # Assert
        assert exc_info.value.operation == "replace"
        engine.begin.assert_called_once()
        assert transaction.__exit__.call_args.args[0] is OperationalError

    def test_replace_source_checks_dimension_before_writing(self, pg_store, engine) -> None:
        """Should not open a transaction when a replacement vector has the wrong size."""
        engine.begin.reset_mock()

        with pytest.raises(DimensionMismatchError):
            pg_store.replace_source("doc.pdf", [_chunk("a", embedding=[1.0])])

        engine.begin.assert_not_called()

    def test_nearest_neighbors(self, pg_store, engine) -> None:
        """Should order by cosine distance and map rows to chunks."""
        # Arrange
        conn = engine.connect.return_value.__enter__.return_value
        conn.execute.return_value.all.return_value = [
            ("c1", "first", {"source": "doc.pdf"}, 0.05),
            ("c2", "second", None, 0.4),
        ]

        # Act
        results = pg_store.nearest_neighbors([0.1, 0.2, 0.3, 0.4], k=2)

        # Assert
        sql = _sql(engine, method="connect")
        assert "<=>" in sql
        assert "ORDER BY distance" in sql
        assert "LIMIT" in sql
        assert [(c.id, d) for c, d in results] == [("c1", 0.05), ("c2", 0.4)]
        assert results[1][0].metadata == {}

    def test_query_dimension_checked(self, pg_store) -> None:
        """Should reject a query vector of the wrong size."""
        with pytest.raises(DimensionMismatchError):
            pg_store.nearest_neighbors([1.0], k=1)

    def test_close_idempotent(self, pg_store, engine) -> None:
        """Should dispose the engine once and report not ready."""
        pg_store.close()
        pg_store.close()

        engine.dispose.assert_called_once()
        assert not pg_store.is_ready
