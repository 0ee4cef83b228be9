"""
Tests for the Database executor.

The psycopg2 pool is replaced with mocks; no server is needed.
"""

from unittest.mock import MagicMock, patch

import psycopg2
from psycopg2.pool import PoolError
import pytest

from db.connection import Database
from db.exceptions import DatabaseConnectionError, DatabaseError, QueryError
from query.statement import Statement


@pytest.fixture
def cursor():
    cur = MagicMock()
    cur.description = [("id",)]
    return cur


@pytest.fixture
def conn(cursor):
    connection = MagicMock()
    connection.closed = 0
    connection.cursor.return_value.__enter__.return_value = cursor
    return connection


@pytest.fixture
def mock_pool(conn):
    with patch("db.connection.pool.SimpleConnectionPool") as pool_cls:
        pool_cls.return_value.getconn.return_value = conn
        yield pool_cls


@pytest.fixture
def db(mock_pool):
    database = Database(dsn="postgresql://test@localhost/test")
    database.open()
    yield database
    database.close()


class TestLifecycle:
    """Test opening and closing the pool."""

    def test_open_creates_pool_once(self, mock_pool):
        database = Database(dsn="postgresql://x", min_conn=2, max_conn=4)
        database.open()
        database.open()

        mock_pool.assert_called_once_with(2, 4, "postgresql://x")
        assert database.is_open

    def test_open_failure_raises_connection_error(self, mock_pool):
        mock_pool.side_effect = psycopg2.OperationalError("unreachable")

        with pytest.raises(DatabaseConnectionError) as exc_info:
            Database(dsn="postgresql://x").open()
        assert isinstance(exc_info.value.__cause__, psycopg2.OperationalError)

    def test_close_releases_pool(self, mock_pool):
        database = Database(dsn="postgresql://x")
        database.open()
        database.close()

        mock_pool.return_value.closeall.assert_called_once()
        assert not database.is_open

    def test_context_manager(self, mock_pool):
        with Database(dsn="postgresql://x") as database:
            assert database.is_open
        assert not database.is_open

    def test_query_on_closed_pool(self):
        with pytest.raises(DatabaseConnectionError):
            Database(dsn="postgresql://x").fetch_all(Statement("SELECT 1"))


class TestExecution:
    """Test statement execution and row handling."""

    def test_fetch_all_binds_pyformat_params(self, db, cursor):
        cursor.fetchall.return_value = [{"id": 1}, {"id": 2}]

        rows = db.fetch_all(Statement("SELECT * FROM users WHERE id > $1 LIMIT $2", [0, 5]))

        assert rows == [{"id": 1}, {"id": 2}]
        cursor.execute.assert_called_once_with(
            "SELECT * FROM users WHERE id > %(p1)s LIMIT %(p2)s", {"p1": 0, "p2": 5}
        )

    def test_fetch_all_empty_result(self, db, cursor):
        cursor.fetchall.return_value = []
        assert db.fetch_all(Statement("SELECT 1")) == []

    def test_fetch_one_returns_none_when_no_row(self, db, cursor):
        cursor.fetchone.return_value = None
        assert db.fetch_one(Statement("SELECT * FROM users WHERE id = $1", [9])) is None

    def test_connection_returned_to_pool(self, db, mock_pool, conn, cursor):
        cursor.fetchall.return_value = []
        db.fetch_all(Statement("SELECT 1"))
        mock_pool.return_value.putconn.assert_called_once_with(conn, close=False)

    def test_execute_returning_commits(self, db, conn, cursor):
        cursor.fetchone.return_value = {"id": 3, "name": "Ada"}

        row = db.execute_returning(Statement("INSERT INTO users (name) VALUES ($1) RETURNING *", ["Ada"]))

        assert row == {"id": 3, "name": "Ada"}
        conn.commit.assert_called_once()

    def test_reads_do_not_commit(self, db, conn, cursor):
        cursor.fetchall.return_value = []
        db.fetch_all(Statement("SELECT 1"))
        conn.commit.assert_not_called()


class TestErrors:
    """A failed query is an error, never an empty result."""

    def test_driver_error_raises_query_error(self, db, conn, cursor):
        cursor.execute.side_effect = psycopg2.ProgrammingError("syntax error")
        statement = Statement("SELEC * FROM users")

        with pytest.raises(QueryError) as exc_info:
            db.fetch_all(statement)

        assert exc_info.value.statement == "SELEC * FROM users"
        assert isinstance(exc_info.value.__cause__, psycopg2.ProgrammingError)
        conn.rollback.assert_called()

    def test_failed_write_rolls_back(self, db, conn, cursor):
        cursor.execute.side_effect = psycopg2.IntegrityError("duplicate key")

        with pytest.raises(QueryError):
            db.execute_returning(Statement("INSERT INTO users (email) VALUES ($1) RETURNING *", ["a@b.c"]))

        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()

    def test_connection_returned_after_failure(self, db, mock_pool, conn, cursor):
        cursor.execute.side_effect = psycopg2.OperationalError("server closed the connection")

        with pytest.raises(QueryError):
            db.fetch_one(Statement("SELECT 1"))

        mock_pool.return_value.putconn.assert_called_once_with(conn, close=False)

    def test_dropped_connection_raises_query_error(self, db, mock_pool, conn, cursor):
        def server_gone(*args):
            conn.closed = 2
            raise psycopg2.OperationalError("server closed the connection unexpectedly")

        cursor.execute.side_effect = server_gone
        conn.rollback.side_effect = psycopg2.InterfaceError("connection already closed")

        with pytest.raises(QueryError) as exc_info:
            db.fetch_all(Statement("SELECT 1"))

        assert isinstance(exc_info.value.__cause__, psycopg2.OperationalError)
        conn.rollback.assert_not_called()
        mock_pool.return_value.putconn.assert_called_once_with(conn, close=True)

    def test_failed_rollback_keeps_original_error(self, db, conn, cursor):
        cursor.execute.side_effect = psycopg2.ProgrammingError("syntax error")
        conn.rollback.side_effect = psycopg2.InterfaceError("connection already closed")

        with pytest.raises(QueryError) as exc_info:
            db.fetch_one(Statement("SELEC 1"))

        assert isinstance(exc_info.value.__cause__, psycopg2.ProgrammingError)

    def test_exhausted_pool_raises_connection_error(self, db, mock_pool):
        mock_pool.return_value.getconn.side_effect = PoolError("connection pool exhausted")

        with pytest.raises(DatabaseConnectionError) as exc_info:
            db.fetch_all(Statement("SELECT 1"))

        assert isinstance(exc_info.value, DatabaseError)
        assert isinstance(exc_info.value.__cause__, PoolError)
        mock_pool.return_value.putconn.assert_not_called()
