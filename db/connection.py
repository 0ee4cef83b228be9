"""
db/connection.py
----------------
Manages the PostgreSQL connection pool and executes statements.
Uses psycopg2's SimpleConnectionPool for connection reuse and
RealDictCursor so rows come back as column -> value mappings.
"""

from contextlib import contextmanager
from typing import Iterator, Optional, Protocol

import psycopg2
from psycopg2 import extras, pool

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN
from db.exceptions import DatabaseConnectionError, QueryError
from query.statement import Statement
from utils.logger import get_logger

logger = get_logger(__name__)


class QueryExecutor(Protocol):
    """What repositories need from the database."""

    def fetch_all(self, statement: Statement) -> list[dict]: ...

    def fetch_one(self, statement: Statement) -> Optional[dict]: ...

    def execute_returning(self, statement: Statement) -> Optional[dict]: ...


class Database:
    """
    Connection pool plus statement execution.

    Usage:
        with Database() as db:
            rows = db.fetch_all(statement)
    """

    def __init__(self, dsn: str = DATABASE_URL, min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX):
        self.dsn = dsn
        self.min_conn = min_conn
        self.max_conn = max_conn
        self._pool: Optional[pool.SimpleConnectionPool] = None

    # ── LIFECYCLE ─────────────────────────────────────────

    def open(self) -> None:
        """
        Create the connection pool. Calling it on an open pool does nothing.

        Raises:
            DatabaseConnectionError: If the database is unreachable.
        """
        if self._pool is not None:
            return
        try:
            self._pool = pool.SimpleConnectionPool(self.min_conn, self.max_conn, self.dsn)
            logger.info("Database connection pool initialized successfully.")
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise DatabaseConnectionError(f"Failed to initialize database pool: {e}") from e

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    def __enter__(self) -> "Database":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @contextmanager
    def connection(self) -> Iterator:
        """
        Borrow a connection from the pool for the duration of the block.

        Connections the server has dropped are discarded instead of being
        returned to the pool.

        Raises:
            DatabaseConnectionError: If the pool is not open or is exhausted.
        """
        if self._pool is None:
            raise DatabaseConnectionError("Database pool not initialized. Call open() first.")
        try:
            conn = self._pool.getconn()
        except pool.PoolError as e:
            logger.error(f"Failed to get a pooled connection: {e}")
            raise DatabaseConnectionError(f"Failed to get a pooled connection: {e}") from e
        try:
            yield conn
        finally:
            self._pool.putconn(conn, close=bool(conn.closed))

    # ── EXECUTION ─────────────────────────────────────────

    def fetch_all(self, statement: Statement) -> list[dict]:
        """
        Run a read statement.

        Returns:
            Every row as a dict; an empty list when nothing matched.

        Raises:
            QueryError: If the statement failed.
        """
        return self._run(statement, lambda cur: [dict(row) for row in cur.fetchall()])

    def fetch_one(self, statement: Statement) -> Optional[dict]:
        """
        Run a read statement expected to match at most one row.

        Returns:
            The first row as a dict, or None when nothing matched.
        """
        return self._run(statement, _first_row)

    def execute_returning(self, statement: Statement) -> Optional[dict]:
        """
        Run a write statement and commit it.

        Returns:
            The row produced by its RETURNING clause, or None without one.
        """
        return self._run(statement, _first_row, commit=True)

    def _run(self, statement: Statement, collect, commit: bool = False):
        sql, params = statement.to_pyformat()
        with self.connection() as conn:
            try:
                with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                    cur.execute(sql, params)
                    result = collect(cur)
                if commit:
                    conn.commit()
                else:
                    # Do not leave the pooled connection idle in a transaction.
                    conn.rollback()
                return result
            except psycopg2.Error as e:
                _rollback_quietly(conn)
                logger.error(f"Query failed: {e}")
                raise QueryError(f"Query failed: {e}", statement=statement.text) from e


def _first_row(cur) -> Optional[dict]:
    if cur.description is None:
        return None
    row = cur.fetchone()
    return dict(row) if row else None


def _rollback_quietly(conn) -> None:
    """Roll back after a failed statement without masking the original error."""
    if conn.closed:
        return
    try:
        conn.rollback()
    except psycopg2.Error as e:
        logger.warning(f"Rollback after failed query also failed: {e}")
