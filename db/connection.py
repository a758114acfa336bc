"""
db/connection.py
----------------
PostgreSQL connection pool for the expense store.
Repositories borrow connections through the `cursor()` context manager,
which commits on success, rolls back on error and always returns the
connection to the pool.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL, TIMEZONE
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: Optional[pool.SimpleConnectionPool] = None


def init_pool(dsn: str = DATABASE_URL, min_conn: int = 1, max_conn: int = 5) -> None:
    """
    Open the connection pool. Sessions use the application timezone so
    TIMESTAMPTZ values come back in local time.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.SimpleConnectionPool(
            min_conn, max_conn, dsn, options=f"-c timezone={TIMEZONE}"
        )
        logger.info("Database connection pool initialized.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise


@contextmanager
def cursor() -> Iterator["psycopg2.extensions.cursor"]:
    """
    Borrow a pooled connection and yield a cursor inside a transaction.

    Raises:
        RuntimeError: If init_pool() has not been called.
    """
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")

    conn = _pool.getconn()
    try:
        with conn.cursor() as cur:
            yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        _pool.putconn(conn)


def close_pool() -> None:
    """Close all connections in the pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection pool closed.")
