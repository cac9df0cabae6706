"""
db/connection.py
----------------
Connection-provisioning strategies.

Data access objects never open connections themselves: they receive a
``ConnectionMaker`` and ask it for a connection per operation. Closing the
handle they get back releases it, whatever that means for the strategy
(a real disconnect, or a return to the pool).
"""

from contextlib import contextmanager
from typing import Iterator, Protocol

import psycopg2
from psycopg2 import pool

from db.errors import ConnectionFailedError
from utils.logger import get_logger

logger = get_logger(__name__)


class ConnectionMaker(Protocol):
    """Anything that can hand out a live DB-API connection."""

    def make_connection(self):
        """
        Provision one connection.

        Returns:
            A connection exposing ``cursor()``, ``commit()``, ``rollback()``
            and ``close()``.

        Raises:
            ConnectionFailedError: If no connection can be provided.
        """
        ...


class SimpleConnectionMaker:
    """Opens a brand new connection on every call."""

    def __init__(self, dsn: str):
        self.dsn = dsn

    def make_connection(self):
        try:
            return psycopg2.connect(self.dsn)
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to connect to database: {e}")
            raise ConnectionFailedError(f"Could not connect to database: {e}") from e


class PooledConnection:
    """
    A pooled psycopg2 connection whose ``close()`` returns it to the pool.

    Everything else is delegated to the underlying connection.
    """

    def __init__(self, conn, pool_: pool.AbstractConnectionPool):
        self._conn = conn
        self._pool = pool_
        self._released = False

    def close(self) -> None:
        if self._released:
            return
        self._released = True
        self._pool.putconn(self._conn)

    @property
    def closed(self) -> bool:
        return self._released or bool(self._conn.closed)

    def __getattr__(self, name):
        return getattr(self._conn, name)


class PooledConnectionMaker:
    """
    Hands out connections from a psycopg2 SimpleConnectionPool.

    The pool is created lazily on the first request.
    """

    def __init__(self, dsn: str, min_conn: int = 1, max_conn: int = 5):
        self.dsn = dsn
        self.min_conn = min_conn
        self.max_conn = max_conn
        self._pool: pool.SimpleConnectionPool | None = None

    def _ensure_pool(self) -> pool.SimpleConnectionPool:
        if self._pool is None:
            try:
                self._pool = pool.SimpleConnectionPool(self.min_conn, self.max_conn, self.dsn)
            except psycopg2.OperationalError as e:
                logger.error(f"Failed to initialize database pool: {e}")
                raise ConnectionFailedError(f"Could not initialize connection pool: {e}") from e
            logger.info("Database connection pool initialized successfully.")
        return self._pool

    def make_connection(self) -> PooledConnection:
        pool_ = self._ensure_pool()
        try:
            conn = pool_.getconn()
        except pool.PoolError as e:
            logger.error(f"Connection pool refused a connection: {e}")
            raise ConnectionFailedError(f"Connection pool unavailable: {e}") from e
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to open pooled connection: {e}")
            raise ConnectionFailedError(f"Could not connect to database: {e}") from e
        return PooledConnection(conn, pool_)

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")


class CountingConnectionMaker:
    """Wraps another maker and counts how many connections were requested."""

    def __init__(self, inner: ConnectionMaker):
        self.inner = inner
        self.counter = 0

    def make_connection(self):
        self.counter += 1
        return self.inner.make_connection()


@contextmanager
def connection_scope(connection_maker: ConnectionMaker) -> Iterator:
    """
    Acquire a connection for the duration of a ``with`` block.

    The connection is closed exactly once when the block exits, whether it
    returns or raises.

    Args:
        connection_maker: The strategy to acquire the connection from.

    Yields:
        The live connection.
    """
    conn = connection_maker.make_connection()
    try:
        yield conn
    finally:
        conn.close()
