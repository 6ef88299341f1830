"""
PostgreSQL database access

This module centralizes every way the application reaches the database:
- psycopg2 connections with retry logic (SSL failure recovery)
- PostgresSession: one connection shared by the repositories serving a
  request, with an async transaction boundary
- get_session: FastAPI dependency yielding a session per request

psycopg2 is blocking, so every database call goes through the FastAPI
threadpool and never runs on the event loop.
"""
import logging
import time
from contextlib import asynccontextmanager, contextmanager

import psycopg2
from psycopg2.extras import RealDictCursor
from fastapi.concurrency import run_in_threadpool

from .config import settings

logger = logging.getLogger(__name__)

# Seconds to wait for the server before giving up on a connection attempt
CONNECTION_TIMEOUT = 10


def get_db_connection_with_retry(max_retries=None, retry_delay=None):
    """
    Get a psycopg2 connection with automatic retry on SSL/connection failures

    Args:
        max_retries: Maximum number of connection attempts (default: settings.DB_MAX_RETRIES)
        retry_delay: Initial delay between retries in seconds (default: settings.DB_RETRY_DELAY)

    Returns:
        psycopg2 connection object

    Raises:
        RuntimeError: If DATABASE_URL is not configured
        psycopg2.OperationalError: If all retry attempts fail
    """
    database_url = settings.DATABASE_URL
    if not database_url:
        raise RuntimeError("DATABASE_URL not configured")

    if max_retries is None:
        max_retries = settings.DB_MAX_RETRIES
    if retry_delay is None:
        retry_delay = settings.DB_RETRY_DELAY

    last_error = None

    for attempt in range(1, max_retries + 1):
        try:
            logger.debug(f"Database connection attempt {attempt}/{max_retries}")
            conn = psycopg2.connect(database_url, connect_timeout=CONNECTION_TIMEOUT)

            # Test connection with a simple query
            cursor = conn.cursor()
            cursor.execute("SELECT 1")
            cursor.close()

            logger.debug(f"Database connection successful on attempt {attempt}")
            return conn

        except psycopg2.OperationalError as e:
            last_error = e
            error_msg = str(e)

            if "SSL connection has been closed unexpectedly" in error_msg:
                logger.warning(f"SSL connection error on attempt {attempt}/{max_retries}: {error_msg}")
            else:
                logger.warning(f"Connection error on attempt {attempt}/{max_retries}: {error_msg}")

            # Don't retry on last attempt
            if attempt < max_retries:
                # Exponential backoff
                delay = retry_delay * (2 ** (attempt - 1))
                logger.info(f"Retrying in {delay:.2f} seconds...")
                time.sleep(delay)
            else:
                logger.error(f"All {max_retries} connection attempts failed")
                raise

    raise last_error if last_error else RuntimeError("Connection failed after all retries")


class PostgresSession:
    """
    A psycopg2 connection shared by the repositories of one request

    Outside of transaction() every cursor block commits (or rolls back) on
    its own. Inside transaction() cursor blocks only execute; the whole
    block commits on success and rolls back on any exception.
    """

    def __init__(self, connection):
        self.connection = connection
        self._in_transaction = False

    @property
    def in_transaction(self) -> bool:
        return self._in_transaction

    async def run(self, fn, *args, **kwargs):
        """Run a blocking repository function in the threadpool"""
        return await run_in_threadpool(fn, *args, **kwargs)

    @contextmanager
    def cursor(self):
        """RealDictCursor scoped to one unit of repository work"""
        cursor = self.connection.cursor(cursor_factory=RealDictCursor)
        try:
            yield cursor
        except Exception:
            if not self._in_transaction:
                self.connection.rollback()
            raise
        else:
            if not self._in_transaction:
                self.connection.commit()
        finally:
            cursor.close()

    @asynccontextmanager
    async def transaction(self):
        """
        Transaction spanning several repository calls

        Nested calls join the outer transaction.
        """
        if self._in_transaction:
            yield
            return

        self._in_transaction = True
        try:
            yield
        except Exception:
            logger.warning("Rolling back transaction")
            await run_in_threadpool(self.connection.rollback)
            raise
        else:
            await run_in_threadpool(self.connection.commit)
        finally:
            self._in_transaction = False

    def close(self):
        self.connection.close()


def get_session():
    """
    FastAPI dependency yielding a PostgresSession for the request

    Usage:
        @router.get("/items")
        async def read_items(session: PostgresSession = Depends(get_session)):
            ...
    """
    session = PostgresSession(get_db_connection_with_retry())
    try:
        yield session
    finally:
        session.close()
