"""
Query helpers over the shared pool.

Any psycopg error, and a pool that is not available, is raised as
PersistenceFailure with the original exception as __cause__. Repositories
catch nothing; services decide whether to fall back to demo data.
"""

import asyncio
import functools
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import psycopg

from networknote.db.pool import get_db_connection
from networknote.errors import PersistenceFailure
from networknote.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def _borrowed(
    operation: str, query: str, connection: psycopg.AsyncConnection | None
) -> AsyncGenerator[psycopg.AsyncConnection, None]:
    try:
        if connection is not None:
            yield connection
        else:
            async with await get_db_connection() as conn:
                yield conn
    except (psycopg.Error, RuntimeError) as e:
        logger.error("Query failed", operation=operation, query=query[:100], error=str(e))
        raise PersistenceFailure(f"Query failed: {e}", operation=operation) from e


async def fetch_one(
    query: str, params: tuple = (), *, connection: psycopg.AsyncConnection | None = None
) -> dict[str, Any] | None:
    """
    Run `query` and return the first row as a dict, or None.

    Args:
        query: SQL with %s placeholders
        params: positional parameters
        connection: reuse this connection instead of borrowing one
    """
    async with _borrowed("fetch_one", query, connection) as conn:
        cursor = await conn.execute(query, params)
        return await cursor.fetchone()


async def fetch_all(
    query: str, params: tuple = (), *, connection: psycopg.AsyncConnection | None = None
) -> list[dict[str, Any]]:
    async with _borrowed("fetch_all", query, connection) as conn:
        cursor = await conn.execute(query, params)
        return await cursor.fetchall()


async def fetch_val(
    query: str, params: tuple = (), *, connection: psycopg.AsyncConnection | None = None
) -> Any:
    """First column of the first row (COUNT queries)."""
    row = await fetch_one(query, params, connection=connection)
    return next(iter(row.values())) if row else None


async def execute_query(
    query: str, params: tuple = (), *, connection: psycopg.AsyncConnection | None = None
) -> int:
    """Run a statement and return the affected row count."""
    async with _borrowed("execute", query, connection) as conn:
        cursor = await conn.execute(query, params)
        return cursor.rowcount


def with_db_retry(max_retries: int = 3, base_delay: float = 0.1):
    """
    Retry a coroutine whose PersistenceFailure was caused by a
    psycopg.OperationalError (dropped connection, server restart).
    Delays double per attempt starting at `base_delay`.
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            attempt = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except PersistenceFailure as e:
                    transient = isinstance(e.__cause__, psycopg.OperationalError)
                    if not transient or attempt >= max_retries:
                        raise
                    delay = base_delay * (2**attempt)
                    attempt += 1
                    logger.warning(
                        "Retrying database operation",
                        operation=func.__name__,
                        attempt=attempt,
                        max_retries=max_retries,
                        delay=delay,
                        error=e.message,
                    )
                    await asyncio.sleep(delay)

        return wrapper

    return decorator
