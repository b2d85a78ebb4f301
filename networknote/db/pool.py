"""
Async PostgreSQL pool (psycopg_pool) for the Supabase database.

Opened in the app lifespan and closed on shutdown. Connections hand out
dict rows, run in autocommit and carry the service's application_name.
"""

import asyncio
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import psycopg
from psycopg import sql
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from networknote.config import settings
from networknote.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

CLOSE_TIMEOUT_SECONDS = 30.0


class DatabasePoolManager:
    """Owns the single AsyncConnectionPool for the process."""

    def __init__(self, conninfo: str | None = None):
        self.conninfo = conninfo or settings.SUPABASE_DB_URL
        self.pool: AsyncConnectionPool | None = None
        self._closed = False

    @property
    def initialized(self) -> bool:
        return self.pool is not None and not self._closed

    async def initialize(self) -> None:
        if self.pool is not None:
            logger.warning("Database pool already initialized")
            return
        if self._closed:
            raise RuntimeError("Cannot reinitialize closed pool")

        pool_config = settings.get_db_pool_config()
        logger.info("Opening database pool", **pool_config)

        pool = AsyncConnectionPool(
            conninfo=self.conninfo,
            open=False,
            check=AsyncConnectionPool.check_connection,
            configure=self._configure_connection,
            **pool_config,
        )
        try:
            await pool.open(wait=True, timeout=pool_config["timeout"])
            self.pool = pool
            await self._probe()
        except (psycopg.Error, RuntimeError, TimeoutError) as e:
            logger.error("Database pool failed to open", error=str(e), error_type=type(e).__name__)
            self.pool = None
            await pool.close()
            raise RuntimeError(f"Database pool initialization failed: {e}") from e

        logger.info("Database pool ready", min_size=pool_config["min_size"], max_size=pool_config["max_size"])

    @staticmethod
    async def _configure_connection(conn: psycopg.AsyncConnection) -> None:
        conn.row_factory = dict_row
        await conn.set_autocommit(True)
        await conn.execute(
            sql.SQL("SET application_name = {}").format(
                sql.Literal(f"networknote-{settings.environment}")
            )
        )
        await conn.execute("SET timezone = 'UTC'")
        await conn.execute(
            sql.SQL("SET statement_timeout = {}").format(sql.Literal(settings.DB_STATEMENT_TIMEOUT))
        )

    async def _probe(self) -> float:
        """Run `SELECT 1` on a pooled connection; return elapsed milliseconds."""
        started = time.perf_counter()
        async with self.connection() as conn:
            cursor = await conn.execute("SELECT 1 AS ok")
            row = await cursor.fetchone()
        if not row or row.get("ok") != 1:
            raise RuntimeError(f"Unexpected probe result: {row!r}")
        return (time.perf_counter() - started) * 1000

    async def close(self) -> None:
        if self.pool is None or self._closed:
            return

        logger.info("Closing database pool")
        pool, self.pool = self.pool, None
        self._closed = True
        try:
            await asyncio.wait_for(pool.close(), timeout=CLOSE_TIMEOUT_SECONDS)
        except TimeoutError:
            logger.warning("Database pool close timed out", timeout=CLOSE_TIMEOUT_SECONDS)
            return
        logger.info("Database pool closed")

    @asynccontextmanager
    async def connection(self) -> AsyncGenerator[psycopg.AsyncConnection, None]:
        """
        Borrow a connection.

        Usage:
            async with db_pool.connection() as conn:
                await conn.execute("SELECT 1")
        """
        if self._closed:
            raise RuntimeError("Database pool is closed")
        if self.pool is None:
            raise RuntimeError("Database pool not initialized. Call initialize() first.")

        async with self.pool.connection() as conn:
            yield conn

    async def health_check(self) -> dict[str, Any]:
        if not self.initialized:
            reason = "Pool is closed" if self._closed else "Pool not initialized"
            return {"healthy": False, "error": reason, "service": "database_pool"}

        try:
            connection_time_ms = await self._probe()
        except (psycopg.Error, RuntimeError, TimeoutError) as e:
            logger.error("Database pool health check failed", error=str(e))
            return {
                "healthy": False,
                "service": "database_pool",
                "error": str(e),
                "error_type": type(e).__name__,
            }

        stats = self.pool.get_stats()
        pool_size = stats.get("pool_size", 0)
        pool_available = stats.get("pool_available", 0)
        requests_waiting = stats.get("requests_waiting", 0)
        utilization = (pool_size - pool_available) / pool_size * 100 if pool_size else 0.0

        warnings = []
        if utilization > settings.DB_HEALTH_MAX_UTILIZATION - 10:
            warnings.append(f"High pool utilization: {utilization:.1f}%")
        if requests_waiting:
            warnings.append(f"Requests waiting for connections: {requests_waiting}")

        health = {
            "healthy": utilization < settings.DB_HEALTH_MAX_UTILIZATION
            and connection_time_ms < settings.DB_HEALTH_MAX_CONNECT_MS,
            "service": "database_pool",
            "connection_time_ms": round(connection_time_ms, 2),
            "pool_stats": {
                "pool_size": pool_size,
                "pool_available": pool_available,
                "pool_utilization_percent": round(utilization, 2),
                "requests_waiting": requests_waiting,
            },
        }
        if warnings:
            health["warnings"] = warnings
        return health


db_pool = DatabasePoolManager()


async def get_db_connection():
    """Pooled connection context manager (used by the query helpers)."""
    return db_pool.connection()


async def db_health_check() -> dict[str, Any]:
    return await db_pool.health_check()
