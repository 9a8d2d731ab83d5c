"""
Connection pool for reading nfl_fantasy_trends from Postgres.

The API only ever reads, and the stats endpoint issues its leaderboard
queries concurrently, so the pool is sized for one request's fan-out
(seven queries) plus headroom. Rows come back as dicts keyed by column.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool


class AsyncPostgresDB:
    """Lazily opened psycopg3 async pool with dict-row read helpers."""

    def __init__(
        self,
        connection_string: Optional[str],
        min_pool_size: int = 2,
        max_pool_size: int = 10,
        application_name: str = "fantasy-trends",
    ):
        if not connection_string:
            raise ValueError("A database URL is required (set DATABASE_URL or SUPABASE_DB_URL)")

        self.connection_string = connection_string
        self.max_pool_size = max_pool_size
        # psycopg_pool rejects min_size > max_size
        self.min_pool_size = min(min_pool_size, max_pool_size)
        self.application_name = application_name
        self._pool: Optional[AsyncConnectionPool] = None

    async def initialize(self) -> None:
        """Open the pool; a second call is a no-op."""
        if self._pool is not None:
            return
        pool = AsyncConnectionPool(
            self.connection_string,
            min_size=self.min_pool_size,
            max_size=self.max_pool_size,
            kwargs={
                "row_factory": dict_row,
                "application_name": self.application_name,
            },
            open=False,
        )
        await pool.open()
        self._pool = pool

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None

    @asynccontextmanager
    async def get_connection(self) -> AsyncIterator[psycopg.AsyncConnection]:
        """Borrow a pooled connection, opening the pool on first use."""
        if self._pool is None:
            await self.initialize()
        async with self._pool.connection() as conn:
            yield conn

    async def fetchone(self, query: str, params: tuple = ()) -> Optional[dict[str, Any]]:
        async with self.get_connection() as conn:
            cur = await conn.execute(query, params)
            row = await cur.fetchone()
            return dict(row) if row else None

    async def fetchall(self, query: str, params: tuple = ()) -> list[dict[str, Any]]:
        """Run ``query`` and return every row; trend reads are never paged in SQL."""
        async with self.get_connection() as conn:
            cur = await conn.execute(query, params)
            return [dict(row) for row in await cur.fetchall()]
