"""
PostgreSQL repository implementation.

Renders TrendQuery descriptions to SQL and runs them on the async
connection pool. NUMERIC percentages come back as Decimal and are
normalized to float here so aggregation never mixes the two.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional

from ..pg_async import AsyncPostgresDB
from ..query_builder import TrendQuery
from .base import StoreError, TrendsRepository

logger = logging.getLogger(__name__)


def normalize_row(row: dict[str, Any]) -> dict[str, Any]:
    """Convert Decimal values to float."""
    return {
        key: float(value) if isinstance(value, Decimal) else value
        for key, value in row.items()
    }


class PostgresTrendsRepository(TrendsRepository):
    """PostgreSQL implementation for observation reads."""

    def __init__(
        self,
        db: AsyncPostgresDB,
        table: str = "nfl_fantasy_trends",
        timeout: Optional[float] = None,
    ):
        super().__init__(timeout=timeout)
        self.db = db
        self.table = table

    async def _fetch(self, query: TrendQuery) -> list[dict[str, Any]]:
        sql, params = query.to_sql(self.table)
        logger.debug("Executing %s with %s", sql, params)
        rows = await self.db.fetchall(sql, params)
        return [normalize_row(row) for row in rows]

    async def ping(self) -> bool:
        try:
            row = await self.db.fetchone("SELECT 1 AS ok")
        except Exception as e:
            raise StoreError(f"Database ping failed: {e}") from e
        return bool(row and row.get("ok") == 1)

    async def open(self) -> None:
        await self.db.initialize()
        logger.info(
            "Database connection pool opened (min_size=%s, max_size=%s)",
            self.db.min_pool_size,
            self.db.max_pool_size,
        )

    async def close(self) -> None:
        await self.db.close()
