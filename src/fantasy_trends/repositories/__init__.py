"""
Repository abstraction layer.

Provides a store-agnostic read interface over the observation table,
allowing the API to run against Postgres or a JSON fixture.

Usage:
    from fantasy_trends.repositories import get_repository

    repo = get_repository(settings)
    rows = await repo.fetch(TrendQuery.select("player_name").not_null("adds"))
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import StoreError, StoreTimeoutError, TrendsRepository
from .memory import InMemoryTrendsRepository

if TYPE_CHECKING:
    from ..core.config import Settings

__all__ = [
    "StoreError",
    "StoreTimeoutError",
    "TrendsRepository",
    "InMemoryTrendsRepository",
    "get_repository",
]


def get_repository(settings: "Settings") -> TrendsRepository:
    """
    Build the repository described by ``settings``.

    A configured fixture_path wins over the database URL so the API can
    be run offline.

    Args:
        settings: Application settings

    Returns:
        TrendsRepository implementation
    """
    if settings.fixture_path:
        return InMemoryTrendsRepository.from_json(
            settings.fixture_path, timeout=settings.query_timeout
        )

    from ..pg_async import AsyncPostgresDB
    from .postgres import PostgresTrendsRepository

    db = AsyncPostgresDB(
        connection_string=settings.db_url or None,
        min_pool_size=settings.database_min_pool_size,
        max_pool_size=settings.database_pool_size,
    )
    return PostgresTrendsRepository(
        db, table=settings.trends_table, timeout=settings.query_timeout
    )
