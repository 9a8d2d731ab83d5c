"""
Base repository for the observation table.

Defines the read interface the services depend on, so the same
aggregation code runs against Postgres or an in-memory fixture.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from ..query_builder import TrendQuery

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A Record Store read failed."""


class StoreTimeoutError(StoreError):
    """A Record Store read did not finish within the configured timeout."""


class TrendsRepository(ABC):
    """
    Abstract interface for reading player observations.

    Implementations return every row matching the query (no store-side
    pagination); callers aggregate and paginate in process.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    async def fetch(self, query: TrendQuery) -> list[dict[str, Any]]:
        """
        Run ``query`` and return all matching rows.

        Raises:
            StoreTimeoutError: the read exceeded ``self.timeout`` seconds
            StoreError: any other failure of the underlying store
        """
        try:
            if self.timeout is None:
                return await self._fetch(query)
            return await asyncio.wait_for(self._fetch(query), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise StoreTimeoutError(
                f"Record Store query exceeded {self.timeout}s"
            ) from e
        except StoreError:
            raise
        except Exception as e:
            raise StoreError(f"Record Store query failed: {e}") from e

    @abstractmethod
    async def _fetch(self, query: TrendQuery) -> list[dict[str, Any]]:
        """Store-specific read, without timeout or error translation."""
        ...

    async def ping(self) -> bool:
        """Return True if the store is reachable."""
        return True

    async def open(self) -> None:
        """Acquire resources. Called at app startup."""

    async def close(self) -> None:
        """Release resources. Called at app shutdown."""
