"""
Pagination utilities for API endpoints.

Lists are aggregated in process, so pagination slices the full result
rather than pushing LIMIT/OFFSET to the store:

    @router.get("/nfl-players")
    async def list_players(
        pagination: PaginationParams = Depends(get_pagination_params),
        repo: RepositoryDependency,
    ):
        players = await list_distinct_players(repo, filters)
        return {"players": pagination.slice(players), "pagination": pagination.meta(len(players))}
"""

import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence, TypeVar

from fastapi import Query

from ..core.config import get_settings

T = TypeVar("T")

# Default for PaginationParams built directly; requests use Settings.default_page_size
DEFAULT_PAGE_SIZE = 20


@dataclass
class PaginationParams:
    """Page number and page size for a list endpoint."""

    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.limit < 1:
            raise ValueError("limit must be >= 1")

    @property
    def offset(self) -> int:
        """Index of the first item on this page."""
        return (self.page - 1) * self.limit

    def slice(self, items: Sequence[T]) -> list[T]:
        """Items on this page; an out-of-range page is empty."""
        return list(items[self.offset:self.offset + self.limit])

    def meta(self, total: int) -> dict[str, int]:
        """
        Pagination block for the response envelope.

        Args:
            total: Count of all items before slicing

        Returns:
            page, limit, total and totalPages (0 when total is 0)
        """
        return {
            "page": self.page,
            "limit": self.limit,
            "total": total,
            "totalPages": math.ceil(total / self.limit) if total > 0 else 0,
        }

    def paginate(self, items: Sequence[T], key: str = "items") -> dict[str, Any]:
        """Slice ``items`` and wrap them with pagination metadata."""
        return {key: self.slice(items), "pagination": self.meta(len(items))}


def get_pagination_params(
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    limit: Optional[int] = Query(
        default=None,
        ge=1,
        description="Items per page (default: Settings.default_page_size)",
    ),
) -> PaginationParams:
    """
    FastAPI dependency for pagination parameters.

    The limit has no upper bound; an omitted limit falls back to the
    configured default_page_size.

    Usage:
        @router.get("/items")
        async def list_items(pagination: PaginationParams = Depends(get_pagination_params)):
            ...
    """
    if limit is None:
        limit = get_settings().default_page_size
    return PaginationParams(page=page, limit=limit)
