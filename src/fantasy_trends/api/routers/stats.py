"""
Stats router - serves leaderboards and whole-table totals.

Endpoints:
- GET /nfl-stats - Top adds, drops, roster %, start-change swings and totals

Every leaderboard read runs concurrently; any failure fails the response.
"""

import logging
from typing import Any

from fastapi import APIRouter

from ...core.config import get_settings
from ...core.models import StatsResponse
from ...services.stats import get_leaderboards
from ..dependencies import RepositoryDependency
from ._utils import store_errors

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/nfl-stats", response_model=None, responses={200: {"model": StatsResponse}})
async def get_stats(repo: RepositoryDependency) -> dict[str, Any]:
    """Get every leaderboard plus totals across all observations."""
    settings = get_settings()
    with store_errors("leaderboards", "Failed to fetch NFL stats"):
        return await get_leaderboards(repo, limit=settings.leaderboard_size)
