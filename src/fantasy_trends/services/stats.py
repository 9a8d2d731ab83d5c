"""
Stats service: leaderboards and whole-table totals.

Issues every leaderboard read concurrently and aggregates the results
once all of them have completed. A single failed read fails the whole
response; partial leaderboards are never returned.
"""

import asyncio
import logging
from typing import Any

from ..aggregators import (
    extremum_by_player,
    latest_week,
    sum_by_player,
    summarize_all,
)
from ..core.types import Direction, LEADERBOARD_BASE_COLUMNS
from ..query_builder import TrendQuery
from ..repositories import TrendsRepository

logger = logging.getLogger(__name__)

DEFAULT_LEADERBOARD_SIZE = 5


def build_leaderboard_queries() -> dict[str, TrendQuery]:
    """Describe the independent reads behind the stats response."""
    return {
        "adds": TrendQuery.select(*LEADERBOARD_BASE_COLUMNS, "adds").not_null("adds").order_by("id"),
        "drops": TrendQuery.select(*LEADERBOARD_BASE_COLUMNS, "drops").not_null("drops").order_by("id"),
        "rostered": (
            TrendQuery.select(*LEADERBOARD_BASE_COLUMNS, "percent_rostered")
            .not_null("percent_rostered")
            .order_by("percent_rostered", ascending=False)
            .order_by("id")
        ),
        "positive": (
            TrendQuery.select(*LEADERBOARD_BASE_COLUMNS, "percent_started_change", "semana", "timestamp")
            .gt("percent_started_change", 0)
            .order_by("percent_started_change", ascending=False)
            .order_by("id")
        ),
        "negative": (
            TrendQuery.select(*LEADERBOARD_BASE_COLUMNS, "percent_started_change")
            .lt("percent_started_change", 0)
            .order_by("percent_started_change")
            .order_by("id")
        ),
        "totals": TrendQuery.select("adds", "drops", "percent_rostered", "percent_started"),
        "names": TrendQuery.select("player_name"),
    }


async def fetch_all(
    repo: TrendsRepository,
    queries: dict[str, TrendQuery],
) -> dict[str, list[dict[str, Any]]]:
    """
    Run ``queries`` concurrently and return their rows by key.

    Raises the first failure once every read has finished, so no read is
    left running in the background when the request fails.
    """
    keys = list(queries)
    results = await asyncio.gather(
        *(repo.fetch(queries[key]) for key in keys),
        return_exceptions=True,
    )

    failures = [(key, r) for key, r in zip(keys, results) if isinstance(r, BaseException)]
    if failures:
        for key, error in failures:
            logger.error("Leaderboard query %r failed: %s", key, error)
        raise failures[0][1]

    return dict(zip(keys, results))


def _latest_week_leaders(rows: list[dict[str, Any]], limit: int) -> list[dict[str, Any]]:
    week = latest_week(rows)
    if week is None:
        return []
    week_rows = [row for row in rows if row.get("semana") == week]
    return extremum_by_player(
        week_rows,
        "percent_started_change",
        Direction.max,
        limit=limit,
        extra_columns=("timestamp", "semana"),
    )


async def get_leaderboards(
    repo: TrendsRepository,
    limit: int = DEFAULT_LEADERBOARD_SIZE,
) -> dict[str, Any]:
    """
    Build every leaderboard plus the whole-table totals.

    Args:
        repo: Record Store
        limit: Entries per leaderboard

    Returns:
        Dict with topAdds, topDrops, topRostered, topPositiveChanges,
        topNegativeChanges, topStartedChangeLastWeek and totalStats
    """
    data = await fetch_all(repo, build_leaderboard_queries())

    positive = data["positive"]
    return {
        "topAdds": sum_by_player(data["adds"], "adds", limit=limit),
        "topDrops": sum_by_player(data["drops"], "drops", limit=limit),
        "topRostered": extremum_by_player(
            data["rostered"], "percent_rostered", Direction.max, limit=limit
        ),
        "topPositiveChanges": extremum_by_player(
            positive, "percent_started_change", Direction.max, limit=limit
        ),
        "topNegativeChanges": extremum_by_player(
            data["negative"], "percent_started_change", Direction.min, limit=limit
        ),
        "topStartedChangeLastWeek": _latest_week_leaders(positive, limit),
        "totalStats": summarize_all(
            data["totals"],
            player_names=(row["player_name"] for row in data["names"]),
        ),
    }
