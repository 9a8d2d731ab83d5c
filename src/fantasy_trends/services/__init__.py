"""
Service layer: read operations shared by the API routers and the CLI.

- players: distinct player list pipeline and per-player detail
- stats: concurrent leaderboard fan-out and whole-table totals
"""

from .players import (
    PlayerFilters,
    build_player_detail_query,
    build_player_list_query,
    chart_points,
    get_player_details,
    list_distinct_players,
)
from .stats import build_leaderboard_queries, fetch_all, get_leaderboards

__all__ = [
    "PlayerFilters",
    "build_player_detail_query",
    "build_player_list_query",
    "chart_points",
    "get_player_details",
    "list_distinct_players",
    "build_leaderboard_queries",
    "fetch_all",
    "get_leaderboards",
]
