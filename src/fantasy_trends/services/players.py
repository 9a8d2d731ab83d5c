"""
Player service: the player list pipeline and the per-player detail view.

Routers and the CLI call this instead of building queries themselves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..aggregators import distinct_latest_by_change, summarize_player, value_of
from ..core.types import CHANGE_COLUMNS, PLAYER_LIST_COLUMNS, SortField, SortOrder
from ..query_builder import TrendQuery
from ..repositories import TrendsRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerFilters:
    """Search, filter and ordering options for the player list."""

    player: str = ""
    team: str = ""
    position: str = ""
    sort_by: SortField = SortField.percent_started_change
    sort_order: SortOrder = SortOrder.desc


def build_player_list_query(filters: PlayerFilters) -> TrendQuery:
    """
    Describe the rows feeding the player list.

    Only rows with a non-zero change in at least one metric qualify; a
    null change does not count. Rows are ordered by the requested field,
    then by id so ties resolve the same way on every request.
    """
    query = TrendQuery.select(*PLAYER_LIST_COLUMNS)
    if filters.player:
        query.contains("player_name", filters.player)
    if filters.team:
        query.contains("team", filters.team)
    if filters.position:
        query.eq("position", filters.position)
    query.any_nonzero(CHANGE_COLUMNS)
    ascending = SortOrder(filters.sort_order) is SortOrder.asc
    query.order_by(SortField(filters.sort_by).value, ascending=ascending)
    query.order_by("id")
    return query


async def list_distinct_players(
    repo: TrendsRepository,
    filters: PlayerFilters,
) -> list[dict[str, Any]]:
    """
    Fetch qualifying rows and collapse them to one entry per player.

    Args:
        repo: Record Store
        filters: Search and ordering options

    Returns:
        Distinct players sorted by percent_started_change descending
    """
    rows = await repo.fetch(build_player_list_query(filters))
    players = distinct_latest_by_change(rows)
    logger.debug(
        "Player list: %d rows collapsed to %d players (filters=%s)",
        len(rows),
        len(players),
        filters,
    )
    return players


def build_player_detail_query(player_name: str) -> TrendQuery:
    """All observations for one player, oldest week first."""
    return (
        TrendQuery.select()
        .iequals("player_name", player_name)
        .order_by("semana")
        .order_by("timestamp")
        .order_by("id")
    )


def chart_points(details: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Map a player's series to chart points with nulls as 0."""
    return [
        {
            "semana": row.get("semana"),
            "timestamp": row.get("timestamp"),
            "rostered": value_of(row, "percent_rostered"),
            "rosteredChange": value_of(row, "percent_rostered_change"),
            "started": value_of(row, "percent_started"),
            "startedChange": value_of(row, "percent_started_change"),
            "adds": value_of(row, "adds"),
            "drops": value_of(row, "drops"),
        }
        for row in details
    ]


async def get_player_details(
    repo: TrendsRepository,
    player_name: str,
) -> Optional[dict[str, Any]]:
    """
    Full series and summary for one player.

    The name match is exact but case-insensitive. Position and team are
    taken from the first (oldest) observation, while the summary's
    current values come from the last one.

    Args:
        repo: Record Store
        player_name: Player name to look up

    Returns:
        Dict with playerDetails, summary, playerName, position, team and
        chartData, or None if the player has no observations
    """
    details = await repo.fetch(build_player_detail_query(player_name))
    if not details:
        return None

    first = details[0]
    return {
        "playerDetails": details,
        "summary": summarize_player(details),
        "playerName": first["player_name"],
        "position": first.get("position"),
        "team": first.get("team"),
        "chartData": chart_points(details),
    }
