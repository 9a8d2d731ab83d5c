"""
Player API endpoints.

Endpoints:
- GET /nfl-players - Distinct players with recent changes, filtered and paginated
- GET /nfl-player-details - One player's full weekly series plus summary
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from ...core.models import PlayerDetailsResponse, PlayersResponse
from ...core.types import SortField, SortOrder
from ...services.players import PlayerFilters, get_player_details, list_distinct_players
from ..dependencies import RepositoryDependency
from ..errors import NotFoundError, ValidationError
from ..pagination import PaginationParams, get_pagination_params
from ._utils import store_errors

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/nfl-players",
    response_model=None,
    responses={200: {"model": PlayersResponse}},
)
async def list_players(
    repo: RepositoryDependency,
    pagination: Annotated[PaginationParams, Depends(get_pagination_params)],
    sort_by: Annotated[SortField, Query(alias="sortBy")] = SortField.percent_started_change,
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = SortOrder.desc,
    player: Annotated[str, Query(description="Case-insensitive substring of the player name")] = "",
    team: Annotated[str, Query(description="Case-insensitive substring of the team")] = "",
    position: Annotated[str, Query(description="Exact position, e.g. QB")] = "",
) -> dict[str, Any]:
    """
    List players with a non-zero change in any tracked metric.

    Each player appears once, represented by the observation with the
    largest start-percentage change, and the list is ordered by that
    change descending. sortBy/sortOrder set the order rows are read in,
    which decides ties.
    """
    filters = PlayerFilters(
        player=player,
        team=team,
        position=position.strip(),
        sort_by=sort_by,
        sort_order=sort_order,
    )

    with store_errors("player list", "Failed to fetch NFL players"):
        players = await list_distinct_players(repo, filters)

    return pagination.paginate(players, key="players")


@router.get(
    "/nfl-player-details",
    response_model=None,
    responses={200: {"model": PlayerDetailsResponse}},
)
async def player_details(
    repo: RepositoryDependency,
    player_name: Annotated[
        str | None,
        Query(alias="playerName", description="Exact player name, case-insensitive"),
    ] = None,
) -> dict[str, Any]:
    """
    Get every observation for one player, oldest week first, with a summary.

    Raises:
        ValidationError: 400 if playerName is missing or blank
        NotFoundError: 404 if no observation matches
    """
    if not player_name or not player_name.strip():
        raise ValidationError("Player name is required")

    with store_errors(f"details for {player_name!r}", "Failed to fetch NFL player details"):
        details = await get_player_details(repo, player_name)

    if details is None:
        raise NotFoundError("Player")

    return details
