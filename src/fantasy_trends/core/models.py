"""
Pydantic models for observations and API responses.

These models are used for:
- Loading JSON fixtures into the in-memory store
- Documenting response shapes in the OpenAPI schema

Field names follow the JSON the dashboard consumes, so aggregate
payloads use camelCase (totalAdds, avgRostered) while raw observation
columns keep their snake_case table names.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


# =============================================================================
# Observations
# =============================================================================


class Observation(BaseModel):
    """One row of nfl_fantasy_trends."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    player_name: str
    player_id: Optional[str | int] = None
    position: Optional[str] = None
    team: Optional[str] = None
    opponent: Optional[str] = None
    percent_rostered: Optional[float] = None
    percent_rostered_change: Optional[float] = None
    percent_started: Optional[float] = None
    percent_started_change: Optional[float] = None
    adds: Optional[int] = None
    drops: Optional[int] = None
    semana: int
    timestamp: datetime
    scraped_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


# =============================================================================
# Player list
# =============================================================================


class DistinctPlayer(BaseModel):
    """One row per player in the list, the observation with the largest start change."""

    player_name: str
    player_id: Optional[str | int] = None
    position: Optional[str] = None
    team: Optional[str] = None
    percent_started_change: Optional[float] = None
    percent_rostered_change: Optional[float] = None
    adds: Optional[int] = None
    drops: Optional[int] = None
    timestamp: Optional[datetime] = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int


class PlayersResponse(BaseModel):
    players: list[DistinctPlayer]
    pagination: Pagination


# =============================================================================
# Player detail
# =============================================================================


class PlayerSummary(BaseModel):
    """Aggregates over a single player's full time series."""

    totalAdds: int
    totalDrops: int
    avgRosteredChange: float
    avgStartedChange: float
    maxRostered: float
    maxStarted: float
    currentRostered: float
    currentStarted: float


class ChartPoint(BaseModel):
    semana: int
    timestamp: datetime
    rostered: float
    rosteredChange: float
    started: float
    startedChange: float
    adds: int
    drops: int


class PlayerDetailsResponse(BaseModel):
    playerDetails: list[Observation]
    summary: PlayerSummary
    playerName: str
    position: Optional[str] = None
    team: Optional[str] = None
    chartData: list[ChartPoint]


# =============================================================================
# Leaderboards
# =============================================================================


class LeaderboardBase(BaseModel):
    player_name: str
    position: Optional[str] = None
    team: Optional[str] = None


class AddsEntry(LeaderboardBase):
    totalAdds: int


class DropsEntry(LeaderboardBase):
    totalDrops: int


class RosteredEntry(LeaderboardBase):
    percent_rostered: Optional[float] = None


class StartChangeEntry(LeaderboardBase):
    percent_started_change: Optional[float] = None


class WeeklyStartChangeEntry(StartChangeEntry):
    timestamp: Optional[datetime] = None
    semana: Optional[int] = None


class TotalStats(BaseModel):
    totalAdds: int
    totalDrops: int
    avgRostered: float
    avgStarted: float
    totalRecords: int
    uniquePlayers: int


class StatsResponse(BaseModel):
    topAdds: list[AddsEntry]
    topDrops: list[DropsEntry]
    topRostered: list[RosteredEntry]
    topPositiveChanges: list[StartChangeEntry]
    topNegativeChanges: list[StartChangeEntry]
    topStartedChangeLastWeek: list[WeeklyStartChangeEntry]
    totalStats: TotalStats
