"""
Core types and constants for Fantasy Trends.

This module provides:
- SortField, SortOrder and Direction enums
- Column names of the observation table
- Column projections used by the list, detail and leaderboard queries

Everything is read from a single append-only table (nfl_fantasy_trends by
default, see Settings.trends_table) with one row per player observation.
"""

from enum import Enum


class SortField(str, Enum):
    """Columns the player list may be ordered by."""

    percent_started_change = "percent_started_change"
    percent_rostered_change = "percent_rostered_change"
    adds = "adds"
    drops = "drops"
    timestamp = "timestamp"
    semana = "semana"
    player_name = "player_name"
    team = "team"
    position = "position"


class SortOrder(str, Enum):
    """Sort direction."""

    asc = "asc"
    desc = "desc"


class Direction(str, Enum):
    """Which extremum a per-player leaderboard keeps."""

    max = "max"
    min = "min"


# =============================================================================
# Observation columns
# =============================================================================

OBSERVATION_COLUMNS: tuple[str, ...] = (
    "id",
    "player_name",
    "player_id",
    "position",
    "team",
    "opponent",
    "percent_rostered",
    "percent_rostered_change",
    "percent_started",
    "percent_started_change",
    "adds",
    "drops",
    "semana",
    "timestamp",
    "scraped_at",
    "created_at",
)

# A row only appears in the player list when one of these is non-zero
CHANGE_COLUMNS: tuple[str, ...] = (
    "percent_rostered_change",
    "percent_started_change",
    "adds",
    "drops",
)

# Projection returned for each distinct player in the list
PLAYER_LIST_COLUMNS: tuple[str, ...] = (
    "player_name",
    "player_id",
    "position",
    "team",
    "percent_started_change",
    "percent_rostered_change",
    "adds",
    "drops",
    "timestamp",
)

LEADERBOARD_BASE_COLUMNS: tuple[str, ...] = ("player_name", "position", "team")
