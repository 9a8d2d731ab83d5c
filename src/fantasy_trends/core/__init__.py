"""
Core module for Fantasy Trends.

This module provides the foundational components:
- Configuration management (config.py)
- Response and observation models (models.py)
- Enums and table column definitions (types.py)

Usage:
    from fantasy_trends.core import Settings, get_settings
    from fantasy_trends.core import SortField, SortOrder
"""

# Configuration
from .config import Settings, get_settings

# Types
from .types import (
    CHANGE_COLUMNS,
    OBSERVATION_COLUMNS,
    PLAYER_LIST_COLUMNS,
    Direction,
    SortField,
    SortOrder,
)

# Models
from .models import (
    Observation,
    PlayerSummary,
    TotalStats,
)

__all__ = [
    "Settings",
    "get_settings",
    "CHANGE_COLUMNS",
    "OBSERVATION_COLUMNS",
    "PLAYER_LIST_COLUMNS",
    "Direction",
    "SortField",
    "SortOrder",
    "Observation",
    "PlayerSummary",
    "TotalStats",
]
