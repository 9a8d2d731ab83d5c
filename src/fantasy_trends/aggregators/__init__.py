"""
Observation aggregators.

These aggregators turn raw weekly observations into the per-player lists,
leaderboards and summaries served by the API.

Design: Pure functions with no store or framework dependencies.
"""

from .trends import (
    distinct_latest_by_change,
    extremum_by_player,
    latest_week,
    sum_by_player,
    summarize_all,
    summarize_player,
    value_of,
)

__all__ = [
    "distinct_latest_by_change",
    "extremum_by_player",
    "latest_week",
    "sum_by_player",
    "summarize_all",
    "summarize_player",
    "value_of",
]
