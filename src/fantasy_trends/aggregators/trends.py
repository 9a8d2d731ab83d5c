"""
Aggregations over weekly player observations.

Collapses a multi-week observation list into per-player views:
- distinct player list (row with the largest start change per player)
- summed leaderboards (adds, drops) keyed by (player_name, position, team)
- extremum leaderboards (roster %, start change) keyed by player_name
- whole-table and single-player summary statistics

All functions are pure and take row dicts as returned by a repository.
Nulls count as 0 and are never dropped from averages. Ties are broken
by input order: the first row seen wins, and sorting is stable, so
callers that need a deterministic result must pass deterministically
ordered rows.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from ..core.types import Direction, PLAYER_LIST_COLUMNS

# Output key for each summed counter
SUM_KEYS = {
    "adds": "totalAdds",
    "drops": "totalDrops",
}


def value_of(row: dict[str, Any], field: str) -> Any:
    """Return ``row[field]`` with null treated as 0."""
    value = row.get(field)
    return 0 if value is None else value


def _mean(total: float, count: int) -> float:
    return total / count if count else 0.0


def distinct_latest_by_change(rows: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Keep one row per player: the one with the largest percent_started_change.

    Rows are expected to be pre-filtered to those with a non-zero change.
    On equal change the earlier row is kept. The result is sorted by
    percent_started_change descending; players with equal change keep the
    order in which they first appeared.

    Args:
        rows: Observation rows

    Returns:
        One dict per distinct player_name, projected to the list columns
    """
    best: dict[str, dict[str, Any]] = {}
    for row in rows:
        name = row["player_name"]
        current = best.get(name)
        if current is None or value_of(row, "percent_started_change") > value_of(
            current, "percent_started_change"
        ):
            # Reassigning an existing key keeps its first-seen position
            best[name] = {col: row.get(col) for col in PLAYER_LIST_COLUMNS}

    return sorted(
        best.values(),
        key=lambda r: value_of(r, "percent_started_change"),
        reverse=True,
    )


def sum_by_player(
    rows: Iterable[dict[str, Any]],
    field: str,
    limit: int = 5,
) -> list[dict[str, Any]]:
    """
    Sum a counter per (player_name, position, team) and return the top entries.

    The same player recorded under a different position or team forms a
    separate group.

    Args:
        rows: Observation rows with player_name, position, team and ``field``
        field: "adds" or "drops"
        limit: Number of entries to return

    Returns:
        Dicts with player_name, position, team and totalAdds/totalDrops,
        sorted by total descending
    """
    total_key = SUM_KEYS.get(field)
    if total_key is None:
        raise ValueError(f"Cannot sum field: {field}")

    totals: dict[tuple[str, Optional[str], Optional[str]], Any] = {}
    for row in rows:
        key = (row["player_name"], row.get("position"), row.get("team"))
        totals[key] = totals.get(key, 0) + value_of(row, field)

    entries = [
        {"player_name": name, "position": position, "team": team, total_key: total}
        for (name, position, team), total in totals.items()
    ]
    entries.sort(key=lambda e: e[total_key], reverse=True)
    return entries[:limit]


def extremum_by_player(
    rows: Iterable[dict[str, Any]],
    field: str,
    direction: Direction | str = Direction.max,
    limit: int = 5,
    extra_columns: Sequence[str] = (),
) -> list[dict[str, Any]]:
    """
    Keep each player's largest (or smallest) value of ``field`` and rank them.

    Args:
        rows: Observation rows
        field: Column to compare, e.g. "percent_rostered"
        direction: "max" keeps and ranks by the largest value, "min" by the smallest
        limit: Number of entries to return
        extra_columns: Additional row columns to carry into each entry

    Returns:
        Dicts with player_name, position, team, ``field`` and ``extra_columns``
    """
    direction = Direction(direction)
    want_max = direction is Direction.max
    columns = ("player_name", "position", "team", field, *extra_columns)

    best: dict[str, dict[str, Any]] = {}
    for row in rows:
        name = row["player_name"]
        current = best.get(name)
        if current is None:
            replace = True
        elif want_max:
            replace = value_of(row, field) > value_of(current, field)
        else:
            replace = value_of(row, field) < value_of(current, field)
        if replace:
            best[name] = {col: row.get(col) for col in columns}

    ranked = sorted(best.values(), key=lambda e: value_of(e, field), reverse=want_max)
    return ranked[:limit]


def summarize_all(
    rows: Sequence[dict[str, Any]],
    player_names: Optional[Iterable[str]] = None,
) -> dict[str, Any]:
    """
    Whole-table totals and averages.

    Args:
        rows: Every observation (adds, drops, percent_rostered, percent_started)
        player_names: Names to count distinct players from; defaults to the
            player_name of ``rows``

    Returns:
        totalAdds, totalDrops, avgRostered, avgStarted, totalRecords, uniquePlayers
    """
    count = len(rows)
    if player_names is None:
        player_names = (row.get("player_name") for row in rows)

    return {
        "totalAdds": sum(value_of(r, "adds") for r in rows),
        "totalDrops": sum(value_of(r, "drops") for r in rows),
        "avgRostered": _mean(sum(value_of(r, "percent_rostered") for r in rows), count),
        "avgStarted": _mean(sum(value_of(r, "percent_started") for r in rows), count),
        "totalRecords": count,
        "uniquePlayers": len({name for name in player_names if name is not None}),
    }


def summarize_player(rows: Sequence[dict[str, Any]]) -> dict[str, Any]:
    """
    Summary of one player's series.

    Rows must already be sorted by (semana, timestamp) ascending; the
    "current" values come from the last row.

    Raises:
        ValueError: if ``rows`` is empty
    """
    if not rows:
        raise ValueError("summarize_player() requires at least one observation")

    count = len(rows)
    last = rows[-1]
    return {
        "totalAdds": sum(value_of(r, "adds") for r in rows),
        "totalDrops": sum(value_of(r, "drops") for r in rows),
        "avgRosteredChange": sum(value_of(r, "percent_rostered_change") for r in rows) / count,
        "avgStartedChange": sum(value_of(r, "percent_started_change") for r in rows) / count,
        "maxRostered": max(value_of(r, "percent_rostered") for r in rows),
        "maxStarted": max(value_of(r, "percent_started") for r in rows),
        "currentRostered": value_of(last, "percent_rostered"),
        "currentStarted": value_of(last, "percent_started"),
    }


def latest_week(rows: Iterable[dict[str, Any]]) -> Optional[int]:
    """Highest semana present in ``rows``, or None when there is none."""
    weeks = [row["semana"] for row in rows if row.get("semana") is not None]
    return max(weeks) if weeks else None
