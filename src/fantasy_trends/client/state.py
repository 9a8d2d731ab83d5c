"""
Dashboard state and its transitions.

The dashboard's UI state (search box, filter panel, page cursor, loaded
data, in-flight requests) is a single immutable DashboardState. Every
change goes through reduce(state, action), which returns a new state.

Each request kind (players, details, stats) carries a sequence number.
Issuing a request bumps the number; a response is applied only when its
number is still the latest issued for that kind, so the state always
reflects the most recently *issued* request rather than the most
recently *completed* one.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional, Union


@dataclass(frozen=True)
class ListFilters:
    player: str = ""
    team: str = ""
    position: str = ""
    sort_by: str = "timestamp"
    sort_order: str = "desc"

    def as_params(self) -> dict[str, str]:
        """Query parameters for /api/nfl-players."""
        return {
            "player": self.player,
            "team": self.team,
            "position": self.position,
            "sortBy": self.sort_by,
            "sortOrder": self.sort_order,
        }


@dataclass(frozen=True)
class DashboardState:
    filters: ListFilters = field(default_factory=ListFilters)
    page: int = 1
    limit: int = 20
    total: int = 0
    total_pages: int = 0
    players: tuple[dict[str, Any], ...] = ()
    players_loading: bool = False
    players_error: Optional[str] = None
    stats: Optional[dict[str, Any]] = None
    stats_loading: bool = False
    stats_error: Optional[str] = None
    selected_player: Optional[dict[str, Any]] = None
    details_loading: bool = False
    details_error: Optional[str] = None
    # Latest issued sequence number per request kind
    issued: dict[str, int] = field(default_factory=lambda: {"players": 0, "details": 0, "stats": 0})

    def latest(self, kind: str) -> int:
        return self.issued.get(kind, 0)


# =============================================================================
# Actions
# =============================================================================


@dataclass(frozen=True)
class SearchChanged:
    text: str


@dataclass(frozen=True)
class FiltersChanged:
    team: Optional[str] = None
    position: Optional[str] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None


@dataclass(frozen=True)
class PageChanged:
    page: int


@dataclass(frozen=True)
class RequestIssued:
    kind: str
    seq: int


@dataclass(frozen=True)
class ResponseReceived:
    kind: str
    seq: int
    data: dict[str, Any]


@dataclass(frozen=True)
class RequestFailed:
    kind: str
    seq: int
    error: str


@dataclass(frozen=True)
class PlayerClosed:
    pass


Action = Union[
    SearchChanged,
    FiltersChanged,
    PageChanged,
    RequestIssued,
    ResponseReceived,
    RequestFailed,
    PlayerClosed,
]

_LOADING = {"players": "players_loading", "details": "details_loading", "stats": "stats_loading"}
_ERROR = {"players": "players_error", "details": "details_error", "stats": "stats_error"}


def next_seq(state: DashboardState, kind: str) -> int:
    """Sequence number for the next request of ``kind``."""
    return state.latest(kind) + 1


def is_stale(state: DashboardState, kind: str, seq: int) -> bool:
    """True if a newer request of ``kind`` has been issued since ``seq``."""
    return seq != state.latest(kind)


def _apply_response(state: DashboardState, kind: str, data: dict[str, Any]) -> DashboardState:
    if kind == "players":
        pagination = data.get("pagination", {})
        return replace(
            state,
            players=tuple(data.get("players", ())),
            page=pagination.get("page", state.page),
            limit=pagination.get("limit", state.limit),
            total=pagination.get("total", 0),
            total_pages=pagination.get("totalPages", 0),
            players_loading=False,
            players_error=None,
        )
    if kind == "details":
        return replace(state, selected_player=data, details_loading=False, details_error=None)
    return replace(state, stats=data, stats_loading=False, stats_error=None)


def reduce(state: DashboardState, action: Action) -> DashboardState:
    """Return the state after ``action``; ``state`` is never modified."""
    if isinstance(action, SearchChanged):
        return replace(state, filters=replace(state.filters, player=action.text), page=1)

    if isinstance(action, FiltersChanged):
        changes = {}
        for name in ("team", "position", "sort_by", "sort_order"):
            value = getattr(action, name)
            if value is not None:
                changes[name] = value
        return replace(state, filters=replace(state.filters, **changes), page=1)

    if isinstance(action, PageChanged):
        return replace(state, page=max(1, action.page))

    if isinstance(action, RequestIssued):
        if action.seq <= state.latest(action.kind):
            return state
        issued = {**state.issued, action.kind: action.seq}
        return replace(state, issued=issued, **{_LOADING[action.kind]: True})

    if isinstance(action, ResponseReceived):
        if is_stale(state, action.kind, action.seq):
            return state
        return _apply_response(state, action.kind, action.data)

    if isinstance(action, RequestFailed):
        if is_stale(state, action.kind, action.seq):
            return state
        return replace(
            state,
            **{_LOADING[action.kind]: False, _ERROR[action.kind]: action.error},
        )

    if isinstance(action, PlayerClosed):
        return replace(state, selected_player=None, details_error=None)

    raise TypeError(f"Unknown action: {action!r}")
