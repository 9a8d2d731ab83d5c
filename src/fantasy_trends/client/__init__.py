"""
Dashboard client for the Fantasy Trends API.

- api_client: async httpx client returning APIResponse wrappers
- state: immutable DashboardState and its reducer
- controller: debounced search and stale-response handling
"""

from .api_client import APIResponse, TrendsApiClient
from .controller import DashboardController, Debouncer
from .state import (
    DashboardState,
    FiltersChanged,
    ListFilters,
    PageChanged,
    PlayerClosed,
    RequestFailed,
    RequestIssued,
    ResponseReceived,
    SearchChanged,
    reduce,
)

__all__ = [
    "APIResponse",
    "TrendsApiClient",
    "DashboardController",
    "Debouncer",
    "DashboardState",
    "FiltersChanged",
    "ListFilters",
    "PageChanged",
    "PlayerClosed",
    "RequestFailed",
    "RequestIssued",
    "ResponseReceived",
    "SearchChanged",
    "reduce",
]
