"""
Dashboard controller: drives DashboardState from user input and API responses.

Search-as-you-type waits for a quiet period (Settings.search_debounce)
before issuing a request. A keystroke during the quiet period restarts
the wait; a keystroke while a request is in flight cancels that request.
Responses are additionally checked against the latest issued sequence
number by the reducer, so an out-of-order completion is never shown.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from ..core.config import get_settings
from .api_client import APIResponse, TrendsApiClient
from .state import (
    Action,
    DashboardState,
    FiltersChanged,
    PageChanged,
    PlayerClosed,
    RequestFailed,
    RequestIssued,
    ResponseReceived,
    SearchChanged,
    next_seq,
    reduce,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Debouncer:
    """Run only the last of a burst of calls, after ``delay`` seconds of quiet."""

    def __init__(self, delay: float):
        self.delay = delay
        self._task: Optional[asyncio.Task] = None

    def call(self, fn: Callable[[], Awaitable[T]]) -> "asyncio.Task[Optional[T]]":
        """Schedule ``fn``, cancelling any call still waiting or running."""
        self.cancel()
        self._task = asyncio.ensure_future(self._run(fn))
        return self._task

    async def _run(self, fn: Callable[[], Awaitable[T]]) -> Optional[T]:
        await asyncio.sleep(self.delay)
        return await fn()

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None


class DashboardController:
    """Owns the dashboard state and issues API requests for it."""

    def __init__(
        self,
        client: TrendsApiClient,
        state: Optional[DashboardState] = None,
        debounce: Optional[float] = None,
    ):
        self.client = client
        self.state = state or DashboardState()
        delay = debounce if debounce is not None else get_settings().search_debounce
        self._search = Debouncer(delay)

    def dispatch(self, action: Action) -> DashboardState:
        self.state = reduce(self.state, action)
        return self.state

    async def _request(
        self,
        kind: str,
        call: Callable[[], Awaitable[APIResponse]],
    ) -> DashboardState:
        seq = next_seq(self.state, kind)
        self.dispatch(RequestIssued(kind, seq))
        response = await call()
        if response.success:
            return self.dispatch(ResponseReceived(kind, seq, response.data))
        logger.warning("%s request %d failed: %s", kind, seq, response.error)
        return self.dispatch(RequestFailed(kind, seq, response.error or "Request failed"))

    # =========================================================================
    # Loads
    # =========================================================================

    async def load_players(self) -> DashboardState:
        state = self.state
        return await self._request(
            "players",
            lambda: self.client.get_players(page=state.page, limit=state.limit, filters=state.filters),
        )

    async def load_stats(self) -> DashboardState:
        return await self._request("stats", self.client.get_stats)

    async def open_player(self, player_name: str) -> DashboardState:
        return await self._request("details", lambda: self.client.get_player_details(player_name))

    def close_player(self) -> DashboardState:
        return self.dispatch(PlayerClosed())

    async def refresh(self) -> DashboardState:
        """Load the player list and the leaderboards concurrently."""
        await asyncio.gather(self.load_players(), self.load_stats())
        return self.state

    # =========================================================================
    # User input
    # =========================================================================

    def search(self, text: str) -> "asyncio.Task[Optional[DashboardState]]":
        """Update the search text now and load the list once typing pauses."""
        self.dispatch(SearchChanged(text))
        return self._search.call(self.load_players)

    async def change_filters(self, **changes: str) -> DashboardState:
        self._search.cancel()
        self.dispatch(FiltersChanged(**changes))
        return await self.load_players()

    async def go_to_page(self, page: int) -> DashboardState:
        self.dispatch(PageChanged(page))
        return await self.load_players()
