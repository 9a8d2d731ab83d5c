"""
api_client.py - HTTP client for the Fantasy Trends API.

Provides:
- Async httpx methods for the three dashboard endpoints
- Error handling with user-friendly messages
- Type-safe response handling via the APIResponse dataclass

Every endpoint can fail on its own; callers render whatever succeeded
(e.g. the player list without the leaderboards) instead of crashing.

Usage:
    async with TrendsApiClient() as client:
        response = await client.get_players(page=1, filters=ListFilters(player="puka"))
        if response.success:
            players = response.data["players"]
        else:
            print(response.error)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from ..core.config import get_settings
from .state import ListFilters

logger = logging.getLogger(__name__)


@dataclass
class APIResponse:
    """Standardized response wrapper for all API calls."""
    success: bool
    data: Any
    error: Optional[str] = None
    status_code: Optional[int] = None


class TrendsApiClient:
    """Async client for the Fantasy Trends API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.base_url = base_url or settings.api_base_url
        self.timeout = timeout if timeout is not None else settings.client_timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "TrendsApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _get(self, endpoint: str, params: Optional[dict[str, Any]] = None) -> APIResponse:
        """
        Internal helper for GET requests.

        Args:
            endpoint: API endpoint path (e.g., '/api/nfl-stats')
            params: Query parameters

        Returns:
            APIResponse with success status, data, and optional error
        """
        try:
            response = await self._client.get(endpoint, params=params)
        except httpx.ConnectError:
            return APIResponse(
                success=False,
                data=None,
                error="Cannot connect to the Fantasy Trends API",
            )
        except httpx.TimeoutException:
            return APIResponse(
                success=False,
                data=None,
                error=f"Request timed out after {self.timeout} seconds",
            )
        except httpx.HTTPError as e:
            logger.warning("Request to %s failed: %s", endpoint, e)
            return APIResponse(success=False, data=None, error=f"Request failed: {e}")

        if 200 <= response.status_code < 300:
            try:
                data = response.json()
            except ValueError:
                logger.warning("Non-JSON response from %s", endpoint)
                return APIResponse(
                    success=False,
                    data=None,
                    error="API returned an invalid response",
                    status_code=response.status_code,
                )
            return APIResponse(success=True, data=data, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError:
            body = None
        message = body.get("error") if isinstance(body, dict) else None
        return APIResponse(
            success=False,
            data=None,
            error=message or f"API returned status {response.status_code}",
            status_code=response.status_code,
        )

    # =========================================================================
    # Endpoints
    # =========================================================================

    async def get_players(
        self,
        page: int = 1,
        limit: int = 20,
        filters: Optional[ListFilters] = None,
    ) -> APIResponse:
        """
        Fetch one page of the distinct player list.

        Args:
            page: 1-indexed page number
            limit: Players per page
            filters: Search, filter and sort options

        Returns:
            APIResponse with {players, pagination} or an error
        """
        params: dict[str, Any] = {"page": page, "limit": limit}
        for key, value in (filters or ListFilters()).as_params().items():
            if value:
                params[key] = value
        return await self._get("/api/nfl-players", params=params)

    async def get_player_details(self, player_name: str) -> APIResponse:
        """Fetch one player's weekly series and summary."""
        return await self._get("/api/nfl-player-details", params={"playerName": player_name})

    async def get_stats(self) -> APIResponse:
        """Fetch leaderboards and totals."""
        return await self._get("/api/nfl-stats")
