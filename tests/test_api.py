"""
API tests for the Fantasy Trends endpoints.

Routes read from an in-memory repository through a dependency override,
so these run without a database. Tests check status codes, envelope
shape and the error body format ({"error": message}).
"""

from __future__ import annotations

import asyncio

import pytest

from fantasy_trends.repositories import InMemoryTrendsRepository, TrendsRepository


class BrokenRepository(TrendsRepository):
    async def _fetch(self, query):
        raise RuntimeError("password authentication failed for user postgres")

    async def ping(self):
        raise RuntimeError("connection refused")


class SlowRepository(TrendsRepository):
    async def _fetch(self, query):
        await asyncio.sleep(1)
        return []


@pytest.fixture
def broken_client(make_client):
    return make_client(BrokenRepository())


@pytest.fixture
def slow_client(make_client):
    return make_client(SlowRepository(timeout=0.01))


# =========================================================================
# Health and root
# =========================================================================


class TestHealthEndpoints:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "healthy"
        assert "timestamp" in r.json()

    def test_health_db(self, client):
        r = client.get("/health/db")
        assert r.status_code == 200
        assert r.json()["database"] == "connected"

    def test_health_db_unreachable(self, broken_client):
        r = broken_client.get("/health/db")
        assert r.status_code == 503
        assert r.json()["status"] == "unhealthy"

    def test_root(self, client):
        r = client.get("/")
        assert r.status_code == 200
        assert r.json()["name"] == "Fantasy Trends API"

    def test_api_responses_are_not_cached(self, client):
        r = client.get("/api/nfl-players")
        assert r.headers["cache-control"] == "no-store"
        assert "x-process-time" in r.headers


# =========================================================================
# /api/nfl-players
# =========================================================================


class TestPlayersEndpoint:
    def test_default_list(self, client):
        r = client.get("/api/nfl-players")
        assert r.status_code == 200
        data = r.json()
        assert [p["player_name"] for p in data["players"]] == ["Bijan Robinson", "Puka Nacua", "Jayden Reed"]
        assert data["pagination"] == {"page": 1, "limit": 20, "total": 3, "totalPages": 1}

    def test_player_shape(self, client):
        player = client.get("/api/nfl-players").json()["players"][0]
        assert set(player) == {
            "player_name", "player_id", "position", "team", "percent_started_change",
            "percent_rostered_change", "adds", "drops", "timestamp",
        }

    def test_filters(self, client):
        r = client.get("/api/nfl-players", params={"position": "WR", "team": "gb"})
        assert [p["player_name"] for p in r.json()["players"]] == ["Jayden Reed"]

    def test_search(self, client):
        r = client.get("/api/nfl-players", params={"player": "nacua"})
        assert [p["player_name"] for p in r.json()["players"]] == ["Puka Nacua"]

    def test_wildcards_match_literally(self, client):
        r = client.get("/api/nfl-players", params={"player": "%"})
        assert r.json()["players"] == []
        assert r.json()["pagination"]["totalPages"] == 0

    def test_pagination(self, client):
        r = client.get("/api/nfl-players", params={"page": 2, "limit": 2})
        data = r.json()
        assert [p["player_name"] for p in data["players"]] == ["Jayden Reed"]
        assert data["pagination"] == {"page": 2, "limit": 2, "total": 3, "totalPages": 2}

    def test_page_past_the_end(self, client):
        r = client.get("/api/nfl-players", params={"page": 9})
        assert r.status_code == 200
        assert r.json()["players"] == []

    def test_limit_has_no_upper_bound(self, make_client):
        rows = [
            {"id": i, "player_name": f"Player {i:03d}", "percent_started_change": float(i), "semana": 1}
            for i in range(1, 151)
        ]
        r = make_client(InMemoryTrendsRepository(rows)).get("/api/nfl-players", params={"limit": 150})
        assert r.status_code == 200
        data = r.json()
        assert len(data["players"]) == 150
        assert data["pagination"] == {"page": 1, "limit": 150, "total": 150, "totalPages": 1}

    def test_default_limit_comes_from_settings(self, make_client, repo, monkeypatch):
        from fantasy_trends.core.config import get_settings

        monkeypatch.setenv("DEFAULT_PAGE_SIZE", "2")
        get_settings.cache_clear()
        try:
            data = make_client(repo).get("/api/nfl-players").json()
        finally:
            monkeypatch.delenv("DEFAULT_PAGE_SIZE")
            get_settings.cache_clear()
        assert len(data["players"]) == 2
        assert data["pagination"] == {"page": 1, "limit": 2, "total": 3, "totalPages": 2}

    def test_sort_params(self, client):
        r = client.get("/api/nfl-players", params={"sortBy": "adds", "sortOrder": "asc"})
        assert r.status_code == 200
        assert len(r.json()["players"]) == 3

    @pytest.mark.parametrize(
        "params",
        [
            {"sortBy": "salary"},
            {"sortOrder": "sideways"},
            {"page": 0},
            {"limit": 0},
            {"page": "two"},
        ],
    )
    def test_invalid_params(self, client, params):
        r = client.get("/api/nfl-players", params=params)
        assert r.status_code == 400
        assert r.json()["error"].startswith("Invalid request parameters")

    def test_store_failure(self, broken_client):
        r = broken_client.get("/api/nfl-players")
        assert r.status_code == 500
        assert r.json() == {"error": "Failed to fetch NFL players"}

    def test_store_timeout(self, slow_client):
        r = slow_client.get("/api/nfl-players")
        assert r.status_code == 504
        assert "timed out" in r.json()["error"]


# =========================================================================
# /api/nfl-player-details
# =========================================================================


class TestPlayerDetailsEndpoint:
    def test_details(self, client):
        r = client.get("/api/nfl-player-details", params={"playerName": "PUKA NACUA"})
        assert r.status_code == 200
        data = r.json()
        assert data["playerName"] == "Puka Nacua"
        assert data["position"] == "WR"
        assert data["team"] == "LAR"
        assert len(data["playerDetails"]) == 2
        assert data["summary"]["totalAdds"] == 150
        assert [p["semana"] for p in data["chartData"]] == [1, 2]

    @pytest.mark.parametrize("params", [{}, {"playerName": ""}, {"playerName": "   "}])
    def test_missing_name(self, client, params):
        r = client.get("/api/nfl-player-details", params=params)
        assert r.status_code == 400
        assert r.json() == {"error": "Player name is required"}

    def test_unknown_player(self, client):
        r = client.get("/api/nfl-player-details", params={"playerName": "Nobody"})
        assert r.status_code == 404
        assert r.json() == {"error": "Player not found"}

    def test_store_failure_hides_driver_detail(self, broken_client):
        r = broken_client.get("/api/nfl-player-details", params={"playerName": "Puka Nacua"})
        assert r.status_code == 500
        assert r.json() == {"error": "Failed to fetch NFL player details"}
        assert "password" not in r.text


# =========================================================================
# /api/nfl-stats
# =========================================================================


class TestStatsEndpoint:
    def test_shape(self, client):
        r = client.get("/api/nfl-stats")
        assert r.status_code == 200
        data = r.json()
        assert set(data) == {
            "topAdds", "topDrops", "topRostered", "topPositiveChanges",
            "topNegativeChanges", "topStartedChangeLastWeek", "totalStats",
        }
        assert set(data["totalStats"]) == {
            "totalAdds", "totalDrops", "avgRostered", "avgStarted", "totalRecords", "uniquePlayers",
        }

    def test_values(self, client):
        data = client.get("/api/nfl-stats").json()
        assert data["topAdds"][0] == {"player_name": "Puka Nacua", "position": "WR", "team": "LAR", "totalAdds": 150}
        assert data["topNegativeChanges"][0]["player_name"] == "Jayden Reed"
        assert data["totalStats"]["totalRecords"] == 7

    def test_empty_store(self, make_client):
        data = make_client(InMemoryTrendsRepository([])).get("/api/nfl-stats").json()
        assert data["topAdds"] == []
        assert data["totalStats"]["avgStarted"] == 0

    def test_store_failure(self, broken_client):
        r = broken_client.get("/api/nfl-stats")
        assert r.status_code == 500
        assert r.json() == {"error": "Failed to fetch NFL stats"}

    def test_store_timeout(self, slow_client):
        r = slow_client.get("/api/nfl-stats")
        assert r.status_code == 504
