"""
Tests for the player and stats services against the in-memory store.

Expected values are worked out by hand from SAMPLE_ROWS in conftest.py.
"""

from __future__ import annotations

import asyncio

import pytest

from fantasy_trends.repositories import InMemoryTrendsRepository, StoreError
from fantasy_trends.services.players import (
    PlayerFilters,
    chart_points,
    get_player_details,
    list_distinct_players,
)
from fantasy_trends.services.stats import build_leaderboard_queries, fetch_all, get_leaderboards


def names(entries):
    return [e["player_name"] for e in entries]


class TestListDistinctPlayers:
    def test_default_list(self, repo):
        players = asyncio.run(list_distinct_players(repo, PlayerFilters()))
        assert names(players) == ["Bijan Robinson", "Puka Nacua", "Jayden Reed"]
        assert [p["percent_started_change"] for p in players] == [8.0, 5.0, -10.0]

    def test_rows_without_any_change_are_excluded(self, repo):
        players = asyncio.run(list_distinct_players(repo, PlayerFilters()))
        assert "Tyler Conklin" not in names(players)
        assert "Cairo Santos" not in names(players)

    def test_player_search_is_case_insensitive_substring(self, repo):
        players = asyncio.run(list_distinct_players(repo, PlayerFilters(player="PUK")))
        assert names(players) == ["Puka Nacua"]

    def test_team_substring(self, repo):
        players = asyncio.run(list_distinct_players(repo, PlayerFilters(team="at")))
        assert names(players) == ["Bijan Robinson"]

    def test_position_exact(self, repo):
        players = asyncio.run(list_distinct_players(repo, PlayerFilters(position="WR")))
        assert names(players) == ["Puka Nacua", "Jayden Reed"]

    def test_sort_by_does_not_change_final_order(self, repo):
        players = asyncio.run(
            list_distinct_players(repo, PlayerFilters(sort_by="player_name", sort_order="asc"))
        )
        assert names(players) == ["Bijan Robinson", "Puka Nacua", "Jayden Reed"]

    def test_sort_order_decides_ties(self):
        rows = [
            {"id": 1, "player_name": "A", "adds": 1, "percent_started_change": 2.0, "semana": 1},
            {"id": 2, "player_name": "B", "adds": 9, "percent_started_change": 2.0, "semana": 1},
        ]
        repo = InMemoryTrendsRepository(rows)
        ascending = asyncio.run(list_distinct_players(repo, PlayerFilters(sort_by="adds", sort_order="asc")))
        descending = asyncio.run(list_distinct_players(repo, PlayerFilters(sort_by="adds", sort_order="desc")))
        assert names(ascending) == ["A", "B"]
        assert names(descending) == ["B", "A"]

    def test_no_matches(self, repo):
        assert asyncio.run(list_distinct_players(repo, PlayerFilters(player="nobody"))) == []


class TestPlayerDetails:
    def test_details(self, repo):
        details = asyncio.run(get_player_details(repo, "puka nacua"))
        assert details["playerName"] == "Puka Nacua"
        assert details["position"] == "WR"
        assert details["team"] == "LAR"
        assert [d["semana"] for d in details["playerDetails"]] == [1, 2]
        assert details["summary"] == {
            "totalAdds": 150,
            "totalDrops": 30,
            "avgRosteredChange": pytest.approx(1.5),
            "avgStartedChange": pytest.approx(1.5),
            "maxRostered": 97.0,
            "maxStarted": 85.0,
            "currentRostered": 97.0,
            "currentStarted": 85.0,
        }

    def test_metadata_comes_from_first_row(self):
        rows = [
            {"id": 1, "player_name": "A", "team": "NYJ", "position": "WR", "semana": 1, "timestamp": "2025-09-07"},
            {"id": 2, "player_name": "A", "team": "MIN", "position": "WR", "semana": 2, "timestamp": "2025-09-14"},
        ]
        details = asyncio.run(get_player_details(InMemoryTrendsRepository(rows), "a"))
        assert details["team"] == "NYJ"

    def test_series_is_oldest_week_first(self):
        rows = [
            {"id": 1, "player_name": "A", "semana": 3, "timestamp": "2025-09-21"},
            {"id": 2, "player_name": "A", "semana": 1, "timestamp": "2025-09-08"},
            {"id": 3, "player_name": "A", "semana": 1, "timestamp": "2025-09-07"},
        ]
        details = asyncio.run(get_player_details(InMemoryTrendsRepository(rows), "A"))
        assert [d["id"] for d in details["playerDetails"]] == [3, 2, 1]

    def test_name_must_match_exactly(self, repo):
        assert asyncio.run(get_player_details(repo, "puka")) is None

    def test_unknown_player(self, repo):
        assert asyncio.run(get_player_details(repo, "Nobody")) is None

    def test_chart_points(self):
        points = chart_points([{"semana": 1, "timestamp": "t", "percent_rostered": 50.0, "adds": None}])
        assert points == [{
            "semana": 1,
            "timestamp": "t",
            "rostered": 50.0,
            "rosteredChange": 0,
            "started": 0,
            "startedChange": 0,
            "adds": 0,
            "drops": 0,
        }]


class TestLeaderboards:
    def test_leaderboards(self, repo):
        stats = asyncio.run(get_leaderboards(repo))

        assert stats["topAdds"] == [
            {"player_name": "Puka Nacua", "position": "WR", "team": "LAR", "totalAdds": 150},
            {"player_name": "Bijan Robinson", "position": "RB", "team": "ATL", "totalAdds": 110},
            {"player_name": "Jayden Reed", "position": "WR", "team": "GB", "totalAdds": 5},
            {"player_name": "Tyler Conklin", "position": "TE", "team": "NYJ", "totalAdds": 0},
        ]
        assert [(e["player_name"], e["totalDrops"]) for e in stats["topDrops"]] == [
            ("Jayden Reed", 200),
            ("Puka Nacua", 30),
            ("Bijan Robinson", 5),
            ("Tyler Conklin", 0),
        ]
        assert [(e["player_name"], e["percent_rostered"]) for e in stats["topRostered"]] == [
            ("Bijan Robinson", 99.5),
            ("Puka Nacua", 97.0),
            ("Jayden Reed", 60.0),
            ("Tyler Conklin", 10.0),
        ]
        assert [(e["player_name"], e["percent_started_change"]) for e in stats["topPositiveChanges"]] == [
            ("Bijan Robinson", 8.0),
            ("Puka Nacua", 5.0),
        ]
        assert [(e["player_name"], e["percent_started_change"]) for e in stats["topNegativeChanges"]] == [
            ("Jayden Reed", -10.0),
            ("Puka Nacua", -2.0),
        ]

    def test_latest_week_leaders(self, repo):
        stats = asyncio.run(get_leaderboards(repo))
        assert stats["topStartedChangeLastWeek"] == [{
            "player_name": "Bijan Robinson",
            "position": "RB",
            "team": "ATL",
            "percent_started_change": 8.0,
            "timestamp": "2025-09-14T12:00:00+00:00",
            "semana": 2,
        }]

    def test_total_stats(self, repo):
        totals = asyncio.run(get_leaderboards(repo))["totalStats"]
        assert totals == {
            "totalAdds": 265,
            "totalDrops": 235,
            "avgRostered": pytest.approx(460.5 / 7),
            "avgStarted": pytest.approx(392.0 / 7),
            "totalRecords": 7,
            "uniquePlayers": 5,
        }

    def test_limit(self, repo):
        stats = asyncio.run(get_leaderboards(repo, limit=1))
        assert names(stats["topAdds"]) == ["Puka Nacua"]
        assert names(stats["topRostered"]) == ["Bijan Robinson"]

    def test_empty_store(self):
        stats = asyncio.run(get_leaderboards(InMemoryTrendsRepository([])))
        assert stats["topAdds"] == []
        assert stats["topStartedChangeLastWeek"] == []
        assert stats["totalStats"]["totalRecords"] == 0
        assert stats["totalStats"]["avgRostered"] == 0

    def test_one_failed_read_fails_everything(self, repo):
        calls = []

        class FlakyRepository(InMemoryTrendsRepository):
            async def _fetch(self, query):
                calls.append(query)
                if "drops" in query.columns:
                    raise RuntimeError("boom")
                return await super()._fetch(query)

        flaky = FlakyRepository(repo.rows)
        with pytest.raises(StoreError):
            asyncio.run(fetch_all(flaky, build_leaderboard_queries()))
        assert len(calls) == len(build_leaderboard_queries())
