"""
Pytest configuration for fantasy-trends tests.

Every test runs against an in-memory Record Store seeded with SAMPLE_ROWS,
so no database is needed.
"""

from __future__ import annotations

from contextlib import ExitStack
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Seven observations over two weeks. Row 6 has only zero changes and row 7
# only nulls, so neither qualifies for the player list.
SAMPLE_ROWS = [
    {
        "id": 1, "player_name": "Puka Nacua", "player_id": "4426515", "position": "WR", "team": "LAR",
        "opponent": "HOU", "percent_rostered": 95.0, "percent_rostered_change": 1.0,
        "percent_started": 80.0, "percent_started_change": 5.0, "adds": 100, "drops": 10,
        "semana": 1, "timestamp": "2025-09-07T12:00:00+00:00",
    },
    {
        "id": 2, "player_name": "Puka Nacua", "player_id": "4426515", "position": "WR", "team": "LAR",
        "opponent": "TEN", "percent_rostered": 97.0, "percent_rostered_change": 2.0,
        "percent_started": 85.0, "percent_started_change": -2.0, "adds": 50, "drops": 20,
        "semana": 2, "timestamp": "2025-09-14T12:00:00+00:00",
    },
    {
        "id": 3, "player_name": "Bijan Robinson", "player_id": "4430807", "position": "RB", "team": "ATL",
        "opponent": "TB", "percent_rostered": 99.0, "percent_rostered_change": 0.0,
        "percent_started": 90.0, "percent_started_change": 3.0, "adds": 80, "drops": 5,
        "semana": 1, "timestamp": "2025-09-07T12:00:00+00:00",
    },
    {
        "id": 4, "player_name": "Bijan Robinson", "player_id": "4430807", "position": "RB", "team": "ATL",
        "opponent": "MIN", "percent_rostered": 99.5, "percent_rostered_change": 0.5,
        "percent_started": 92.0, "percent_started_change": 8.0, "adds": 30, "drops": None,
        "semana": 2, "timestamp": "2025-09-14T12:00:00+00:00",
    },
    {
        "id": 5, "player_name": "Jayden Reed", "player_id": "4362249", "position": "WR", "team": "GB",
        "opponent": "WAS", "percent_rostered": 60.0, "percent_rostered_change": -5.0,
        "percent_started": 40.0, "percent_started_change": -10.0, "adds": 5, "drops": 200,
        "semana": 2, "timestamp": "2025-09-14T12:00:00+00:00",
    },
    {
        "id": 6, "player_name": "Tyler Conklin", "player_id": "3915486", "position": "TE", "team": "NYJ",
        "opponent": "BUF", "percent_rostered": 10.0, "percent_rostered_change": 0.0,
        "percent_started": 5.0, "percent_started_change": 0.0, "adds": 0, "drops": 0,
        "semana": 2, "timestamp": "2025-09-14T12:00:00+00:00",
    },
    {
        "id": 7, "player_name": "Cairo Santos", "player_id": None, "position": "K", "team": None,
        "opponent": None, "percent_rostered": None, "percent_rostered_change": None,
        "percent_started": None, "percent_started_change": None, "adds": None, "drops": None,
        "semana": 1, "timestamp": "2025-09-07T12:00:00+00:00",
    },
]


@pytest.fixture
def sample_rows():
    """Fresh copies of the sample observations."""
    return [dict(row) for row in SAMPLE_ROWS]


@pytest.fixture
def repo(sample_rows):
    from fantasy_trends.repositories import InMemoryTrendsRepository

    return InMemoryTrendsRepository(sample_rows)


@pytest.fixture
def fixture_file():
    """Path to the JSON fixture holding the same observations."""
    return FIXTURES_DIR / "trends.json"


@pytest.fixture
def make_client():
    """Build a TestClient whose routes read from the given repository."""
    from starlette.testclient import TestClient

    from fantasy_trends.api.dependencies import get_repo
    from fantasy_trends.api.main import create_app

    with ExitStack() as stack:

        def _make(repository):
            app = create_app()
            app.dependency_overrides[get_repo] = lambda: repository
            return stack.enter_context(TestClient(app))

        yield _make


@pytest.fixture
def client(make_client, repo):
    return make_client(repo)
