"""
Fantasy Trends

Read-only analytics over a single append-only table of weekly
fantasy-football player metrics (roster %, start %, adds, drops and
their week-over-week changes).

Key Features:
- Distinct player list with search, team/position filters and pagination
- Per-player weekly series with summary statistics
- Leaderboards: top adds, drops, roster %, start-change swings
- Postgres (psycopg3 async pool) or JSON-fixture backed Record Store

Usage:
    from fantasy_trends.repositories import InMemoryTrendsRepository
    from fantasy_trends.services import get_leaderboards

    repo = InMemoryTrendsRepository.from_json("trends.json")
    stats = await get_leaderboards(repo)
"""

__version__ = "1.0.0"
