#!/usr/bin/env python3
"""
Command-line interface for the Fantasy Trends API.

Usage:
    fantasy-trends serve --port 8000
    fantasy-trends players --player puka --position WR --page 1
    fantasy-trends player "Puka Nacua"
    fantasy-trends stats
    fantasy-trends stats --fixture tests/fixtures/trends.json

Every read command accepts --fixture to run against a JSON fixture file
instead of the database configured by DATABASE_URL.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Awaitable, Callable

from .core.types import SortField

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("fantasy_trends.cli")


def get_repo(args: argparse.Namespace):
    """Build the repository from settings, honoring --fixture."""
    from .core.config import get_settings
    from .repositories import get_repository

    settings = get_settings()
    if getattr(args, "fixture", None):
        settings = settings.model_copy(update={"fixture_path": args.fixture})
    return get_repository(settings)


def _run(args: argparse.Namespace, action: Callable[[Any], Awaitable[Any]]) -> Any:
    """Run ``action(repo)`` with the repository opened and closed around it."""

    async def runner():
        repo = get_repo(args)
        await repo.open()
        try:
            return await action(repo)
        finally:
            await repo.close()

    return asyncio.run(runner())


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from .core.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "fantasy_trends.api.main:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        reload=args.reload,
    )
    return 0


def cmd_players(args: argparse.Namespace) -> int:
    """Print one page of the distinct player list."""
    from .api.pagination import PaginationParams
    from .core.config import get_settings
    from .core.types import SortOrder
    from .repositories import StoreError
    from .services.players import PlayerFilters, list_distinct_players

    filters = PlayerFilters(
        player=args.player,
        team=args.team,
        position=args.position,
        sort_by=SortField(args.sort_by),
        sort_order=SortOrder(args.sort_order),
    )
    pagination = PaginationParams(page=args.page, limit=args.limit or get_settings().default_page_size)

    try:
        players = _run(args, lambda repo: list_distinct_players(repo, filters))
    except StoreError as e:
        logger.error("Failed to fetch players: %s", e)
        return 1

    if args.json:
        _print_json(pagination.paginate(players, key="players"))
        return 0

    meta = pagination.meta(len(players))
    print(f"\nPlayers (page {meta['page']}/{meta['totalPages']}, {meta['total']} total)")
    print("=" * 72)
    for p in pagination.slice(players):
        change = p.get("percent_started_change") or 0
        print(
            f"{p['player_name']:<28} {p.get('position') or '-':<4} {p.get('team') or '-':<5} "
            f"start {change:+7.2f}  adds {p.get('adds') or 0:>6}  drops {p.get('drops') or 0:>6}"
        )
    return 0


def cmd_player(args: argparse.Namespace) -> int:
    """Print one player's series and summary."""
    from .repositories import StoreError
    from .services.players import get_player_details

    try:
        details = _run(args, lambda repo: get_player_details(repo, args.name))
    except StoreError as e:
        logger.error("Failed to fetch player details: %s", e)
        return 1

    if details is None:
        logger.error("Player not found: %s", args.name)
        return 1

    if args.json:
        _print_json(details)
        return 0

    print(f"\n{details['playerName']} ({details['position'] or '-'}, {details['team'] or '-'})")
    print("=" * 50)
    for key, value in details["summary"].items():
        print(f"{key:<20} {value}")
    print()
    for point in details["chartData"]:
        print(
            f"week {point['semana']:>2}  rostered {point['rostered']:6.2f}  "
            f"started {point['started']:6.2f}  adds {point['adds']:>6}  drops {point['drops']:>6}"
        )
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    """Print leaderboards and totals."""
    from .core.config import get_settings
    from .repositories import StoreError
    from .services.stats import get_leaderboards

    limit = args.limit or get_settings().leaderboard_size
    try:
        stats = _run(args, lambda repo: get_leaderboards(repo, limit=limit))
    except StoreError as e:
        logger.error("Failed to fetch stats: %s", e)
        return 1

    if args.json:
        _print_json(stats)
        return 0

    boards = [
        ("Top adds", "topAdds", "totalAdds"),
        ("Top drops", "topDrops", "totalDrops"),
        ("Top rostered %", "topRostered", "percent_rostered"),
        ("Biggest start % gains", "topPositiveChanges", "percent_started_change"),
        ("Biggest start % drops", "topNegativeChanges", "percent_started_change"),
        ("Latest week start % gains", "topStartedChangeLastWeek", "percent_started_change"),
    ]
    for title, key, metric in boards:
        print(f"\n{title}")
        print("-" * 50)
        for rank, entry in enumerate(stats[key], start=1):
            print(f"{rank:2}. {entry['player_name']:<28} {entry.get('position') or '-':<4} {entry[metric]}")

    print("\nTotals")
    print("-" * 50)
    for key, value in stats["totalStats"].items():
        print(f"{key:<15} {value}")
    return 0


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Fantasy Trends CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", help="Bind address (default: API_HOST)")
    serve_parser.add_argument("--port", type=int, help="Port (default: API_PORT)")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    # Shared options for read commands
    read_parent = argparse.ArgumentParser(add_help=False)
    read_parent.add_argument("--fixture", help="Read observations from a JSON fixture instead of the database")
    read_parent.add_argument("--json", action="store_true", help="Print the raw JSON payload")

    # players command
    players_parser = subparsers.add_parser("players", parents=[read_parent], help="List players with recent changes")
    players_parser.add_argument("--player", default="", help="Name substring (case-insensitive)")
    players_parser.add_argument("--team", default="", help="Team substring (case-insensitive)")
    players_parser.add_argument("--position", default="", help="Exact position, e.g. QB")
    players_parser.add_argument(
        "--sort-by",
        choices=[field.value for field in SortField],
        default=SortField.percent_started_change.value,
        help="Column rows are read in order of (decides ties)",
    )
    players_parser.add_argument("--sort-order", choices=["asc", "desc"], default="desc")
    players_parser.add_argument("--page", type=int, default=1)
    players_parser.add_argument("--limit", type=int, help="Players per page")

    # player command
    player_parser = subparsers.add_parser("player", parents=[read_parent], help="Show one player's weekly series")
    player_parser.add_argument("name", help="Exact player name (case-insensitive)")

    # stats command
    stats_parser = subparsers.add_parser("stats", parents=[read_parent], help="Show leaderboards and totals")
    stats_parser.add_argument("--limit", type=int, help="Entries per leaderboard")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "serve": cmd_serve,
        "players": cmd_players,
        "player": cmd_player,
        "stats": cmd_stats,
    }

    cmd_func = commands.get(args.command)
    if cmd_func:
        return cmd_func(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
