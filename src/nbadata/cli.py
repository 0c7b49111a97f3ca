"""Command-line interface for searching and comparing players."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from nbadata.cache import TTLCache
from nbadata.compare import ComparisonService, build_player
from nbadata.config import Settings
from nbadata.persistence import PlayerStore
from nbadata.provider import StatsProviderClient


logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search and compare NBA players")
    parser.add_argument("--settings", type=Path, default=None, help="JSON settings profile to load")
    parser.add_argument("--save-settings", type=Path, default=None, help="Write the effective settings to JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search the stats provider by name")
    search.add_argument("term", help="Name or part of a name")

    compare = sub.add_parser("compare", help="Compare two players side by side")
    compare.add_argument("player1", help="First player name")
    compare.add_argument("player2", nargs="?", default="", help="Second player name")
    compare.add_argument("--season", type=int, default=None, help="Season year (e.g. 2024)")

    stats = sub.add_parser("stats", help="Season averages for a provider player id")
    stats.add_argument("player_id", type=int)
    stats.add_argument("--season", type=int, default=None)

    sub.add_parser("seasons", help="List available seasons")

    serve = sub.add_parser("serve", help="Run the REST API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return parser.parse_args(argv)


def _load_settings(args: argparse.Namespace) -> Settings:
    settings = Settings.from_env()
    if args.settings:
        settings = Settings.load(args.settings, base=settings)
    if args.save_settings:
        settings.save(args.save_settings)
        logger.info("Settings saved to %s", args.save_settings)
    return settings


def run(args: argparse.Namespace, settings: Settings, client: StatsProviderClient) -> int:
    season = getattr(args, "season", None) or settings.default_season

    if args.command == "search":
        players = client.search_players(args.term)
        for player in players:
            print(f"{player.id:>8}  {player.full_name:<28} {player.team.abbreviation:<4} {player.position}")
        if not players:
            print(f"No players found for '{args.term}'")
        return 0

    if args.command == "stats":
        averages = client.get_player_stats(args.player_id, season)
        if averages is None:
            print(f"No stats for player {args.player_id} in {season}")
            return 1
        print(json.dumps(averages.model_dump(), indent=2))
        return 0

    if args.command == "seasons":
        print(" ".join(str(year) for year in client.get_available_seasons()))
        return 0

    if args.command == "compare":
        service = ComparisonService(client, PlayerStore(settings.db_path))
        first, second = service.assemble(args.player1, args.player2, season)
        payload = {
            "season": season,
            "player1": first.model_dump(mode="json") if first else None,
            "player2": second.model_dump(mode="json") if second else None,
        }
        print(json.dumps(payload, indent=2))
        return 0 if first is not None or not args.player1 else 1

    raise SystemExit(f"unknown command {args.command!r}")


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = _load_settings(args)

    if args.command == "serve":
        import uvicorn

        from nbadata.api import create_app

        uvicorn.run(create_app(settings), host=args.host, port=args.port)
        return

    with StatsProviderClient(settings, TTLCache()) as client:
        code = run(args, settings, client)
    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    main()
