"""Command-line entry point: ``python -m starlanes`` / ``starlanes``."""

from __future__ import annotations

import argparse
import logging
import sys
from functools import partial

from .constants import APP_VERSION
from .models.extraction import DataExtractionError, list_games, list_races, load_map_data
from .models.session import MapData
from .models.settings import Settings, load_settings, save_settings

logger = logging.getLogger("starlanes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="starlanes",
        description="Interactive jump-lane map of an Aurora 4X save database.",
    )
    parser.add_argument("database", nargs="?", help="Path to the save database (AuroraDB.db)")
    parser.add_argument("--game", type=int, help="GameID to show")
    parser.add_argument("--race", type=int, help="RaceID whose survey data is shown")
    parser.add_argument("--list-games", action="store_true", help="List games and exit")
    parser.add_argument("--list-races", action="store_true", help="List races of --game and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    return parser


def resolve_settings(args: argparse.Namespace, stored: Settings) -> Settings:
    """Command-line values override the stored selection."""
    return Settings(
        database_path=args.database or stored.database_path,
        game_id=args.game if args.game is not None else stored.game_id,
        race_id=args.race if args.race is not None else stored.race_id,
        window_width=stored.window_width,
        window_height=stored.window_height,
    )


def main(argv: list[str] | None = None) -> int:
    """Entry point for the starlanes command."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = resolve_settings(args, load_settings())
    if not settings.database_path:
        print("No database given and none remembered; pass the path to AuroraDB.db.", file=sys.stderr)
        return 2

    try:
        if args.list_games:
            for game in list_games(settings.database_path):
                print(f"{game.game_id}\t{game.name}")
            return 0
        if args.list_races:
            if settings.game_id is None:
                print("--list-races needs --game.", file=sys.stderr)
                return 2
            for race in list_races(settings.database_path, settings.game_id):
                print(f"{race.race_id}\t{race.name}")
            return 0
    except DataExtractionError as exc:
        logger.error("%s", exc)
        return 1

    if settings.game_id is None or settings.race_id is None:
        print("Choose a game and race with --game and --race (see --list-games).", file=sys.stderr)
        return 2

    # pygame is only needed once a window opens
    from .app import App

    def remember(_: MapData) -> None:
        save_settings(settings)

    app = App(
        loader=partial(load_map_data, settings.database_path, settings.game_id, settings.race_id),
        width=settings.window_width,
        height=settings.window_height,
        on_loaded=remember,
    )
    app.run()

    settings.window_width, settings.window_height = app.window_size
    save_settings(settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
