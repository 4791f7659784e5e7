"""Command line entrypoint: `checkers --ai`, `checkers --two-player`, `checkers --history 5`"""

import argparse
import curses
import logging
import random
import sys
from typing import Optional

from src.checkers.pieces import AVAILABLE_SIDE_NAMES, Side
from src.commentary.client import CommentaryClient
from src.commentary.worker import CommentaryWorker
from src.core.config import Settings
from src.core.exceptions import ConfigError, RepositoryError
from src.core.logging_setup import setup_logging
from src.db.database import create_db_engine, get_db
from src.db.sql_repository import SQLGameRecordRepository
from src.services.checkers_service import CheckersService
from src.terminal.app import run
from src.terminal.render import render_record

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a number of at least 1, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="checkers", description="Checkers in your terminal.")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--ai", action="store_true", help="play against the computer")
    mode.add_argument("--two-player", action="store_true", help="two humans, one keyboard")
    parser.add_argument(
        "--first",
        choices=[name.lower() for name in AVAILABLE_SIDE_NAMES],
        default="x",
        help="side that moves first (default: x)",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for the computer's moves")
    parser.add_argument("--no-commentary", action="store_true", help="no trash talk")
    parser.add_argument(
        "--history",
        type=positive_int,
        metavar="N",
        default=None,
        help="list the last N finished games and exit",
    )
    return parser


def ask_for_ai() -> bool:
    """Neither --ai nor --two-player given: ask."""
    answer = input("Do you want to play against the AI? (y/n): ")
    return answer.strip().lower() == "y"


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = Settings.from_env()
    except ConfigError as error:
        print(error, file=sys.stderr)
        return 2
    if args.no_commentary:
        settings = settings.model_copy(update={"commentary_enabled": False})

    setup_logging(settings)
    engine = create_db_engine(settings.database_url)

    with get_db(engine) as db:
        repository = SQLGameRecordRepository(db)

        if args.history is not None:
            service = CheckersService(repository)
            try:
                records = service.recent_games(args.history)
            except RepositoryError as error:
                print(error, file=sys.stderr)
                return 1
            for record in records:
                print(render_record(record))
            return 0

        ai_enabled = args.ai or (not args.two_player and ask_for_ai())

        client = CommentaryClient(settings) if settings.commentary_enabled else None
        worker = CommentaryWorker(client.fetch_commentary) if client else None
        service = CheckersService(repository, worker, rng=random.Random(args.seed))
        service.start_game(first_side=Side[args.first.upper()], ai_enabled=ai_enabled)
        try:
            curses.wrapper(run, service, settings)
        except KeyboardInterrupt:
            print("\nGame interrupted. Goodbye!")
        finally:
            service.close()
            if client is not None:
                client.close()

        game = service.game
        print(game.message)
        if game.commentary:
            print(f"Opponent says: {game.commentary}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
