"""Simple CLI entrypoint for foxdogs."""
import argparse
import logging
import os

from . import __version__
from .results import GameResultDao, create_engine_from_env

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="foxdogs")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument(
        "--best",
        type=int,
        default=10,
        help="Number of high scores to list (default: 10).",
    )
    parser.add_argument(
        "--database",
        default=None,
        help="SQLAlchemy URL of the results store (default: $FOXDOGS_DATABASE_URL or sqlite:///foxdogs.db).",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=os.getenv("FOXDOGS_LOG_LEVEL", "WARNING").upper(),
        help="Logging level (default: $FOXDOGS_LOG_LEVEL or WARNING).",
    )
    args = parser.parse_args(argv)
    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid FOXDOGS_LOG_LEVEL {args.log_level!r}")

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.version:
        print(__version__)
        return 0

    if args.best < 0:
        parser.error("--best must not be negative")

    dao = GameResultDao(create_engine_from_env(args.database))
    results = dao.find_best(args.best)
    if not results:
        print("No results yet.")
        return 0
    print(f"{'#':>3}  {'player':<20} {'winner':<6} {'rounds':>6}  duration")
    for rank, result in enumerate(results, start=1):
        seconds = int(result.duration.total_seconds())
        print(
            f"{rank:>3}  {result.player:<20} {result.winner.value:<6} {result.rounds:>6}"
            f"  {seconds // 60:d}:{seconds % 60:02d}"
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
