"""coinboard command line.

Each invocation runs exactly one command and exits. Cron drives the fetch
cycles, e.g.:

    */5 * * * *   coinboard update_coin_prices
    */10 * * * *  coinboard pricing_rollup
    */15 * * * *  coinboard update_network
    */15 * * * *  coinboard update_reddit
    */30 * * * *  coinboard update_forum

Usage:
    coinboard index                 # create tables and indexes
    coinboard update_coin_prices    # fetch exchange quotes
    coinboard update_network        # fetch network stats
    coinboard update_reddit         # fetch new subreddit posts
    coinboard update_forum          # fetch new forum topics
    coinboard pricing_rollup        # average the last 10 minute block
    coinboard serve                 # start the dashboard web server

The profile is chosen with COINBOARD_ENV (dev, test or prod).
"""

import argparse
import sys
from typing import Callable

from coinboard.pipelines import updaters
from coinboard.shared.config import Config
from coinboard.shared.utils import setup_logger


def serve() -> None:
    import uvicorn

    uvicorn.run("coinboard.web.app:app", host=Config.HOST, port=Config.PORT)


COMMANDS: dict[str, tuple[Callable[[], object], str]] = {
    "index": (updaters.ensure_indexes, "Add indexes to the database"),
    "update_coin_prices": (updaters.update_coin_prices, "Get updated coin prices"),
    "update_network": (updaters.update_network, "Get updated network information"),
    "update_reddit": (updaters.update_reddit, "Get new subreddit posts"),
    "update_forum": (updaters.update_forum, "Get new forum topics"),
    "pricing_rollup": (updaters.pricing_rollup, "Aggregate pricing information"),
    "serve": (serve, "Start the dashboard web server"),
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="coinboard",
        description="Cryptocurrency dashboard",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)
    for name, (_, help_text) in COMMANDS.items():
        subparsers.add_parser(name, help=help_text)

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logger = setup_logger("coinboard", level="DEBUG" if args.verbose else Config.LOG_LEVEL)

    try:
        Config.validate()
        action, _ = COMMANDS[args.command]
        action()
    except Exception as e:
        logger.error("%s failed: %s", args.command, e, exc_info=args.verbose)
        return 1

    logger.info("%s finished", args.command)
    return 0


if __name__ == "__main__":
    sys.exit(main())
