"""Command-line interface for PyFiction."""

import argparse
import logging
import sys

from pyfiction import __version__
from pyfiction.config import get_config, get_example_config
from pyfiction.engine.console import Console
from pyfiction.engine.game import EXIT_QUIT, Game
from pyfiction.engine.rooms import VARIANTS, build_registry

logger = logging.getLogger(__name__)


def setup_logging(level_name: str, debug: bool = False) -> None:
    """Send log records to stderr so they never mix with the narrative."""
    level = getattr(logging, level_name.upper(), None)
    if debug:
        level = logging.DEBUG
    elif not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def build_arg_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        description="PyFiction - a small text adventure interpreter",
        prog="pyfiction",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"PyFiction {__version__}",
    )

    parser.add_argument(
        "--start",
        type=str,
        help="Location id to start in (default: from config, else test_room)",
    )

    parser.add_argument(
        "--variant",
        choices=VARIANTS,
        help="Narrative variant of the demo rooms",
    )

    parser.add_argument(
        "--turn-limit",
        type=int,
        help="Stop after this many turns (0 for no limit)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log parsed intents and location changes to stderr",
    )

    parser.add_argument(
        "--list-locations",
        action="store_true",
        help="Print the registered location ids and exit",
    )

    parser.add_argument(
        "--example-config",
        action="store_true",
        help="Print an example config file and exit",
    )

    return parser


def run_game(game: Game) -> int:
    """Run the main game loop and return the exit status."""
    try:
        return game.run()
    except KeyboardInterrupt:
        game.console.say()
        logger.info("Interrupted by user")
        return EXIT_QUIT


def main(argv: list[str] | None = None, console: Console | None = None) -> int:
    """Main entry point."""
    args = build_arg_parser().parse_args(argv)

    # Get config; command line takes priority
    config = get_config()
    setup_logging(config.logging.level, debug=args.debug)

    if args.example_config:
        print(get_example_config())
        return 0

    variant = args.variant or config.game.variant
    start = args.start or config.game.start_location
    if args.turn_limit is not None:
        turn_limit = args.turn_limit if args.turn_limit > 0 else None
    else:
        turn_limit = config.game.get_turn_limit()

    try:
        registry = build_registry(variant)
    except ValueError as e:
        print(f"Error building locations: {e}", file=sys.stderr)
        return 1

    if args.list_locations:
        for location_id in registry.ids():
            print(location_id)
        return 0

    logger.debug(f"Starting in '{start}' with the {variant} variant")
    game = Game(
        registry,
        console=console,
        start=start,
        turn_limit=turn_limit,
    )
    return run_game(game)


if __name__ == "__main__":
    sys.exit(main())
