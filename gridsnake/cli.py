"""
cli.py — Command-line entry point.

Parses arguments, sets up logging, loads the config file, saved options and
high scores, then hands over to the GameController.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .app import App, Globals
from .config import APP_NAME
from .highscores import HighScoreTable
from .settings import Config, ConfigError, default_config_path
from .storage import LoadError

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Snake game on a glyph grid",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        metavar="FILE",
        help=f"Read configuration settings from FILE [default: {default_config_path()}]",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug messages")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_globals(config: Config) -> tuple[Globals, Optional[str]]:
    """Saved options and high scores; read failures become a notice."""
    notices = []
    try:
        options = config.load_options()
    except LoadError as exc:
        log.warning("%s", exc)
        notices.append(str(exc))
        options = config.options
    try:
        high_scores = config.load_high_scores()
    except LoadError as exc:
        log.warning("%s", exc)
        notices.append(str(exc))
        high_scores = HighScoreTable()
    return Globals(config, options, high_scores), "; ".join(notices) or None


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    path = args.config or default_config_path()
    try:
        config = Config.load(path, allow_missing=args.config is None)
    except ConfigError as exc:
        print(f"{APP_NAME}: {exc}", file=sys.stderr)
        return 1

    globals_, notice = load_globals(config)

    from .controller import GameController
    GameController(App(globals_, notice=notice), config.glyphs).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
