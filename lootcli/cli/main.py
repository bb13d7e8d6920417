"""
CLI entry point for lootcli.

Usage
─────
  lootcli --game SkyrimSE \\
      --gamePath "C:/Games/Skyrim Special Edition" \\
      --pluginListPath "C:/MO2/profiles/Default/loadorder.txt" \\
      --out "C:/MO2/loot_report.json" \\
      --logLevel debug --language de

Flag names are the camelCase ones mod managers already pass to lootcli.
The parser and run_sort are separate functions so they can be
unit-tested without invoking a real sorter.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from lootcli import __version__
from lootcli.exceptions import UnknownGameError
from lootcli.games import catalog
from lootcli.log import LogLevel, configure_logging, log_level_from_string
from lootcli.worker import LootWorker, RunOptions

__all__ = ["build_parser", "options_from_args", "run_sort", "main"]

logger = logging.getLogger(__name__)


# ── Argument parser ────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lootcli",
        description="Sort a game's plugins with LOOT and write a JSON report",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--game",
        required=True,
        metavar="NAME",
        help="Game name, e.g. Oblivion, SkyrimSE, Fallout4VR (case-insensitive)",
    )
    parser.add_argument(
        "--gamePath",
        dest="game_path",
        required=True,
        metavar="PATH",
        help="Game installation folder",
    )
    parser.add_argument(
        "--pluginListPath",
        dest="plugin_list_path",
        required=True,
        metavar="PATH",
        help="Load order file to rewrite with the sorted plugins",
    )
    parser.add_argument(
        "--out",
        required=True,
        metavar="PATH",
        help="Where to write the JSON report",
    )
    parser.add_argument(
        "--logLevel",
        dest="log_level",
        default="",
        metavar="LEVEL",
        help="trace | debug | info | warning | error (default: info)",
    )
    parser.add_argument(
        "--language",
        default="",
        metavar="CODE",
        help="Message language, e.g. de or pt_BR (default: LOOT setting, then en)",
    )
    parser.add_argument(
        "--skipUpdateMasterlist",
        dest="skip_update_masterlist",
        action="store_true",
        default=False,
        help="Use the existing masterlist instead of downloading it",
    )
    return parser


# ── Command implementation ────────────────────────────────────────────────────


def options_from_args(ns: argparse.Namespace) -> RunOptions:
    """
    Raises:
        UnknownGameError: --game is not a supported game.
    """
    return RunOptions(
        game=catalog.identity(ns.game),
        game_path=Path(ns.game_path),
        plugin_list_path=Path(ns.plugin_list_path),
        output_path=Path(ns.out),
        language=ns.language,
        update_masterlist=not ns.skip_update_masterlist,
    )


def run_sort(options: RunOptions, sorter_factory=None) -> int:
    """Run one sort; returns the exit status."""
    return LootWorker(options, sorter_factory=sorter_factory).run()


# ── Entry point ───────────────────────────────────────────────────────────────


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point. Returns exit code."""
    parser = build_parser()
    ns = parser.parse_args(argv)

    level: LogLevel = log_level_from_string(ns.log_level)
    configure_logging(level)

    try:
        options = options_from_args(ns)
    except UnknownGameError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    logger.debug("lootcli %s: %s", __version__, options)
    return run_sort(options)


if __name__ == "__main__":
    raise SystemExit(main())
