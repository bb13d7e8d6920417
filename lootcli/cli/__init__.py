"""
cli — command-line interface for lootcli.

Entry points
────────────
  python -m lootcli   (via lootcli/__main__.py)
  lootcli             (via pyproject.toml [project.scripts])
"""

from lootcli.cli.main import build_parser, main, options_from_args, run_sort

__all__ = ["build_parser", "main", "options_from_args", "run_sort"]
