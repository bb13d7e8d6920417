"""
paths.py
Locations of LOOT's per-user data.

Layout under loot_app_data():
  settings.toml
  games/<folder>/masterlist.yaml
  games/<folder>/userlist.yaml

LOOTCLI_DATA_DIR overrides the LOOT data folder (used by tests and by
portable mod manager installs).
"""

import os
import sys
from pathlib import Path

__all__ = [
    "local_app_data",
    "loot_app_data",
    "settings_path",
    "game_folder",
    "masterlist_path",
    "userlist_path",
]


def local_app_data() -> Path:
    """Per-user application data root (%LOCALAPPDATA% or the XDG data home)."""
    if sys.platform == "win32":
        local = os.environ.get("LOCALAPPDATA")
        if local:
            return Path(local)
        return Path.home() / "AppData" / "Local"
    xdg = os.environ.get("XDG_DATA_HOME")
    return Path(xdg) if xdg else Path.home() / ".local" / "share"


def loot_app_data() -> Path:
    override = os.environ.get("LOOTCLI_DATA_DIR")
    if override:
        return Path(override)
    return local_app_data() / "LOOT"


def settings_path() -> Path:
    return loot_app_data() / "settings.toml"


def game_folder(folder_name: str) -> Path:
    """LOOT's data folder for one game: <LOOT>/games/<folder_name>."""
    return loot_app_data() / "games" / folder_name


def masterlist_path(folder_name: str) -> Path:
    return game_folder(folder_name) / "masterlist.yaml"


def userlist_path(folder_name: str) -> Path:
    return game_folder(folder_name) / "userlist.yaml"
