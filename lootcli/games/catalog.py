"""
GameCatalog — static knowledge of every supported game.

All functions are pure lookups over the tables below; the only failure mode
is an unrecognised game name (UnknownGameError).
"""

import logging
from typing import Union

from lootcli.exceptions import UnknownGameError
from .models import GameId, GameType

__all__ = [
    "DEFAULT_MASTERLIST_BRANCH",
    "identity",
    "game_type",
    "game_name",
    "folder_name",
    "plugins_folder_name",
    "default_master_file",
    "default_minimum_header_version",
    "default_repository_name",
    "default_masterlist_url",
    "supports_light_plugins",
]

logger = logging.getLogger(__name__)

DEFAULT_MASTERLIST_BRANCH = "v0.23"

_MASTERLIST_URL_TEMPLATE = (
    "https://raw.githubusercontent.com/loot/{repo}/{branch}/masterlist.yaml"
)

# ── Tables ────────────────────────────────────────────────────────────────────

# Lower-case CLI name → GameId
_NAME_MAP = {
    "morrowind":  GameId.TES3,
    "oblivion":   GameId.TES4,
    "nehrim":     GameId.NEHRIM,
    "skyrim":     GameId.TES5,
    "enderal":    GameId.ENDERAL,
    "skyrimse":   GameId.TES5SE,
    "enderalse":  GameId.ENDERALSE,
    "skyrimvr":   GameId.TES5VR,
    "fallout3":   GameId.FO3,
    "falloutnv":  GameId.FONV,
    "fallout4":   GameId.FO4,
    "fallout4vr": GameId.FO4VR,
    "starfield":  GameId.STARFIELD,
}

_GAME_TYPES = {
    GameId.TES3:      GameType.TES3,
    GameId.TES4:      GameType.TES4,
    GameId.NEHRIM:    GameType.TES4,
    GameId.TES5:      GameType.TES5,
    GameId.ENDERAL:   GameType.TES5,
    GameId.TES5SE:    GameType.TES5SE,
    GameId.ENDERALSE: GameType.TES5SE,
    GameId.TES5VR:    GameType.TES5VR,
    GameId.FO3:       GameType.FO3,
    GameId.FONV:      GameType.FONV,
    GameId.FO4:       GameType.FO4,
    GameId.FO4VR:     GameType.FO4VR,
    GameId.STARFIELD: GameType.STARFIELD,
}

_GAME_NAMES = {
    GameId.TES3:      "TES III: Morrowind",
    GameId.TES4:      "TES IV: Oblivion",
    GameId.NEHRIM:    "Nehrim - At Fate's Edge",
    GameId.TES5:      "TES V: Skyrim",
    GameId.ENDERAL:   "Enderal: Forgotten Stories",
    GameId.TES5SE:    "TES V: Skyrim Special Edition",
    GameId.ENDERALSE: "Enderal: Forgotten Stories (Special Edition)",
    GameId.TES5VR:    "TES V: Skyrim VR",
    GameId.FO3:       "Fallout 3",
    GameId.FONV:      "Fallout: New Vegas",
    GameId.FO4:       "Fallout 4",
    GameId.FO4VR:     "Fallout 4 VR",
    GameId.STARFIELD: "Starfield",
}

# Default LOOT folder name, also the historical serialised game id
_FOLDER_NAMES = {
    GameId.TES3:      "Morrowind",
    GameId.TES4:      "Oblivion",
    GameId.NEHRIM:    "Nehrim",
    GameId.TES5:      "Skyrim",
    GameId.ENDERAL:   "Enderal",
    GameId.TES5SE:    "Skyrim Special Edition",
    GameId.ENDERALSE: "Enderal Special Edition",
    GameId.TES5VR:    "Skyrim VR",
    GameId.FO3:       "Fallout3",
    GameId.FONV:      "FalloutNV",
    GameId.FO4:       "Fallout4",
    GameId.FO4VR:     "Fallout4VR",
    GameId.STARFIELD: "Starfield",
}

_MASTER_FILES = {
    GameId.TES3:      "Morrowind.esm",
    GameId.TES4:      "Oblivion.esm",
    GameId.NEHRIM:    "Nehrim.esm",
    GameId.TES5:      "Skyrim.esm",
    GameId.ENDERAL:   "Skyrim.esm",
    GameId.TES5SE:    "Skyrim.esm",
    GameId.ENDERALSE: "Skyrim.esm",
    GameId.TES5VR:    "Skyrim.esm",
    GameId.FO3:       "Fallout3.esm",
    GameId.FONV:      "FalloutNV.esm",
    GameId.FO4:       "Fallout4.esm",
    GameId.FO4VR:     "Fallout4.esm",
    GameId.STARFIELD: "Starfield.esm",
}

_MINIMUM_HEADER_VERSIONS = {
    GameId.TES3:      1.2,
    GameId.TES4:      0.8,
    GameId.NEHRIM:    0.8,
    GameId.TES5:      0.94,
    GameId.ENDERAL:   0.94,
    GameId.TES5SE:    1.7,
    GameId.ENDERALSE: 1.7,
    GameId.TES5VR:    1.7,
    GameId.FO3:       0.94,
    GameId.FONV:      1.32,
    GameId.FO4:       0.95,
    GameId.FO4VR:     0.95,
    GameId.STARFIELD: 0.96,
}

_REPOSITORY_NAMES = {
    GameId.TES3:      "morrowind",
    GameId.TES4:      "oblivion",
    GameId.NEHRIM:    "oblivion",
    GameId.TES5:      "skyrim",
    GameId.ENDERAL:   "enderal",
    GameId.TES5SE:    "skyrimse",
    GameId.ENDERALSE: "enderal",
    GameId.TES5VR:    "skyrimvr",
    GameId.FO3:       "fallout3",
    GameId.FONV:      "falloutnv",
    GameId.FO4:       "fallout4",
    GameId.FO4VR:     "fallout4vr",
    GameId.STARFIELD: "starfield",
}

_LIGHT_PLUGIN_TYPES = frozenset({
    GameType.TES5SE,
    GameType.TES5VR,
    GameType.FO4,
    GameType.FO4VR,
    GameType.STARFIELD,
})


# ── Lookups ───────────────────────────────────────────────────────────────────

def identity(name: str) -> GameId:
    """
    Map a game name such as "SkyrimSE" or "fallout4vr" to its GameId.

    Raises:
        UnknownGameError: The name is not in the catalog.
    """
    game_id = _NAME_MAP.get(name.lower())
    if game_id is None:
        raise UnknownGameError(f'invalid game name "{name}"')
    return game_id


def game_type(game_id: GameId) -> GameType:
    return _GAME_TYPES[game_id]


def game_name(game_id: GameId) -> str:
    """Display name, e.g. "TES IV: Oblivion"."""
    return _GAME_NAMES[game_id]


def folder_name(game_id: GameId) -> str:
    """Default LOOT data folder name for the game."""
    return _FOLDER_NAMES[game_id]


def plugins_folder_name(game_id: GameId) -> str:
    return "Data Files" if game_id == GameId.TES3 else "Data"


def default_master_file(game_id: GameId) -> str:
    return _MASTER_FILES[game_id]


def default_minimum_header_version(game_id: GameId) -> float:
    return _MINIMUM_HEADER_VERSIONS[game_id]


def default_repository_name(game_id: GameId) -> str:
    return _REPOSITORY_NAMES[game_id]


def default_masterlist_url(game: Union[GameId, str]) -> str:
    """
    Current masterlist URL for a GameId or an official repository name.

    >>> default_masterlist_url("skyrimse")
    'https://raw.githubusercontent.com/loot/skyrimse/v0.23/masterlist.yaml'
    """
    repo = default_repository_name(game) if isinstance(game, GameId) else game
    return _MASTERLIST_URL_TEMPLATE.format(repo=repo, branch=DEFAULT_MASTERLIST_BRANCH)


def supports_light_plugins(type_: GameType) -> bool:
    return type_ in _LIGHT_PLUGIN_TYPES
