"""
Data models for the settings module.

Key concepts
────────────
RawGameEntry  — one [[games]] table from settings.toml, every field optional
LootSettings  — the parts of settings.toml lootcli reads
"""

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any, Optional

__all__ = ["RawGameEntry", "LootSettings"]


def _str(table: dict, key: str) -> Optional[str]:
    value = table.get(key)
    return value if isinstance(value, str) else None


def _float(table: dict, key: str) -> Optional[float]:
    value = table.get(key)
    # bool is an int subclass but never a valid header version
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _bool(table: dict, key: str) -> Optional[bool]:
    value = table.get(key)
    return value if isinstance(value, bool) else None


@dataclass
class RawGameEntry:
    """
    Typed view of one game settings table.

    A field is None when the key is missing or holds a value of the wrong
    TOML type. `declared_type` is the value of `gameId`, falling back to the
    legacy `type` key.
    """
    game_id:                Optional[str]   = None
    type:                   Optional[str]   = None
    folder:                 Optional[str]   = None
    name:                   Optional[str]   = None
    master:                 Optional[str]   = None
    minimum_header_version: Optional[float] = None
    masterlist_source:      Optional[str]   = None
    repo:                   Optional[str]   = None
    branch:                 Optional[str]   = None
    path:                   Optional[str]   = None
    local_path:             Optional[str]   = None
    local_folder:           Optional[str]   = None
    is_base_game_instance:  Optional[bool]  = None

    @classmethod
    def from_table(cls, table: dict[str, Any]) -> "RawGameEntry":
        return cls(
            game_id=_str(table, "gameId"),
            type=_str(table, "type"),
            folder=_str(table, "folder"),
            name=_str(table, "name"),
            master=_str(table, "master"),
            minimum_header_version=_float(table, "minimumHeaderVersion"),
            masterlist_source=_str(table, "masterlistSource"),
            repo=_str(table, "repo"),
            branch=_str(table, "branch"),
            path=_str(table, "path"),
            local_path=_str(table, "local_path"),
            local_folder=_str(table, "local_folder"),
            is_base_game_instance=_bool(table, "isBaseGameInstance"),
        )

    @property
    def declared_type(self) -> Optional[str]:
        return self.game_id if self.game_id is not None else self.type

    @property
    def local_folder_name(self) -> Optional[str]:
        """local_folder if set, else the last component of local_path."""
        if self.local_folder is not None:
            return self.local_folder
        if self.local_path is not None:
            return PurePath(self.local_path.replace("\\", "/")).name
        return None


@dataclass
class LootSettings:
    """
    language — top-level `language` key, None if absent
    games    — one entry per [[games]] table, in file order; a list element
               that was not a table is kept as None so the resolver can skip
               and log it
    """
    language: Optional[str] = None
    games:    list[Optional[RawGameEntry]] = field(default_factory=list)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "LootSettings":
        language = _str(document, "language")
        raw_games = document.get("games")
        games: list[Optional[RawGameEntry]] = []
        if isinstance(raw_games, list):
            for table in raw_games:
                games.append(RawGameEntry.from_table(table) if isinstance(table, dict) else None)
        return cls(language=language, games=games)
