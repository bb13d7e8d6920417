"""Data models for the games module."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

__all__ = ["GameId", "GameType", "GameProfile"]


class GameId(str, Enum):
    """One value per real-world game, including total conversions."""
    TES3       = "tes3"
    TES4       = "tes4"
    NEHRIM     = "nehrim"
    TES5       = "tes5"
    ENDERAL    = "enderal"
    TES5SE     = "tes5se"
    ENDERALSE  = "enderalse"
    TES5VR     = "tes5vr"
    FO3        = "fo3"
    FONV       = "fonv"
    FO4        = "fo4"
    FO4VR      = "fo4vr"
    STARFIELD  = "starfield"


class GameType(str, Enum):
    """
    Engine-type class understood by the sorter.

    Nehrim shares TES4 with Oblivion; Enderal and Enderal SE share TES5 and
    TES5SE with their base games.
    """
    TES3      = "tes3"
    TES4      = "tes4"
    TES5      = "tes5"
    TES5SE    = "tes5se"
    TES5VR    = "tes5vr"
    FO3       = "fo3"
    FONV      = "fonv"
    FO4       = "fo4"
    FO4VR     = "fo4vr"
    STARFIELD = "starfield"


@dataclass
class GameProfile:
    """
    Fully resolved settings for one game.

    Built by SettingsResolver (or straight from catalog defaults via
    GameProfile.from_catalog) and read by the rest of the run.
    """
    id:                     GameId
    type:                   GameType
    name:                   str
    folder_name:            str
    master:                 str
    minimum_header_version: float = 0.0
    masterlist_source:      str = ""
    game_path:              Path = field(default_factory=Path)
    game_local_path:        Optional[Path] = None

    @classmethod
    def from_catalog(cls, game_id: GameId, loot_folder: str = "") -> "GameProfile":
        """Catalog defaults for *game_id*; *loot_folder* overrides the folder name."""
        from . import catalog

        return cls(
            id=game_id,
            type=catalog.game_type(game_id),
            name=catalog.game_name(game_id),
            folder_name=loot_folder or catalog.folder_name(game_id),
            master=catalog.default_master_file(game_id),
            minimum_header_version=catalog.default_minimum_header_version(game_id),
            masterlist_source=catalog.default_masterlist_url(game_id),
        )

    @property
    def data_path(self) -> Path:
        """The game's plugins folder (e.g. <game>/Data)."""
        from . import catalog

        return self.game_path / catalog.plugins_folder_name(self.id)

    def set_game_local_folder(self, folder_name: str) -> None:
        """Point the local data path at <local app data>/<folder_name>."""
        from lootcli.paths import local_app_data

        self.game_local_path = local_app_data() / folder_name

    def __eq__(self, other: object) -> bool:
        # Two profiles describe the same game when names and LOOT folders match.
        if not isinstance(other, GameProfile):
            return NotImplemented
        return self.name == other.name and self.folder_name == other.folder_name

    def __str__(self) -> str:
        return f"{self.name} [{self.id.value}] ({self.folder_name})"
