"""
LegacyClassifier — tell total conversions apart from their base games.

LOOT used to store Nehrim as an "Oblivion" game and Enderal / Enderal SE as
"Skyrim" / "SkyrimSE" games. Each check below decides whether such an entry
really is the total conversion.

Decision order per check:
  1. Entry has a non-empty install path that exists on disk
       → the launcher marker file decides, heuristics are skipped
  2. Otherwise true if ANY heuristic matches:
       • master file / local folder matches the total conversion
       • name contains the game name (case-insensitive)
       • LOOT folder contains the game name (case-insensitive)
       • isBaseGameInstance = false (LOOT 0.18.1 – 0.19.0)

Never raises: missing or mistyped fields simply do not match.
"""

import logging
from pathlib import Path
from typing import Optional

from lootcli.games import GameId, catalog
from .models import RawGameEntry

__all__ = ["is_nehrim", "is_enderal", "is_enderal_se", "classify"]

logger = logging.getLogger(__name__)

NEHRIM_MARKER = "NehrimLauncher.exe"
# Shared by Enderal and Enderal SE, so the on-disk check can't tell them apart.
ENDERAL_MARKER = "Enderal Launcher.exe"

ENDERAL_LOCAL_FOLDER = "enderal"
ENDERAL_SE_LOCAL_FOLDER = "Enderal Special Edition"


def _contains(value, needle: str) -> bool:
    return value is not None and needle in value.lower()


def _marker_check(entry: RawGameEntry, marker: str) -> Optional[bool]:
    """True/False from the install folder, or None when it can't be checked."""
    if not entry.path:
        return None
    install = Path(entry.path)
    try:
        if not install.exists():
            return None
        found = (install / marker).exists()
    except OSError as exc:
        logger.debug("Cannot inspect %s: %s", install, exc)
        return None
    logger.debug("%s %s in %s", marker, "found" if found else "not found", install)
    return found


def _legacy_non_base_instance(entry: RawGameEntry) -> bool:
    return entry.is_base_game_instance is not None and not entry.is_base_game_instance


def is_nehrim(entry: RawGameEntry) -> bool:
    on_disk = _marker_check(entry, NEHRIM_MARKER)
    if on_disk is not None:
        return on_disk

    return (
        entry.master == catalog.default_master_file(GameId.NEHRIM)
        or _contains(entry.name, "nehrim")
        or _contains(entry.folder, "nehrim")
        or _legacy_non_base_instance(entry)
    )


def _is_enderal_variant(entry: RawGameEntry, expected_local_folder: str) -> bool:
    on_disk = _marker_check(entry, ENDERAL_MARKER)
    if on_disk is not None:
        return on_disk

    return (
        entry.local_folder_name == expected_local_folder
        or _contains(entry.name, "enderal")
        or _contains(entry.folder, "enderal")
        or _legacy_non_base_instance(entry)
    )


def is_enderal(entry: RawGameEntry) -> bool:
    return _is_enderal_variant(entry, ENDERAL_LOCAL_FOLDER)


def is_enderal_se(entry: RawGameEntry) -> bool:
    return _is_enderal_variant(entry, ENDERAL_SE_LOCAL_FOLDER)


# Declared type strings that are unambiguous
_PLAIN_TYPES = {
    "Morrowind":  GameId.TES3,
    "Skyrim VR":  GameId.TES5VR,
    "Fallout3":   GameId.FO3,
    "FalloutNV":  GameId.FONV,
    "Fallout4":   GameId.FO4,
    "Fallout4VR": GameId.FO4VR,
    "Starfield":  GameId.STARFIELD,
}


def classify(declared_type: str, entry: RawGameEntry) -> Optional[GameId]:
    """
    Map a declared game type string to a GameId, disambiguating the shared
    Oblivion / Skyrim / Skyrim SE types.

    Returns None for an unrecognised type string.
    """
    if declared_type == "Oblivion":
        return GameId.NEHRIM if is_nehrim(entry) else GameId.TES4
    if declared_type == "Skyrim":
        return GameId.ENDERAL if is_enderal(entry) else GameId.TES5
    if declared_type in ("SkyrimSE", "Skyrim Special Edition"):
        return GameId.ENDERALSE if is_enderal_se(entry) else GameId.TES5SE
    return _PLAIN_TYPES.get(declared_type)
