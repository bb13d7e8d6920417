"""
SettingsResolver — pick and merge the configured settings for one game.

Resolution:
  1. Start from catalog defaults for the requested game.
  2. Walk the [[games]] entries in file order. Classify each entry's
     declared type into a GameId (see classifier.classify) and build a
     candidate profile from it and the entry's LOOT folder.
  3. The first candidate whose GameType equals the requested game's
     GameType wins: its overrides are merged and the walk stops.
  4. An entry that can't be interpreted is logged and skipped.
  5. No match → the catalog defaults are used unchanged.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from lootcli.exceptions import ConflictingConfigurationError, InvalidEntryError
from lootcli.games import GameId, GameProfile
from .classifier import classify
from .migration import resolve_source
from .models import LootSettings, RawGameEntry

__all__ = ["SettingsResolver", "Resolution", "classify_entry"]

logger = logging.getLogger(__name__)

# "SkyrimSE" was both the serialised game type and the LOOT folder name
# LOOT v0.10 used for Skyrim Special Edition.
_LEGACY_SKYRIMSE_TAG = "SkyrimSE"
_SKYRIMSE_FOLDER = "Skyrim Special Edition"


def classify_entry(entry: RawGameEntry) -> GameId:
    """
    Pure per-entry classification: typed entry → GameId.

    Raises:
        InvalidEntryError: No gameId/type key, or an unrecognised type.
    """
    declared = entry.declared_type
    if declared is None:
        raise InvalidEntryError("'gameId' and 'type' keys both missing from game settings table")
    game_id = classify(declared, entry)
    if game_id is None:
        raise InvalidEntryError(f"invalid value {declared!r} for game type in game settings table")
    return game_id


@dataclass
class Resolution:
    """
    Outcome of SettingsResolver.resolve().

    profile      — the resolved GameProfile
    matched      — index of the accepted [[games]] entry, None if defaults were used
    """
    profile: GameProfile
    matched: Optional[int] = None


class SettingsResolver:
    """
    Resolve the GameProfile for one requested game.

    Usage::

        settings = load_settings(paths.settings_path())
        profile = SettingsResolver(GameId.TES5SE).resolve(settings).profile
    """

    def __init__(self, game_id: GameId) -> None:
        self._game_id = game_id

    def resolve(self, settings: LootSettings) -> Resolution:
        defaults = GameProfile.from_catalog(self._game_id)

        for index, entry in enumerate(settings.games):
            if entry is None:
                logger.debug("Skipping games[%d]: element is not a table", index)
                continue
            try:
                candidate = self._candidate(entry)
                if candidate.type != defaults.type:
                    continue
                self._merge_overrides(candidate, entry)
            except InvalidEntryError as exc:
                logger.debug("Skipping games[%d]: %s", index, exc)
                continue

            logger.debug("Using games[%d] settings: %s", index, candidate)
            return Resolution(profile=candidate, matched=index)

        logger.debug("No configured settings for %s, using defaults", defaults)
        return Resolution(profile=defaults)

    # ── Private helpers ───────────────────────────────────────────────────────

    @staticmethod
    def _candidate(entry: RawGameEntry) -> GameProfile:
        game_id = classify_entry(entry)

        folder = entry.folder
        if folder is None:
            raise InvalidEntryError("'folder' key missing from game settings table")
        if entry.type == _LEGACY_SKYRIMSE_TAG and folder == entry.type:
            folder = _SKYRIMSE_FOLDER

        return GameProfile.from_catalog(game_id, folder)

    @staticmethod
    def _merge_overrides(profile: GameProfile, entry: RawGameEntry) -> None:
        if entry.local_path is not None and entry.local_folder is not None:
            raise ConflictingConfigurationError(
                "Game settings have local_path and local_folder set, use only one."
            )

        if entry.name is not None:
            profile.name = entry.name
        if entry.master is not None:
            profile.master = entry.master
        if entry.minimum_header_version is not None:
            profile.minimum_header_version = entry.minimum_header_version

        source = resolve_source(
            profile.id,
            explicit_source=entry.masterlist_source,
            legacy_url=entry.repo,
            legacy_branch=entry.branch,
        )
        if source is not None:
            profile.masterlist_source = source

        if entry.path is not None:
            profile.game_path = Path(entry.path)

        if entry.local_path is not None:
            profile.game_local_path = Path(entry.local_path)
        elif entry.local_folder is not None:
            profile.set_game_local_folder(entry.local_folder)
