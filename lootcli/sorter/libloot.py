"""
LibLootSorter — AbstractSorter backed by the libloot Python bindings.

The bindings (`import loot`) are built from the libloot source tree and are
not on PyPI, so they are imported lazily and a missing module surfaces as
SorterNotAvailableError rather than an import failure of lootcli itself.

Every call into the bindings is wrapped so that libloot failures reach the
worker as SorterError.
"""

import logging
from pathlib import Path
from typing import Optional

from lootcli.exceptions import SorterError, SorterNotAvailableError
from lootcli.games import GameProfile, GameType, catalog
from lootcli.log import log_level_from_string
from .base import AbstractSorter
from .models import (
    File,
    Message,
    MessageContent,
    MessageType,
    PluginCleaningData,
    PluginInfo,
    PluginMetadata,
)

__all__ = ["LibLootSorter", "LIBLOOT_GAME_TYPES"]

logger = logging.getLogger(__name__)

# libloot's own log output; emitted through lootcli's handler
engine_logger = logging.getLogger("lootcli.libloot")

# GameType → attribute name on loot.GameType
LIBLOOT_GAME_TYPES = {
    GameType.TES3:      "Morrowind",
    GameType.TES4:      "Oblivion",
    GameType.TES5:      "Skyrim",
    GameType.TES5SE:    "SkyrimSE",
    GameType.TES5VR:    "SkyrimVR",
    GameType.FO3:       "Fallout3",
    GameType.FONV:      "FalloutNV",
    GameType.FO4:       "Fallout4",
    GameType.FO4VR:     "Fallout4VR",
    GameType.STARFIELD: "Starfield",
}


def _import_loot():
    try:
        import loot  # type: ignore
    except ImportError as exc:
        raise SorterNotAvailableError(
            "libloot Python bindings not installed. "
            "Build them with: cd libloot/python && maturin develop"
        ) from exc
    return loot


def _forward_engine_log(level, message: str) -> None:
    """libloot logging callback: re-emit through the lootcli logger."""
    name = str(getattr(level, "name", level))
    engine_logger.log(log_level_from_string(name).level, "%s", message)


def _value(obj, attr: str):
    """Read a binding property that some libloot releases expose as a method."""
    value = getattr(obj, attr)
    return value() if callable(value) else value


def _contents(items) -> list[MessageContent]:
    return [MessageContent(text=c.text, language=c.language) for c in items or []]


def _message(msg) -> Message:
    kind = str(getattr(msg.message_type, "name", msg.message_type)).lower()
    try:
        type_ = MessageType(kind)
    except ValueError:
        logger.debug("Unknown message type %r, treating as say", kind)
        type_ = MessageType.SAY
    return Message(type=type_, content=_contents(msg.content))


def _cleaning(data) -> PluginCleaningData:
    return PluginCleaningData(
        crc=data.crc,
        itm_count=data.itm_count,
        deleted_reference_count=data.deleted_reference_count,
        deleted_navmesh_count=data.deleted_navmesh_count,
        cleaning_utility=data.cleaning_utility or "",
        detail=_contents(data.detail),
    )


class LibLootSorter(AbstractSorter):
    """
    Parameters
    ----------
    profile    : resolved GameProfile (game type, install and data paths)
    local_path : game's local app data folder; None lets libloot choose
    """

    def __init__(self, profile: GameProfile, local_path: Optional[Path] = None) -> None:
        self._loot = _import_loot()
        self._profile = profile

        set_callback = getattr(self._loot, "set_logging_callback", None)
        if set_callback is not None:
            set_callback(_forward_engine_log)
        else:
            logger.debug("libloot bindings have no set_logging_callback")

        attr = LIBLOOT_GAME_TYPES[profile.type]
        game_type = getattr(self._loot.GameType, attr, None)
        if game_type is None:
            raise SorterError(f"libloot has no GameType {attr!r} for {profile.name}")

        args = [game_type, str(profile.game_path)]
        if local_path is not None:
            args.append(str(local_path))
        try:
            self._game = self._loot.Game(*args)
            self._db = self._game.database()
        except Exception as exc:
            raise SorterError(f"Could not create libloot game handle: {exc}") from exc

    # ── Lists and load order ──────────────────────────────────────────────────

    def load_lists(self, masterlist: Path, userlist: Optional[Path] = None) -> None:
        try:
            self._db.load_masterlist(str(masterlist))
            if userlist is not None:
                self._db.load_userlist(str(userlist))
        except Exception as exc:
            raise SorterError(f"Failed to load metadata lists: {exc}") from exc

    def load_current_load_order_state(self) -> None:
        try:
            self._game.load_current_load_order_state()
        except Exception as exc:
            raise SorterError(f"Failed to read the current load order: {exc}") from exc

    def load_order(self) -> list[str]:
        try:
            return list(self._game.load_order())
        except Exception as exc:
            raise SorterError(f"Failed to read the current load order: {exc}") from exc

    def sort_plugins(self, plugins: list[str]) -> list[str]:
        data_path = self._profile.data_path
        paths = [str(data_path / name) for name in plugins]
        logger.debug("Loading %d plugin headers from %s", len(paths), data_path)
        try:
            self._game.load_plugin_headers(paths)
            return list(self._game.sort_plugins(plugins))
        except Exception as exc:
            raise SorterError(f"Sorting failed: {exc}") from exc

    # ── Queries ───────────────────────────────────────────────────────────────

    def plugin(self, name: str) -> Optional[PluginInfo]:
        try:
            p = self._game.plugin(name)
            if p is None:
                return None
            info = PluginInfo(
                name=name,
                masters=list(_value(p, "masters")),
                is_master=bool(_value(p, "is_master")),
                is_light_plugin=bool(_value(p, "is_light_plugin")),
                loads_archive=bool(_value(p, "loads_archive")),
            )
        except Exception as exc:
            raise SorterError(f"Failed to read plugin {name}: {exc}") from exc

        if not catalog.supports_light_plugins(self._profile.type):
            info.is_light_plugin = False
        return info

    def plugin_metadata(self, name: str) -> Optional[PluginMetadata]:
        try:
            meta = self._db.plugin_metadata(name, True, True)
            if meta is None:
                return None
            return PluginMetadata(
                name=name,
                incompatibilities=[
                    File(name=str(f.name), display_name=f.display_name or "")
                    for f in meta.incompatibilities
                ],
                messages=[_message(m) for m in meta.messages],
                dirty_info=[_cleaning(d) for d in meta.dirty_info],
                clean_info=[_cleaning(d) for d in meta.clean_info],
            )
        except Exception as exc:
            raise SorterError(f"Failed to evaluate metadata for {name}: {exc}") from exc

    def general_messages(self) -> list[Message]:
        try:
            return [_message(m) for m in self._db.general_messages(True)]
        except Exception as exc:
            raise SorterError(f"Failed to evaluate general messages: {exc}") from exc

    @property
    def engine_version(self) -> str:
        return str(self._loot.libloot_version())
