"""Abstract base class for plugin sorters."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from lootcli.games import GameProfile
from .models import Message, PluginInfo, PluginMetadata

__all__ = ["AbstractSorter", "get_sorter"]


class AbstractSorter(ABC):
    """
    The sorter as seen by the worker and the report builder.

    One instance is bound to one game install. Sorting itself is opaque;
    the rest of the interface answers questions about the sorted plugins.
    """

    @abstractmethod
    def load_lists(self, masterlist: Path, userlist: Optional[Path] = None) -> None:
        """Load masterlist metadata and, if given, the user's metadata."""

    @abstractmethod
    def load_current_load_order_state(self) -> None:
        ...

    @abstractmethod
    def load_order(self) -> list[str]:
        ...

    @abstractmethod
    def sort_plugins(self, plugins: list[str]) -> list[str]:
        """Return *plugins* in sorted order."""

    @abstractmethod
    def plugin(self, name: str) -> Optional[PluginInfo]:
        """Header info for *name*, None if the plugin is not loaded."""

    @abstractmethod
    def plugin_metadata(self, name: str) -> Optional[PluginMetadata]:
        """Evaluated masterlist + userlist metadata for *name*, None if there is none."""

    @abstractmethod
    def general_messages(self) -> list[Message]:
        """Messages not attached to any plugin."""

    @property
    @abstractmethod
    def engine_version(self) -> str:
        """Version string of the sorting engine, reported in the run stats."""


def get_sorter(profile: GameProfile, local_path: Optional[Path] = None) -> AbstractSorter:
    """
    Factory: return the sorter for *profile*.

    Import is deferred so that importing lootcli doesn't require libloot.

    Raises:
        SorterNotAvailableError: The libloot Python bindings are missing.
    """
    from .libloot import LibLootSorter

    return LibLootSorter(profile, local_path)
