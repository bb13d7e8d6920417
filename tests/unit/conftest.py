"""
Shared fixtures for the unit tests.

FakeSorter is an in-memory AbstractSorter: plugins, metadata and general
messages are plain dicts/lists set up by each test.
"""

import logging
from pathlib import Path
from typing import Optional

import pytest

from lootcli.sorter.base import AbstractSorter
from lootcli.sorter.models import Message, PluginInfo, PluginMetadata


class FakeSorter(AbstractSorter):
    def __init__(
        self,
        plugins: Optional[dict[str, PluginInfo]] = None,
        metadata: Optional[dict[str, PluginMetadata]] = None,
        general: Optional[list[Message]] = None,
        sorted_order: Optional[list[str]] = None,
    ) -> None:
        self.plugins = plugins or {}
        self.metadata = metadata or {}
        self.general = general or []
        self.sorted_order = sorted_order
        self.loaded_lists: Optional[tuple[Path, Optional[Path]]] = None
        self.state_loaded = False

    def load_lists(self, masterlist, userlist=None):
        self.loaded_lists = (masterlist, userlist)

    def load_current_load_order_state(self):
        self.state_loaded = True

    def load_order(self):
        return list(self.plugins)

    def sort_plugins(self, plugins):
        if self.sorted_order is not None:
            return list(self.sorted_order)
        return sorted(plugins)

    def plugin(self, name):
        return self.plugins.get(name)

    def plugin_metadata(self, name):
        return self.metadata.get(name)

    def general_messages(self):
        return list(self.general)

    @property
    def engine_version(self):
        return "0.0-fake"


@pytest.fixture
def fake_sorter_cls():
    return FakeSorter


@pytest.fixture
def loot_data(tmp_path, monkeypatch) -> Path:
    """Point lootcli's LOOT data folder at a temporary directory."""
    data = tmp_path / "LOOT"
    data.mkdir()
    monkeypatch.setenv("LOOTCLI_DATA_DIR", str(data))
    return data


@pytest.fixture(autouse=True)
def _reset_lootcli_logger():
    """configure_logging() detaches the lootcli logger; undo that after each test."""
    yield
    logger = logging.getLogger("lootcli")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
