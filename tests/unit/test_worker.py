"""
Unit tests for lootcli/worker.py

Full pipeline with FakeSorter and a local masterlist source, so no libloot
and no network is needed. The LOOT data folder is redirected into tmp_path
by the loot_data fixture.
"""

import json
import logging
from unittest.mock import patch

import pytest

from lootcli.exceptions import FileAccessError, SorterError
from lootcli.games import GameId, GameProfile
from lootcli.log import Progress
from lootcli.sorter import PluginInfo
from lootcli.worker import LOADORDER_HEADER, LootWorker, RunOptions


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def source_masterlist(tmp_path):
    path = tmp_path / "source" / "masterlist.yaml"
    path.parent.mkdir()
    path.write_text("plugins: []\n", encoding="utf-8")
    return path


@pytest.fixture
def options(tmp_path) -> RunOptions:
    return RunOptions(
        game=GameId.TES5,
        game_path=tmp_path / "game",
        plugin_list_path=tmp_path / "loadorder.txt",
        output_path=tmp_path / "report.json",
    )


def _write_settings(loot_data, text: str) -> None:
    (loot_data / "settings.toml").write_text(text, encoding="utf-8")


def _skyrim_settings(loot_data, source, extra: str = "") -> None:
    _write_settings(
        loot_data,
        f"{extra}"
        "[[games]]\n"
        'type = "Skyrim"\n'
        'folder = "Skyrim"\n'
        f"masterlistSource = '{source}'\n",
    )


def _worker(options, sorter, progress=None):
    steps = progress if progress is not None else []
    return LootWorker(
        options,
        sorter_factory=lambda profile, local_path: sorter,
        progress=steps.append,
    )


def _sorter(fake_sorter_cls):
    return fake_sorter_cls(
        plugins={
            "Skyrim.esm": PluginInfo("Skyrim.esm", is_master=True),
            "Mod.esp": PluginInfo("Mod.esp", masters=["Skyrim.esm", "Missing.esm"]),
            "Plain.esp": PluginInfo("Plain.esp"),
        },
        sorted_order=["Skyrim.esm", "Plain.esp", "Mod.esp"],
    )


# ─────────────────────────────────────────────────────────────────────────────
# 1. Successful run
# ─────────────────────────────────────────────────────────────────────────────

class TestRun:

    def test_full_pipeline(self, loot_data, options, source_masterlist, fake_sorter_cls):
        _skyrim_settings(loot_data, source_masterlist)
        sorter = _sorter(fake_sorter_cls)
        steps = []

        assert _worker(options, sorter, steps).run() == 0

        assert steps == list(Progress)
        masterlist = loot_data / "games" / "Skyrim" / "masterlist.yaml"
        assert masterlist.read_text(encoding="utf-8") == "plugins: []\n"
        assert sorter.loaded_lists == (masterlist, None)
        assert sorter.state_loaded

        assert options.plugin_list_path.read_text(encoding="utf-8").splitlines() == [
            LOADORDER_HEADER, "Skyrim.esm", "Plain.esp", "Mod.esp",
        ]

        report = json.loads(options.output_path.read_text(encoding="utf-8"))
        assert [p["name"] for p in report["plugins"]] == ["Skyrim.esm", "Mod.esp"]
        assert report["plugins"][1]["missingMasters"] == ["Missing.esm"]
        assert report["stats"]["engineVersion"] == "0.0-fake"

    def test_userlist_loaded_when_present(self, loot_data, options, source_masterlist, fake_sorter_cls):
        _skyrim_settings(loot_data, source_masterlist)
        game_dir = loot_data / "games" / "Skyrim"
        game_dir.mkdir(parents=True)
        (game_dir / "userlist.yaml").write_text("plugins: []\n", encoding="utf-8")
        sorter = _sorter(fake_sorter_cls)

        assert _worker(options, sorter).run() == 0
        assert sorter.loaded_lists[1] == game_dir / "userlist.yaml"

    def test_sorter_receives_resolved_profile(self, loot_data, options, source_masterlist, fake_sorter_cls):
        _skyrim_settings(loot_data, source_masterlist)
        seen = []

        def factory(profile, local_path):
            seen.append((profile, local_path))
            return _sorter(fake_sorter_cls)

        assert LootWorker(options, sorter_factory=factory, progress=lambda s: None).run() == 0
        profile, local_path = seen[0]
        assert profile.game_path == options.game_path
        assert profile.masterlist_source == str(source_masterlist)
        assert local_path is None


# ─────────────────────────────────────────────────────────────────────────────
# 2. Masterlist update
# ─────────────────────────────────────────────────────────────────────────────

class TestMasterlistUpdate:

    def test_skip_update_uses_existing(self, loot_data, options, fake_sorter_cls):
        game_dir = loot_data / "games" / "Skyrim"
        game_dir.mkdir(parents=True)
        (game_dir / "masterlist.yaml").write_text("plugins: []\n", encoding="utf-8")
        options.update_masterlist = False

        with patch("lootcli.worker.fetch_masterlist") as fetch:
            assert _worker(options, _sorter(fake_sorter_cls)).run() == 0
        fetch.assert_not_called()

    def test_skip_update_without_masterlist_still_fetches(self, loot_data, options, fake_sorter_cls):
        options.update_masterlist = False
        with patch("lootcli.worker.fetch_masterlist") as fetch:
            assert _worker(options, _sorter(fake_sorter_cls)).run() == 0
        fetch.assert_called_once()
        source, dest = fetch.call_args.args
        assert source == GameProfile.from_catalog(GameId.TES5).masterlist_source
        assert dest == loot_data / "games" / "Skyrim" / "masterlist.yaml"

    def test_fetch_failure_writes_nothing(self, loot_data, options, tmp_path, fake_sorter_cls):
        _skyrim_settings(loot_data, tmp_path / "does-not-exist.yaml")
        steps = []
        assert _worker(options, _sorter(fake_sorter_cls), steps).run() == 1
        assert not options.output_path.exists()
        assert not options.plugin_list_path.exists()
        assert Progress.DONE not in steps


# ─────────────────────────────────────────────────────────────────────────────
# 3. Failures
# ─────────────────────────────────────────────────────────────────────────────

class TestFailures:

    def test_sorter_error(self, loot_data, options, source_masterlist, fake_sorter_cls):
        _skyrim_settings(loot_data, source_masterlist)
        sorter = _sorter(fake_sorter_cls)

        def failing_sort(plugins):
            raise SorterError("cyclic interaction detected")

        sorter.sort_plugins = failing_sort
        assert _worker(options, sorter).run() == 1
        assert not options.output_path.exists()

    def test_unexpected_error_during_report(self, loot_data, options, source_masterlist,
                                            fake_sorter_cls, caplog):
        _skyrim_settings(loot_data, source_masterlist)
        sorter = _sorter(fake_sorter_cls)

        def failing_metadata(name):
            raise RuntimeError("condition evaluation failed")

        sorter.plugin_metadata = failing_metadata
        caplog.set_level(logging.ERROR, logger="lootcli")
        steps = []

        assert _worker(options, sorter, steps).run() == 1
        assert not options.output_path.exists()
        assert Progress.DONE not in steps
        assert "condition evaluation failed" in caplog.text

    def test_invalid_settings_file(self, loot_data, options, fake_sorter_cls):
        _write_settings(loot_data, "[[games]\n")
        assert _worker(options, _sorter(fake_sorter_cls)).run() == 1

    def test_unwritable_report(self, loot_data, options, source_masterlist, fake_sorter_cls):
        _skyrim_settings(loot_data, source_masterlist)
        options.output_path = options.output_path.parent / "missing-dir" / "report.json"
        assert _worker(options, _sorter(fake_sorter_cls)).run() == 1


# ─────────────────────────────────────────────────────────────────────────────
# 4. Settings resolution
# ─────────────────────────────────────────────────────────────────────────────

class TestResolveProfile:

    def test_defaults_without_settings_file(self, loot_data, options, fake_sorter_cls):
        profile, language = _worker(options, None).resolve_profile()
        assert profile == GameProfile.from_catalog(GameId.TES5)
        assert language == "en"

    def test_language_from_settings(self, loot_data, options, source_masterlist):
        _skyrim_settings(loot_data, source_masterlist, extra='language = "de"\n\n')
        _, language = _worker(options, None).resolve_profile()
        assert language == "de"

    def test_cli_language_wins(self, loot_data, options, source_masterlist):
        _skyrim_settings(loot_data, source_masterlist, extra='language = "de"\n\n')
        options.language = "fr"
        _, language = _worker(options, None).resolve_profile()
        assert language == "fr"


# ─────────────────────────────────────────────────────────────────────────────
# 5. LOOT game folder
# ─────────────────────────────────────────────────────────────────────────────

class TestPrepareGameFolder:

    def test_creates_folder(self, loot_data, options):
        profile = GameProfile.from_catalog(GameId.FO4)
        target = _worker(options, None).prepare_game_folder(profile)
        assert target == loot_data / "games" / "Fallout4"
        assert target.is_dir()

    def test_moves_legacy_folder(self, loot_data, options):
        legacy = loot_data / "Oblivion"
        legacy.mkdir()
        (legacy / "userlist.yaml").write_text("x", encoding="utf-8")

        target = _worker(options, None).prepare_game_folder(GameProfile.from_catalog(GameId.TES4))
        assert (target / "userlist.yaml").read_text(encoding="utf-8") == "x"
        assert not legacy.exists()

    def test_moves_legacy_skyrimse_folder(self, loot_data, options):
        legacy = loot_data / "SkyrimSE"
        legacy.mkdir()
        (legacy / "masterlist.yaml").touch()

        target = _worker(options, None).prepare_game_folder(GameProfile.from_catalog(GameId.TES5SE))
        assert target == loot_data / "games" / "Skyrim Special Edition"
        assert (target / "masterlist.yaml").is_file()
        assert not legacy.exists()

    def test_existing_folder_untouched(self, loot_data, options):
        target = loot_data / "games" / "Skyrim"
        target.mkdir(parents=True)
        legacy = loot_data / "Skyrim"
        legacy.mkdir()

        _worker(options, None).prepare_game_folder(GameProfile.from_catalog(GameId.TES5))
        assert legacy.is_dir()

    def test_path_is_a_file(self, loot_data, options, fake_sorter_cls):
        games = loot_data / "games"
        games.mkdir()
        (games / "Skyrim").write_text("not a folder", encoding="utf-8")

        with pytest.raises(FileAccessError):
            _worker(options, None).prepare_game_folder(GameProfile.from_catalog(GameId.TES5))
        assert _worker(options, _sorter(fake_sorter_cls)).run() == 1
