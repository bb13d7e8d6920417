"""
Unit tests for lootcli/settings/classifier.py

Entries with an install path that exists on disk are decided by the
launcher marker file; everything else goes through the name/folder/master
heuristics.
"""

from pathlib import Path

import pytest

from lootcli.games import GameId
from lootcli.settings import RawGameEntry, classify, is_enderal, is_enderal_se, is_nehrim
from lootcli.settings.classifier import ENDERAL_MARKER, NEHRIM_MARKER


# ─────────────────────────────────────────────────────────────────────────────
# 1. Nehrim
# ─────────────────────────────────────────────────────────────────────────────

class TestIsNehrim:

    def test_nehrim_master(self):
        assert is_nehrim(RawGameEntry(type="Oblivion", folder="Oblivion", master="Nehrim.esm"))

    def test_oblivion_master(self):
        assert not is_nehrim(RawGameEntry(type="Oblivion", folder="Oblivion", master="Oblivion.esm"))

    @pytest.mark.parametrize("field", ["name", "folder"])
    def test_name_or_folder_contains_nehrim(self, field):
        assert is_nehrim(RawGameEntry(type="Oblivion", **{field: "My NEHRIM Install"}))

    def test_legacy_non_base_instance(self):
        assert is_nehrim(RawGameEntry(type="Oblivion", is_base_game_instance=False))
        assert not is_nehrim(RawGameEntry(type="Oblivion", is_base_game_instance=True))

    def test_marker_found_on_disk(self, tmp_path):
        (tmp_path / NEHRIM_MARKER).touch()
        assert is_nehrim(RawGameEntry(type="Oblivion", folder="Oblivion", path=str(tmp_path)))

    def test_marker_missing_overrides_heuristics(self, tmp_path):
        e = RawGameEntry(type="Oblivion", folder="Nehrim", master="Nehrim.esm", path=str(tmp_path))
        assert not is_nehrim(e)

    def test_nonexistent_path_falls_back_to_heuristics(self, tmp_path):
        e = RawGameEntry(type="Oblivion", master="Nehrim.esm", path=str(tmp_path / "missing"))
        assert is_nehrim(e)

    def test_empty_path_falls_back_to_heuristics(self):
        assert is_nehrim(RawGameEntry(type="Oblivion", master="Nehrim.esm", path=""))

    def test_unreadable_path_falls_back_to_heuristics(self, tmp_path, monkeypatch):
        install = tmp_path / "locked"
        real_exists = Path.exists

        def exists(self, *args, **kwargs):
            if self == install or self.parent == install:
                raise PermissionError(13, "Permission denied", str(self))
            return real_exists(self, *args, **kwargs)

        monkeypatch.setattr(Path, "exists", exists)
        e = RawGameEntry(type="Oblivion", master="Nehrim.esm", path=str(install))
        assert is_nehrim(e)
        assert classify("Oblivion", e) == GameId.NEHRIM


# ─────────────────────────────────────────────────────────────────────────────
# 2. Enderal / Enderal SE
# ─────────────────────────────────────────────────────────────────────────────

class TestIsEnderal:

    def test_local_folder(self):
        assert is_enderal(RawGameEntry(type="Skyrim", folder="Skyrim", local_folder="enderal"))

    def test_local_path_last_component(self):
        e = RawGameEntry(type="Skyrim", folder="Skyrim", local_path="C:\\Users\\me\\AppData\\Local\\enderal")
        assert is_enderal(e)

    def test_se_local_folder_does_not_mean_enderal(self):
        e = RawGameEntry(type="Skyrim", folder="Skyrim", local_folder="Enderal Special Edition")
        assert not is_enderal(e)
        assert is_enderal_se(e)

    def test_name_contains_enderal(self):
        assert is_enderal_se(RawGameEntry(type="SkyrimSE", name="Enderal SE", folder="x"))

    def test_plain_skyrim(self):
        assert not is_enderal(RawGameEntry(type="Skyrim", name="TES V: Skyrim", folder="Skyrim"))

    def test_marker_file(self, tmp_path):
        (tmp_path / ENDERAL_MARKER).touch()
        e = RawGameEntry(type="Skyrim", folder="Skyrim", path=str(tmp_path))
        assert is_enderal(e)
        assert is_enderal_se(e)


# ─────────────────────────────────────────────────────────────────────────────
# 3. classify()
# ─────────────────────────────────────────────────────────────────────────────

class TestClassify:

    @pytest.mark.parametrize("declared, expected", [
        ("Morrowind", GameId.TES3),
        ("Oblivion", GameId.TES4),
        ("Skyrim", GameId.TES5),
        ("SkyrimSE", GameId.TES5SE),
        ("Skyrim Special Edition", GameId.TES5SE),
        ("Skyrim VR", GameId.TES5VR),
        ("Fallout3", GameId.FO3),
        ("FalloutNV", GameId.FONV),
        ("Fallout4", GameId.FO4),
        ("Fallout4VR", GameId.FO4VR),
        ("Starfield", GameId.STARFIELD),
    ])
    def test_plain_types(self, declared, expected):
        assert classify(declared, RawGameEntry(folder="x")) == expected

    def test_total_conversions(self):
        assert classify("Oblivion", RawGameEntry(master="Nehrim.esm")) == GameId.NEHRIM
        assert classify("Skyrim", RawGameEntry(local_folder="enderal")) == GameId.ENDERAL
        assert classify("SkyrimSE", RawGameEntry(name="Enderal SE")) == GameId.ENDERALSE

    def test_unknown_type(self):
        assert classify("Daggerfall", RawGameEntry()) is None
