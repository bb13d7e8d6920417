"""
LootWorker — one complete lootcli run.

Pipeline: resolve settings → prepare LOOT game folder → update masterlist →
load lists → read load order → sort → write plugin list → write report.

Nothing is written to the report path unless every earlier step succeeded.
"""

import logging
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from lootcli import paths
from lootcli.exceptions import FileAccessError, LootCliError, ReportError
from lootcli.fetch import fetch_masterlist
from lootcli.games import GameId, GameProfile
from lootcli.log import Progress, report_progress
from lootcli.report import ReportBuilder
from lootcli.settings import SettingsResolver, load_settings
from lootcli.sorter import DEFAULT_LANGUAGE, AbstractSorter, get_sorter

__all__ = ["RunOptions", "LootWorker", "LOADORDER_HEADER"]

logger = logging.getLogger(__name__)

LOADORDER_HEADER = "# This file was automatically generated by Mod Organizer."

# LOOT v0.10 used "SkyrimSE" as the folder name for Skyrim SE
_LEGACY_SKYRIMSE_FOLDER = "SkyrimSE"

SorterFactory = Callable[[GameProfile, Optional[Path]], AbstractSorter]


@dataclass
class RunOptions:
    """Everything a run needs, as given on the command line."""
    game:               GameId
    game_path:          Path
    plugin_list_path:   Path
    output_path:        Path
    language:           str = ""          # empty = settings.toml, then "en"
    update_masterlist:  bool = True


class LootWorker:
    """
    Usage::

        status = LootWorker(options).run()

    `sorter_factory` defaults to get_sorter (libloot); tests pass a fake.
    """

    def __init__(
        self,
        options: RunOptions,
        sorter_factory: Optional[SorterFactory] = None,
        progress: Callable[[Progress], None] = report_progress,
    ) -> None:
        self._options = options
        self._sorter_factory = sorter_factory or get_sorter
        self._progress = progress

    def run(self) -> int:
        """Execute the run. Returns the process exit status."""
        started = time.monotonic()
        try:
            self._run(started)
        except (LootCliError, OSError) as exc:
            logger.error("%s", exc)
            logger.debug("run failed", exc_info=True)
            return 1
        except Exception as exc:  # noqa: BLE001
            logger.error("Unexpected error: %s", exc)
            logger.debug("run failed", exc_info=True)
            return 1

        self._progress(Progress.DONE)
        return 0

    # ── Steps ─────────────────────────────────────────────────────────────────

    def _run(self, started: float) -> None:
        opts = self._options
        profile, language = self.resolve_profile()
        profile.game_path = opts.game_path
        logger.debug("Resolved game settings: %s", profile)

        sorter = self._sorter_factory(profile, profile.game_local_path)
        self.prepare_game_folder(profile)

        if language != DEFAULT_LANGUAGE:
            logger.debug("selected language: %s", language)

        self._progress(Progress.CHECKING_MASTERLIST_EXISTENCE)
        masterlist = paths.masterlist_path(profile.folder_name)
        self._progress(Progress.UPDATING_MASTERLIST)
        if opts.update_masterlist or not masterlist.is_file():
            logger.info(
                "Downloading latest masterlist file from %s to %s",
                profile.masterlist_source, masterlist,
            )
            fetch_masterlist(profile.masterlist_source, masterlist)
        else:
            logger.info("Skipping masterlist update, using %s", masterlist)

        self._progress(Progress.LOADING_LISTS)
        userlist = paths.userlist_path(profile.folder_name)
        sorter.load_lists(masterlist, userlist if userlist.is_file() else None)

        self._progress(Progress.READING_PLUGINS)
        sorter.load_current_load_order_state()
        plugins = sorter.load_order()

        self._progress(Progress.SORTING_PLUGINS)
        sorted_plugins = sorter.sort_plugins(plugins)

        self._progress(Progress.WRITING_LOADORDER)
        self.write_load_order(sorted_plugins)

        self._progress(Progress.PARSING_LOOT_MESSAGES)
        report = ReportBuilder(sorter, language).build(sorted_plugins, started_at=started)
        self._write_text(opts.output_path, report.to_json())

    def resolve_profile(self) -> tuple[GameProfile, str]:
        """Catalog defaults, overridden by settings.toml when it exists."""
        opts = self._options
        profile = GameProfile.from_catalog(opts.game)
        language = opts.language

        settings_file = paths.settings_path()
        if settings_file.exists():
            settings = load_settings(settings_file)
            profile = SettingsResolver(opts.game).resolve(settings).profile
            if not language:
                language = settings.language or ""
        else:
            logger.debug("No LOOT settings at %s, using defaults", settings_file)

        return profile, language or DEFAULT_LANGUAGE

    def prepare_game_folder(self, profile: GameProfile) -> Path:
        """
        Make sure <LOOT>/games/<folder> exists, moving a legacy
        <LOOT>/<folder> (or <LOOT>/SkyrimSE) into place if there is one.

        Raises:
            FileAccessError: The path exists but is not a directory.
        """
        target = paths.game_folder(profile.folder_name)
        if target.is_dir():
            return target
        if target.exists():
            raise FileAccessError(
                "Could not create LOOT folder for game, the path exists but is not a directory"
            )

        legacy = [paths.loot_app_data() / profile.folder_name]
        if profile.id == GameId.TES5SE:
            legacy.insert(0, paths.loot_app_data() / _LEGACY_SKYRIMSE_FOLDER)

        for folder in legacy:
            if folder.is_dir():
                logger.info(
                    "Found a folder for this game in the LOOT data folder, assuming "
                    "that it's a legacy game folder and moving into the correct "
                    "subdirectory..."
                )
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.move(str(folder), str(target))
                break

        target.mkdir(parents=True, exist_ok=True)
        return target

    def write_load_order(self, plugins: list[str]) -> None:
        lines = [LOADORDER_HEADER, *plugins]
        self._write_text(self._options.plugin_list_path, "\n".join(lines) + "\n")

    @staticmethod
    def _write_text(path: Path, text: str) -> None:
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise ReportError(f"failed to open {path} to rewrite it: {exc}") from exc
