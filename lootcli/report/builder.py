"""
ReportBuilder — turn the sorter's view of a sorted load order into a Report.

Per plugin, in sorted order:
  • incompatibilities  — only those naming a plugin that is loaded
  • messages           — localised; messages with no usable text are dropped
  • dirty / clean      — cleaning records with localised detail
  • missingMasters     — masters that are not loaded
  • flags              — loadsArchive / isMaster / isLightMaster when true
A plugin that ends up with nothing but its name is left out.
"""

import logging
import time
from typing import Optional

from lootcli import __version__
from lootcli.sorter.base import AbstractSorter
from lootcli.sorter.models import DEFAULT_LANGUAGE, File, Message, PluginCleaningData
from .localize import select_message_content
from .models import (
    PluginReport,
    Report,
    ReportCleaning,
    ReportIncompatibility,
    ReportMessage,
    RunStats,
)

__all__ = ["ReportBuilder"]

logger = logging.getLogger(__name__)


class ReportBuilder:
    """
    Usage::

        builder = ReportBuilder(sorter, language="de")
        report = builder.build(sorted_plugins, started_at=start)
        out_path.write_text(report.to_json(), encoding="utf-8")
    """

    def __init__(self, sorter: AbstractSorter, language: str = DEFAULT_LANGUAGE) -> None:
        self._sorter = sorter
        self._language = language

    def build(self, sorted_plugins: list[str], started_at: Optional[float] = None) -> Report:
        """
        Parameters
        ----------
        sorted_plugins : the sorter's output order
        started_at     : time.monotonic() at run start; None reports 0 ms
        """
        messages = self.messages(self._sorter.general_messages())
        plugins = self.plugins(sorted_plugins)

        elapsed = 0
        if started_at is not None:
            elapsed = int((time.monotonic() - started_at) * 1000)

        stats = RunStats(
            time=elapsed,
            tool_version=__version__,
            engine_version=self._sorter.engine_version,
        )
        logger.debug(
            "Report: %d general message(s), %d of %d plugin(s) with details",
            len(messages), len(plugins), len(sorted_plugins),
        )
        return Report(stats=stats, messages=messages, plugins=plugins)

    # ── Sections ──────────────────────────────────────────────────────────────

    def plugins(self, sorted_plugins: list[str]) -> list[PluginReport]:
        result: list[PluginReport] = []
        for name in sorted_plugins:
            entry = self.plugin(name)
            if not entry.is_bare():
                result.append(entry)
        return result

    def plugin(self, name: str) -> PluginReport:
        entry = PluginReport(name=name)

        metadata = self._sorter.plugin_metadata(name)
        if metadata is not None:
            entry.incompatibilities = self.incompatibilities(metadata.incompatibilities)
            entry.messages = self.messages(metadata.messages)
            entry.dirty = [self._cleaning(d, dirty=True) for d in metadata.dirty_info]
            entry.clean = [self._cleaning(d, dirty=False) for d in metadata.clean_info]

        info = self._sorter.plugin(name)
        if info is not None:
            entry.missing_masters = [
                m for m in info.masters if self._sorter.plugin(m) is None
            ]
            entry.loads_archive = info.loads_archive
            entry.is_master = info.is_master
            entry.is_light_master = info.is_light_plugin
        else:
            logger.debug("No plugin header loaded for %s", name)

        return entry

    def messages(self, messages: list[Message]) -> list[ReportMessage]:
        result: list[ReportMessage] = []
        for m in messages:
            content = select_message_content(m.content, self._language)
            if content is None:
                continue
            result.append(ReportMessage(type=m.type.report_name, text=content.text))
        return result

    def incompatibilities(self, files: list[File]) -> list[ReportIncompatibility]:
        result: list[ReportIncompatibility] = []
        for f in files:
            if self._sorter.plugin(f.name) is None:
                continue
            display = f.display_name if f.display_name != f.name else ""
            result.append(ReportIncompatibility(name=f.name, display_name=display))
        return result

    # ── Private helpers ───────────────────────────────────────────────────────

    def _cleaning(self, data: PluginCleaningData, dirty: bool) -> ReportCleaning:
        content = select_message_content(data.detail, self._language)
        record = ReportCleaning(
            crc=data.crc,
            cleaning_utility=data.cleaning_utility,
            info=content.text if content is not None else "",
        )
        if dirty:
            record.itm = data.itm_count
            record.deleted_references = data.deleted_reference_count
            record.deleted_navmesh = data.deleted_navmesh_count
        return record
