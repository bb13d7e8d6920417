"""
Data models for the JSON report handed back to the mod manager.

Serialised shape (empty strings, arrays and objects are omitted)::

    {
      "messages": [{"type": "warn", "text": "..."}],
      "plugins": [
        {"name": "A.esp",
         "incompatibilities": [{"name": "B.esp", "displayName": "B"}],
         "messages": [...],
         "dirty": [{"crc": 1, "itm": 2, "deletedReferences": 0,
                    "deletedNavmesh": 0, "cleaningUtility": "SSEEdit",
                    "info": "..."}],
         "clean": [{"crc": 3, "cleaningUtility": "SSEEdit"}],
         "missingMasters": ["C.esm"],
         "loadsArchive": true, "isMaster": true, "isLightMaster": true}
      ],
      "stats": {"time": 12, "toolVersion": "1.6.0", "engineVersion": "0.23.0"}
    }
"""

import json
from dataclasses import dataclass, field
from typing import Any, Optional

__all__ = [
    "ReportMessage",
    "ReportIncompatibility",
    "ReportCleaning",
    "PluginReport",
    "RunStats",
    "Report",
]


def _set(obj: dict, key: str, value: Any) -> None:
    """Store *value* under *key* unless it is an empty string, list or dict."""
    if isinstance(value, (str, list, dict)) and not value:
        return
    obj[key] = value


@dataclass
class ReportMessage:
    type: str     # "info" | "warn" | "error"
    text: str

    def to_dict(self) -> dict:
        return {"type": self.type, "text": self.text}


@dataclass
class ReportIncompatibility:
    name:         str
    display_name: str = ""    # empty when identical to name

    def to_dict(self) -> dict:
        d = {"name": self.name}
        _set(d, "displayName", self.display_name)
        return d


@dataclass
class ReportCleaning:
    """
    One dirty or clean record. Counts are None for clean records and are
    then left out of the serialised form.
    """
    crc:                int
    itm:                Optional[int] = None
    deleted_references: Optional[int] = None
    deleted_navmesh:    Optional[int] = None
    cleaning_utility:   str = ""
    info:               str = ""

    def to_dict(self) -> dict:
        d: dict = {"crc": self.crc}
        if self.itm is not None:
            d["itm"] = self.itm
            d["deletedReferences"] = self.deleted_references or 0
            d["deletedNavmesh"] = self.deleted_navmesh or 0
        _set(d, "cleaningUtility", self.cleaning_utility)
        _set(d, "info", self.info)
        return d


@dataclass
class PluginReport:
    name:              str
    incompatibilities: list[ReportIncompatibility] = field(default_factory=list)
    messages:          list[ReportMessage]         = field(default_factory=list)
    dirty:             list[ReportCleaning]        = field(default_factory=list)
    clean:             list[ReportCleaning]        = field(default_factory=list)
    missing_masters:   list[str]                   = field(default_factory=list)
    loads_archive:     bool = False
    is_master:         bool = False
    is_light_master:   bool = False

    def to_dict(self) -> dict:
        d: dict = {"name": self.name}
        _set(d, "incompatibilities", [i.to_dict() for i in self.incompatibilities])
        _set(d, "messages", [m.to_dict() for m in self.messages])
        _set(d, "dirty", [c.to_dict() for c in self.dirty])
        _set(d, "clean", [c.to_dict() for c in self.clean])
        _set(d, "missingMasters", list(self.missing_masters))
        if self.loads_archive:
            d["loadsArchive"] = True
        if self.is_master:
            d["isMaster"] = True
        if self.is_light_master:
            d["isLightMaster"] = True
        return d

    def is_bare(self) -> bool:
        """True if the plugin carries nothing beyond its name."""
        return len(self.to_dict()) == 1


@dataclass
class RunStats:
    time:           int     # elapsed milliseconds
    tool_version:   str
    engine_version: str

    def to_dict(self) -> dict:
        return {
            "time": self.time,
            "toolVersion": self.tool_version,
            "engineVersion": self.engine_version,
        }


@dataclass
class Report:
    stats:    RunStats
    messages: list[ReportMessage] = field(default_factory=list)
    plugins:  list[PluginReport]  = field(default_factory=list)

    def to_dict(self) -> dict:
        d: dict = {}
        _set(d, "messages", [m.to_dict() for m in self.messages])
        _set(d, "plugins", [p.to_dict() for p in self.plugins])
        d["stats"] = self.stats.to_dict()
        return d

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=4, ensure_ascii=False)
