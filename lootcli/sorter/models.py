"""
Data models exchanged with the plugin sorter.

These mirror the parts of libloot's metadata that the report needs; the
sorter adapter converts its native objects into them so that ReportBuilder
never touches libloot directly.
"""

from dataclasses import dataclass, field
from enum import Enum

__all__ = [
    "DEFAULT_LANGUAGE",
    "MessageType",
    "MessageContent",
    "Message",
    "File",
    "PluginCleaningData",
    "PluginMetadata",
    "PluginInfo",
]

DEFAULT_LANGUAGE = "en"


class MessageType(str, Enum):
    SAY   = "say"
    WARN  = "warn"
    ERROR = "error"

    @property
    def report_name(self) -> str:
        """Name used in the JSON report ("say" is reported as "info")."""
        return "info" if self is MessageType.SAY else self.value


@dataclass
class MessageContent:
    text:     str
    language: str = DEFAULT_LANGUAGE


@dataclass
class Message:
    type:    MessageType
    content: list[MessageContent] = field(default_factory=list)


@dataclass
class File:
    """A file reference in plugin metadata (e.g. an incompatibility)."""
    name:         str
    display_name: str = ""

    def __post_init__(self) -> None:
        if not self.display_name:
            self.display_name = self.name


@dataclass
class PluginCleaningData:
    """
    Dirty / clean record for one plugin CRC.

    ITM and deleted record counts are only meaningful for dirty records.
    """
    crc:                     int
    itm_count:               int = 0
    deleted_reference_count: int = 0
    deleted_navmesh_count:   int = 0
    cleaning_utility:        str = ""
    detail:                  list[MessageContent] = field(default_factory=list)


@dataclass
class PluginMetadata:
    name:              str
    incompatibilities: list[File]               = field(default_factory=list)
    messages:          list[Message]            = field(default_factory=list)
    dirty_info:        list[PluginCleaningData] = field(default_factory=list)
    clean_info:        list[PluginCleaningData] = field(default_factory=list)


@dataclass
class PluginInfo:
    """Header facts about an installed plugin."""
    name:            str
    masters:         list[str] = field(default_factory=list)
    is_master:       bool = False
    is_light_plugin: bool = False
    loads_archive:   bool = False
