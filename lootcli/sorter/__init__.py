"""
Plugin sorter boundary — the sorting algorithm itself lives in libloot.
"""

from .base import AbstractSorter, get_sorter
from .models import (
    DEFAULT_LANGUAGE,
    File,
    Message,
    MessageContent,
    MessageType,
    PluginCleaningData,
    PluginInfo,
    PluginMetadata,
)

__all__ = [
    "AbstractSorter",
    "get_sorter",
    "DEFAULT_LANGUAGE",
    "File",
    "Message",
    "MessageContent",
    "MessageType",
    "PluginCleaningData",
    "PluginInfo",
    "PluginMetadata",
]
