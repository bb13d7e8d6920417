from .builder import ReportBuilder
from .localize import select_message_content
from .models import (
    PluginReport,
    Report,
    ReportCleaning,
    ReportIncompatibility,
    ReportMessage,
    RunStats,
)

__all__ = [
    "ReportBuilder",
    "select_message_content",
    "PluginReport",
    "Report",
    "ReportCleaning",
    "ReportIncompatibility",
    "ReportMessage",
    "RunStats",
]
