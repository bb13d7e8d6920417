"""
Logging and progress output.

Every line lootcli prints on stdout is machine-read by the calling mod
manager, one record per line:

  [info] Downloading latest masterlist file from ...
  [progress] 3

Log messages therefore have CR/LF escaped, and levels use LOOT's names
(trace, debug, info, warning, error).
"""

import logging
import sys
from enum import Enum, IntEnum

__all__ = [
    "TRACE",
    "LogLevel",
    "Progress",
    "EscapingFormatter",
    "escape_newlines",
    "log_level_from_string",
    "configure_logging",
    "report_progress",
]

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_ROOT_LOGGER = "lootcli"


class LogLevel(str, Enum):
    TRACE   = "trace"
    DEBUG   = "debug"
    INFO    = "info"
    WARNING = "warning"
    ERROR   = "error"
    FATAL   = "fatal"

    @property
    def level(self) -> int:
        """The stdlib logging level for this severity."""
        return _LEVELS[self]


_LEVELS = {
    LogLevel.TRACE:   TRACE,
    LogLevel.DEBUG:   logging.DEBUG,
    LogLevel.INFO:    logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR:   logging.ERROR,
    LogLevel.FATAL:   logging.CRITICAL,
}

# stdlib level → printed name; fatal is reported as error
_NAMES = {
    TRACE:            "trace",
    logging.DEBUG:    "debug",
    logging.INFO:     "info",
    logging.WARNING:  "warning",
    logging.ERROR:    "error",
    logging.CRITICAL: "error",
}


class Progress(IntEnum):
    CHECKING_MASTERLIST_EXISTENCE = 0
    UPDATING_MASTERLIST           = 1
    LOADING_LISTS                 = 2
    READING_PLUGINS               = 3
    SORTING_PLUGINS               = 4
    WRITING_LOADORDER             = 5
    PARSING_LOOT_MESSAGES         = 6
    DONE                          = 7


def log_level_from_string(value: str) -> LogLevel:
    """Case-insensitive; empty or unknown strings mean info."""
    try:
        return LogLevel(value.strip().lower())
    except ValueError:
        return LogLevel.INFO


def escape_newlines(text: str) -> str:
    return text.replace("\n", "\\n").replace("\r", "\\r")


class EscapingFormatter(logging.Formatter):
    """Formats records as `[level] message` on a single line."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        name = _NAMES.get(record.levelno, record.levelname.lower())
        return f"[{name}] {escape_newlines(message)}"


def configure_logging(level: LogLevel = LogLevel.INFO, stream=None) -> logging.Logger:
    """
    Send lootcli's log records at or above *level* to *stream* (stdout).

    Replaces handlers from an earlier call so repeated runs in one process
    don't duplicate output.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(EscapingFormatter())
    logger.addHandler(handler)
    logger.setLevel(level.level)
    logger.propagate = False
    return logger


def report_progress(step: Progress, stream=None) -> None:
    out = stream if stream is not None else sys.stdout
    out.write(f"[progress] {int(step)}\n")
    out.flush()
