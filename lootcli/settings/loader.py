"""Read LOOT's settings.toml into a LootSettings value."""

import logging
import threading
import tomllib
from pathlib import Path

from lootcli.exceptions import SettingsFileError
from .models import LootSettings

__all__ = ["load_settings"]

logger = logging.getLogger(__name__)

# Held while the settings file is read, for hosts that embed lootcli in a
# multi-threaded process.
_SETTINGS_LOCK = threading.RLock()


def load_settings(path: Path) -> LootSettings:
    """
    Parse *path* as TOML.

    Raises:
        SettingsFileError: The file cannot be opened or is not valid TOML.
    """
    with _SETTINGS_LOCK:
        logger.debug("Reading LOOT settings from %s", path)
        try:
            with open(path, "rb") as f:
                document = tomllib.load(f)
        except OSError as exc:
            raise SettingsFileError(f"{path} could not be opened for parsing: {exc}") from exc
        except tomllib.TOMLDecodeError as exc:
            raise SettingsFileError(f"{path} is not valid TOML: {exc}") from exc

    settings = LootSettings.from_document(document)
    logger.debug("Found %d game settings table(s)", len(settings.games))
    return settings
