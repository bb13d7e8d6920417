"""
settings — read LOOT's settings.toml and resolve the profile for one game.

  load_settings()      settings.toml → LootSettings
  classify()           declared type + heuristics → GameId
  resolve_source()     legacy masterlist settings → current source
  SettingsResolver     LootSettings + requested game → GameProfile
"""

from .classifier import classify, is_enderal, is_enderal_se, is_nehrim
from .loader import load_settings
from .migration import resolve_source
from .models import LootSettings, RawGameEntry
from .resolver import Resolution, SettingsResolver, classify_entry

__all__ = [
    "classify",
    "classify_entry",
    "is_enderal",
    "is_enderal_se",
    "is_nehrim",
    "load_settings",
    "resolve_source",
    "LootSettings",
    "RawGameEntry",
    "Resolution",
    "SettingsResolver",
]
