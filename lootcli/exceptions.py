"""
Project-wide custom exception hierarchy.
All modules raise subclasses of LootCliError — never bare Exception.
"""

__all__ = [
    "LootCliError",
    "GameCatalogError",
    "UnknownGameError",
    "SettingsError",
    "SettingsFileError",
    "InvalidEntryError",
    "ConflictingConfigurationError",
    "MigrationError",
    "MigrationAmbiguousError",
    "FetchFailureError",
    "FileAccessError",
    "SorterError",
    "SorterNotAvailableError",
    "ReportError",
]


class LootCliError(Exception):
    """Root exception for all lootcli errors."""


# ── Game catalog ──────────────────────────────────────────────────────────────

class GameCatalogError(LootCliError):
    """Raised when a game lookup fails."""


class UnknownGameError(GameCatalogError):
    """Raised when a requested game name is not one of the supported games."""


# ── Settings ──────────────────────────────────────────────────────────────────

class SettingsError(LootCliError):
    """Base class for LOOT settings errors."""


class SettingsFileError(SettingsError):
    """Raised when settings.toml cannot be read or is not valid TOML."""


class InvalidEntryError(SettingsError):
    """Raised when one [[games]] table cannot be interpreted; the entry is skipped."""


class ConflictingConfigurationError(InvalidEntryError):
    """Raised when mutually exclusive game settings (local_path / local_folder) are both set."""


# ── Masterlist source migration ───────────────────────────────────────────────

class MigrationError(LootCliError):
    """Base class for masterlist source migration errors."""


class MigrationAmbiguousError(MigrationError):
    """Raised when a repository URL is neither a GitHub repository nor a local Git repository."""


# ── Fetch ─────────────────────────────────────────────────────────────────────

class FetchFailureError(LootCliError):
    """Raised when the masterlist cannot be downloaded or copied."""


# ── Filesystem ────────────────────────────────────────────────────────────────

class FileAccessError(LootCliError):
    """Raised when an expected directory path exists but is not a directory."""


# ── Sorter ────────────────────────────────────────────────────────────────────

class SorterError(LootCliError):
    """Raised when the plugin sorter fails."""


class SorterNotAvailableError(SorterError):
    """Raised when the libloot Python bindings are not installed."""


# ── Report ────────────────────────────────────────────────────────────────────

class ReportError(LootCliError):
    """Raised when the load order or the JSON report cannot be written."""
