"""
lootcli — command-line adapter around the LOOT plugin sorter.

Resolves the game settings LOOT has persisted for a game, migrates legacy
masterlist sources, updates the masterlist, sorts the load order and writes
a JSON report for the calling mod manager.
"""

__version__ = "1.6.0"
