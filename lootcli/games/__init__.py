from . import catalog
from .models import GameId, GameProfile, GameType

__all__ = ["catalog", "GameId", "GameProfile", "GameType"]
