"""Repositories package - data access layer for our database."""

from app.repositories.base import BaseRepository
from app.repositories.common import ExpiringCache, normalize_key
from app.repositories.db import Database, init_tables
from app.repositories.leaderboards import PlacementRepository
from app.repositories.stats import PlayerStatRepository

__all__ = [
    # DB
    "Database",
    "init_tables",
    # Base
    "BaseRepository",
    # Common
    "ExpiringCache",
    "normalize_key",
    # Stats
    "PlayerStatRepository",
    # Leaderboards
    "PlacementRepository",
]
