"""Models package - DDL and entities for all domains."""

from app.models.common import BaseEntity, Entry
from app.models.leaderboards import (
    DEFINITIONS,
    LEADERBOARDS,
    PLACEMENT_DDL,
    LeaderboardCategory,
    LeaderboardDefinition,
    LeaderboardEntry,
    LeaderboardPage,
    Placement,
    SortDirection,
)
from app.models.stats import PLAYER_DDL, PLAYER_STAT_DDL, PlayerStatRow

ALL_DDL = [
    # Stats
    PLAYER_DDL,
    PLAYER_STAT_DDL,
    # Leaderboards
    PLACEMENT_DDL,
]

__all__ = [
    # Common
    "BaseEntity",
    "Entry",
    # Stats
    "PLAYER_DDL",
    "PLAYER_STAT_DDL",
    "PlayerStatRow",
    # Leaderboards
    "DEFINITIONS",
    "LEADERBOARDS",
    "PLACEMENT_DDL",
    "LeaderboardCategory",
    "LeaderboardDefinition",
    "LeaderboardEntry",
    "LeaderboardPage",
    "Placement",
    "SortDirection",
    # All DDL
    "ALL_DDL",
]
