"""Leaderboard models - definitions, categories and derived views."""

from app.models.leaderboards.definitions import (
    DEFINITIONS,
    LEADERBOARDS,
    LeaderboardCategory,
    LeaderboardDefinition,
    SortDirection,
    leaderboard_index,
)
from app.models.leaderboards.entities import (
    PLACEMENT_DDL,
    LeaderboardEntry,
    LeaderboardPage,
    Placement,
    percentile,
)

__all__ = [
    "DEFINITIONS",
    "LEADERBOARDS",
    "LeaderboardCategory",
    "LeaderboardDefinition",
    "SortDirection",
    "leaderboard_index",
    "PLACEMENT_DDL",
    "LeaderboardEntry",
    "LeaderboardPage",
    "Placement",
    "percentile",
]
