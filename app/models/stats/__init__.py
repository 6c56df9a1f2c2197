"""Player stat models - the authoritative rows leaderboards are derived from."""

from app.models.stats.player import PLAYER_DDL, PLAYER_STAT_DDL, PlayerStatRow

__all__ = [
    "PLAYER_DDL",
    "PLAYER_STAT_DDL",
    "PlayerStatRow",
]
