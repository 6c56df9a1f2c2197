from app.services.stats.badges import NO_BADGE, BadgeBook
from app.services.stats.builder import PlayerBuilder, build_guild_summary, build_profile, build_status
from app.services.stats.service import StatsService

__all__ = [
    "NO_BADGE",
    "BadgeBook",
    "PlayerBuilder",
    "StatsService",
    "build_guild_summary",
    "build_profile",
    "build_status",
]
