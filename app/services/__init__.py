"""Services package - service class exports."""

from app.services.cards import CardService
from app.services.guilds import GuildService
from app.services.leaderboards import LeaderboardStore
from app.services.resources import GameResources
from app.services.scheduler import Scheduler
from app.services.skyblock import SkyBlockService
from app.services.stats import StatsService

__all__ = [
    "CardService",
    "GameResources",
    "GuildService",
    "LeaderboardStore",
    "Scheduler",
    "SkyBlockService",
    "StatsService",
]
