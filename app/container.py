"""Dependency Injection container - initialized at app startup."""

import time

import httpx
from loguru import logger

from app.repositories.common import ExpiringCache
from app.repositories.db import Database
from app.repositories.leaderboards import PlacementRepository
from app.repositories.stats import PlayerStatRepository
from app.services.cards import CardService
from app.services.guilds import GuildBuilder, GuildService
from app.services.leaderboards import LeaderboardStore
from app.services.monitoring import DiscordMonitor, StatisticsAggregator
from app.services.resources import GameResources
from app.services.scheduler import Scheduler
from app.services.skyblock import SkyBlockBuilder, SkyBlockService
from app.services.stats import BadgeBook, PlayerBuilder, StatsService
from settings import (
    CARD_TTL,
    DB_PATH,
    DISCORD_ALERT_URL,
    DISCORD_LOG_URL,
    DISCORD_STATS_URL,
    GUILD_TTL,
    HYPIXEL_API_KEY,
    SKYBLOCK_TTL,
    STATS_TTL,
)
from stats_client import HypixelClient, MojangClient, PlayerDbClient


class Container:
    """Application DI container - holds all singleton instances."""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def init(
        self,
        db_path: str = DB_PATH,
        hypixel_key: str = HYPIXEL_API_KEY,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize all dependencies. Call once at app startup.

        ``transport`` is shared by every upstream client (a mock transport in tests).
        """
        if self._initialized:
            return
        self.started_at = time.monotonic()

        # Database and repositories
        self.db = Database(db_path)
        self._stats_repo = PlayerStatRepository(self.db)
        self._placement_repo = PlacementRepository(self.db)

        # Upstream clients
        self.hypixel = HypixelClient(hypixel_key, transport=transport)
        self.playerdb = PlayerDbClient(transport=transport)
        self.mojang = MojangClient(transport=transport)

        # Monitoring
        self.monitor = DiscordMonitor(DISCORD_LOG_URL, DISCORD_ALERT_URL, DISCORD_STATS_URL, transport=transport)
        self.statistics = StatisticsAggregator()

        # Caches, one per data kind
        self.alias_cache = ExpiringCache[str]("aliases", STATS_TTL)
        self.stats_cache = ExpiringCache[dict]("stats", STATS_TTL)
        self.guild_cache = ExpiringCache[dict]("guilds", GUILD_TTL)
        self.skyblock_cache = ExpiringCache[dict]("skyblock", SKYBLOCK_TTL)
        self.card_cache = ExpiringCache[bytes]("cards", CARD_TTL)

        # Services (with injected repos, clients and caches)
        self.leaderboards = LeaderboardStore(self._stats_repo, self._placement_repo)
        self.resources = GameResources(self.hypixel)

        self.stats = StatsService(
            builder=PlayerBuilder(self.playerdb, self.mojang, self.hypixel, BadgeBook()),
            playerdb=self.playerdb,
            store=self.leaderboards,
            aliases=self.alias_cache,
            records=self.stats_cache,
        )

        self.guilds = GuildService(
            builder=GuildBuilder(self.hypixel, self.stats.get),
            stats=self.stats,
            cache=self.guild_cache,
        )

        self.skyblock = SkyBlockService(
            builder=SkyBlockBuilder(self.hypixel, self.resources),
            stats=self.stats,
            resources=self.resources,
            cache=self.skyblock_cache,
        )

        self.cards = CardService(stats=self.stats, skyblock=self.skyblock, cache=self.card_cache)

        self.scheduler = Scheduler(self.statistics, self.leaderboards, self.monitor)

        self._initialized = True
        logger.info("Container initialized")

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def uptime(self) -> float:
        return time.monotonic() - self.started_at

    async def close(self) -> None:
        """Close clients and the database; the container can be initialized again afterwards."""
        if not self._initialized:
            return
        for client in (self.hypixel, self.playerdb, self.mojang):
            await client.close()
        await self.monitor.close()
        self.db.close()
        self._initialized = False
        logger.info("Container closed")


# Global container instance
container = Container()
