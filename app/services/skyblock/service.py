"""SkyBlock service - SkyBlock records cached per player and profile."""

from app.repositories.common import ExpiringCache
from app.services.resources import GameResources
from app.services.skyblock.builder import SkyBlockBuilder
from app.services.stats import StatsService


class SkyBlockService:
    def __init__(
        self,
        builder: SkyBlockBuilder,
        stats: StatsService,
        resources: GameResources,
        cache: ExpiringCache[dict],
    ):
        self._builder = builder
        self._stats = stats
        self._resources = resources
        self._cache = cache

    async def get(self, identity: str, profile: str | None = None) -> dict:
        # Fail fast before any lookup while collections are loading
        self._resources.require_collections()
        uuid = await self._stats.uuid_for(identity)

        async def build() -> dict:
            player = await self._stats.get(uuid)
            return await self._builder.build(player, profile)

        return await self._cache.get(f"{uuid}/{(profile or '').strip()}", build)
