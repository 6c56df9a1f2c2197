"""Guild service - guild records cached by guild name or member uuid."""

from app.repositories.common import ExpiringCache
from app.services.guilds.builder import GuildBuilder
from app.services.stats import StatsService
from stats_client.errors import ValidationError


class GuildService:
    def __init__(self, builder: GuildBuilder, stats: StatsService, cache: ExpiringCache[dict]):
        self._builder = builder
        self._stats = stats
        self._cache = cache

    async def by_name(self, name: str) -> dict:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Missing name or player parameter")
        return await self._cache.get(f"name:{name}", lambda: self._builder.build_from_name(name))

    async def by_player(self, identity: str) -> dict:
        uuid = await self._stats.uuid_for(identity)
        return await self._cache.get(f"player:{uuid}", lambda: self._builder.build_from_player(uuid))
