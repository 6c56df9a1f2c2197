"""Guild builder - raw guild plus members enriched in bounded parallel."""

import asyncio
from collections.abc import Awaitable, Callable

from loguru import logger

from app.services.stats.badges import NO_BADGE
from helpers import formulas, ranks
from settings import GUILD_MEMBER_CONCURRENCY
from stats_client import HypixelClient
from stats_client.errors import FetchError, NotFoundError

PlayerLookup = Callable[[str], Awaitable[dict]]


class GuildBuilder:
    """Builds guild records. Members are looked up through ``player_lookup`` (the stats cache)."""

    def __init__(
        self,
        hypixel: HypixelClient,
        player_lookup: PlayerLookup,
        member_concurrency: int = GUILD_MEMBER_CONCURRENCY,
    ):
        self._hypixel = hypixel
        self._lookup = player_lookup
        self._concurrency = member_concurrency

    async def build_from_name(self, name: str) -> dict:
        return await self.build(await self._hypixel.guild_by_name(name))

    async def build_from_player(self, uuid: str) -> dict:
        guild = await self._hypixel.guild_by_player(uuid)
        if not guild:
            raise NotFoundError("This player is not in a guild!")
        return await self.build(guild)

    async def build(self, guild: dict) -> dict:
        members = await self._enrich_members(guild.get("members") or [])
        return {
            "success": True,
            "name": guild.get("name", ""),
            "description": guild.get("description") or "",
            "tag": ranks.guild_tag(guild),
            "level": formulas.guild_level(guild.get("exp", 0)),
            "created": guild.get("created", 0),
            "preferred_games": guild.get("preferredGames") or [],
            "achievements": guild.get("achievements") or {},
            "ranks": guild.get("ranks") or [],
            "members": members,
        }

    async def _enrich_members(self, members: list[dict]) -> list[dict]:
        """Badge and profile for every member; results come back in member order."""
        sem = asyncio.Semaphore(self._concurrency)

        async def enrich(member: dict) -> dict:
            async with sem:
                try:
                    record = await self._lookup(member["uuid"])
                except (FetchError, KeyError) as e:
                    logger.warning("Couldn't look up guild member {}: {}", member.get("uuid"), e)
                    return {**member, "badge": NO_BADGE}
            return {**member, "badge": record.get("badge", NO_BADGE), "profile": record.get("profile")}

        return list(await asyncio.gather(*(enrich(m) for m in members)))
