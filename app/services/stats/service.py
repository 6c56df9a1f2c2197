"""Player stats service - canonical identities, the stats cache and leaderboard feeding."""

import asyncio

from loguru import logger

from app.repositories.common import ExpiringCache
from app.services.leaderboards import LeaderboardStore
from app.services.stats.builder import PlayerBuilder
from helpers.identity import is_player_name, normalize_uuid
from stats_client import PlayerDbClient
from stats_client.errors import NotFoundError, ValidationError


class StatsService:
    """Player records keyed by undashed UUID.

    Names are resolved through an alias cache first, so "Alice", "alice" and
    Alice's UUID all land on one stats entry.
    """

    def __init__(
        self,
        builder: PlayerBuilder,
        playerdb: PlayerDbClient,
        store: LeaderboardStore,
        aliases: ExpiringCache[str],
        records: ExpiringCache[dict],
    ):
        self._builder = builder
        self._playerdb = playerdb
        self._store = store
        self._aliases = aliases
        self._records = records

    async def uuid_for(self, identity: str) -> str:
        """Canonical UUID for a player name or UUID."""
        identity = (identity or "").strip()
        if not identity:
            raise ValidationError("Missing name parameter")

        uuid = normalize_uuid(identity)
        if uuid:
            return uuid
        if not is_player_name(identity):
            raise NotFoundError(f'No player by the name "{identity}" could be found.')

        async def resolve() -> str:
            account = await self._playerdb.profile(identity)
            return account.uuid

        return await self._aliases.get(identity, resolve)

    async def get(self, identity: str) -> dict:
        """Player record, from cache or built fresh. Callers must not mutate it."""
        uuid = await self.uuid_for(identity)
        return await self._records.get(uuid, lambda: self._populate(uuid))

    async def _populate(self, uuid: str) -> dict:
        record = await self._builder.build(uuid)
        row = await asyncio.to_thread(self._store.insert_record, record)
        logger.debug("Stored {} leaderboard stats for {}", len(row.stat_fields), record["name"])
        # Later lookups by name skip PlayerDB
        self._aliases.put(record["name"], uuid)
        return record

    def invalidate(self, identity: str) -> None:
        uuid = normalize_uuid(identity) or self._aliases.peek(identity)
        if uuid:
            self._records.invalidate(uuid)
