"""Hypixel API client - players, status, guilds, SkyBlock and resources."""

from loguru import logger

from settings import HYPIXEL_API_KEY, HYPIXEL_BASE_URL
from stats_client.base import BaseClient
from stats_client.errors import NotFoundError, UpstreamError

MIN_KEY_LENGTH = 32


def censor_key(key: str) -> str:
    """Show the first block of a key and mask the rest, keeping dashes."""
    masked = "".join("-" if c == "-" else "*" for c in key)
    return key[:8] + masked[8:]


class HypixelClient(BaseClient):
    """Client for the Hypixel public API (v2)."""

    base_url = HYPIXEL_BASE_URL

    def __init__(self, api_key: str = HYPIXEL_API_KEY, **kwargs):
        self._api_key = api_key or ""
        super().__init__(**kwargs)
        if self.key_valid:
            logger.info("Using Hypixel API key {}", censor_key(self._api_key))
        else:
            logger.error("Hypixel API key is missing or malformed; Hypixel lookups will fail")

    @property
    def key_valid(self) -> bool:
        return len(self._api_key) >= MIN_KEY_LENGTH

    def _headers(self) -> dict[str, str]:
        return {"API-Key": self._api_key} if self._api_key else {}

    async def _get(self, path: str, params: dict | None = None) -> dict:
        if not self.key_valid:
            raise UpstreamError("Hypixel API key is not configured")
        return await super()._get(path, params)

    async def player(self, uuid: str) -> dict | None:
        """GET /player - raw player object, None if the player never joined."""
        data = await self._get("player", {"uuid": uuid})
        return data.get("player")

    async def status(self, uuid: str) -> dict:
        """GET /status - online session."""
        data = await self._get("status", {"uuid": uuid})
        return data.get("session") or {}

    async def guild_by_name(self, name: str) -> dict:
        """GET /guild?name= - raw guild object."""
        data = await self._get("guild", {"name": name})
        if not data.get("guild"):
            raise NotFoundError(f'No guild by the name "{name}" could be found.')
        return data["guild"]

    async def guild_by_player(self, uuid: str) -> dict | None:
        """GET /guild?player= - raw guild object, None if the player has no guild."""
        data = await self._get("guild", {"player": uuid})
        return data.get("guild")

    async def skyblock_profiles(self, uuid: str) -> list[dict]:
        """GET /skyblock/profiles - all SkyBlock profiles of a player."""
        data = await self._get("skyblock/profiles", {"uuid": uuid})
        return data.get("profiles") or []

    async def counts(self) -> dict:
        """GET /counts - player counts, used as a connectivity probe."""
        return await self._get("counts")

    async def resource(self, path: str) -> dict:
        """GET /resources/{path} - static game resources (no key needed, sent anyway)."""
        return await super()._get(f"resources/{path}")
