"""Global Hypixel resources - quests and SkyBlock collections, loaded once in the background."""

import asyncio

from loguru import logger

from stats_client import HypixelClient
from stats_client.errors import NotReadyError


def collection_index(resource: dict) -> dict[str, str]:
    """Item id -> display name for every SkyBlock collection item."""
    index = {}
    for category in (resource.get("collections") or {}).values():
        for item_id, item in (category.get("items") or {}).items():
            index[item_id] = item.get("name", item_id)
    return index


class GameResources:
    """Static game data. Each resource is None until its load succeeds."""

    def __init__(self, hypixel: HypixelClient):
        self._hypixel = hypixel
        self.quests: dict | None = None
        self.collections: dict[str, str] | None = None

    async def load_quests(self) -> None:
        self.quests = await self._hypixel.resource("quests")
        logger.info("Fetched and cached global quests data from Hypixel")

    async def load_collections(self) -> None:
        self.collections = collection_index(await self._hypixel.resource("skyblock/collections"))
        logger.info("Loaded {} SkyBlock collection items", len(self.collections))

    async def load_all(self) -> list[BaseException]:
        """Load every resource; failures are returned, not raised, so one doesn't block the others."""
        results = await asyncio.gather(self.load_quests(), self.load_collections(), return_exceptions=True)
        errors = [r for r in results if isinstance(r, BaseException)]
        for e in errors:
            logger.error("Failed to load game resource: {}", e)
        return errors

    @property
    def skyblock_ready(self) -> bool:
        return self.collections is not None

    def require_collections(self) -> dict[str, str]:
        if self.collections is None:
            raise NotReadyError("SkyBlock data is still loading, try again shortly")
        return self.collections

    def require_quests(self) -> dict:
        if self.quests is None:
            raise NotReadyError("Quest data is still loading, try again shortly")
        return self.quests
