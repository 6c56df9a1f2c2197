"""Player API views - stats, achievements and quests."""

from fastapi import APIRouter
from loguru import logger

from app.container import container
from web.api.errors import require

router = APIRouter(tags=["players"])

# Returned by /achievements and /quests instead
STATS_HIDDEN_FIELDS = ("achievements_one_time", "quests")


@router.get("/stats")
async def get_stats(name: str | None = None) -> dict:
    """Normalised player record."""
    name = require(name, "name")
    logger.info("Serving stats for {}", name)
    container.statistics.register_request("stats", name)

    record = await container.stats.get(name)
    return {k: v for k, v in record.items() if k not in STATS_HIDDEN_FIELDS}


@router.get("/achievements")
async def get_achievements(name: str | None = None) -> dict:
    name = require(name, "name")
    logger.info("Serving achievements for {}", name)

    record = await container.stats.get(name)
    return {
        "success": True,
        "profile": record.get("profile"),
        "achievements": record.get("achievements", {}),
        "achievements_one_time": record.get("achievements_one_time", []),
    }


@router.get("/quests")
async def get_quests(name: str | None = None) -> dict:
    """Global quest definitions plus the player's quest progress."""
    name = require(name, "name")
    logger.info("Serving quests for {}", name)

    quests = container.resources.require_quests()
    record = await container.stats.get(name)
    return {
        "success": True,
        "global": quests,
        "player": {
            "profile": record.get("profile"),
            "quests": record.get("quests", {}),
        },
    }
