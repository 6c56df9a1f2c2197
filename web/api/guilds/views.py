"""Guild API views."""

from fastapi import APIRouter
from loguru import logger

from app.container import container
from stats_client.errors import ValidationError

router = APIRouter(tags=["guilds"])


@router.get("/guild")
async def get_guild(name: str | None = None, player: str | None = None) -> dict:
    """Guild by name, or the guild a player belongs to."""
    if name and name.strip():
        logger.info("Serving guild {}", name)
        container.statistics.register_request("guild", name.strip())
        return await container.guilds.by_name(name)
    if player and player.strip():
        logger.info("Serving guild of {}", player)
        container.statistics.register_request("guild", player.strip())
        return await container.guilds.by_player(player)
    raise ValidationError("Missing name or player parameter")
