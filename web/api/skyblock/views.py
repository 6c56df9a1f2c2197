"""SkyBlock API views."""

from fastapi import APIRouter
from loguru import logger

from app.container import container
from web.api.errors import require

router = APIRouter(tags=["skyblock"])


@router.get("/skyblock")
async def get_skyblock(name: str | None = None, profile: str | None = None) -> dict:
    """SkyBlock profile summary; 503 while collection data is still loading."""
    name = require(name, "name")
    logger.info("Serving SkyBlock stats for {}", name)
    container.statistics.register_request("skyblock", name, profile)
    return await container.skyblock.get(name, profile)
