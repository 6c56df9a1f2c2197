"""Leaderboard API views - thin layer over the leaderboard store."""

import asyncio

from fastapi import APIRouter
from loguru import logger

from app.container import container
from web.api.errors import require, validate_page

from .schemas import (
    LeaderboardEntryItem,
    LeaderboardIndexResponse,
    LeaderboardPageResponse,
    PlacementItem,
    PlacementsResponse,
)

router = APIRouter(tags=["leaderboards"])


@router.get("/leaderboard", response_model=LeaderboardPageResponse)
async def get_leaderboard(leaderboard: str | None = None, page: str | None = None) -> LeaderboardPageResponse:
    """One page of a leaderboard; 400 for unknown names and bad page numbers."""
    name = require(leaderboard, "leaderboard")
    number = validate_page(page)
    definition = container.leaderboards.definition(name)
    logger.info("Serving leaderboard {} page {}", definition.name, number)

    data = await asyncio.to_thread(container.leaderboards.query, definition, number)
    return LeaderboardPageResponse(
        leaderboard=data.leaderboard,
        page=data.page,
        page_size=data.page_size,
        total_count=data.total_count,
        entries=[LeaderboardEntryItem(**e.to_dict()) for e in data.entries],
    )


@router.get("/leaderboards", response_model=LeaderboardIndexResponse)
async def get_leaderboards() -> LeaderboardIndexResponse:
    return LeaderboardIndexResponse(leaderboards=container.leaderboards.index())


@router.get("/placements", response_model=PlacementsResponse)
async def get_placements(name: str | None = None) -> PlacementsResponse:
    """Where a player ranks on every leaderboard, as of the last rebuild."""
    uuid = await container.stats.uuid_for(require(name, "name"))
    placements = await asyncio.to_thread(container.leaderboards.placements, uuid)
    return PlacementsResponse(uuid=uuid, placements=[PlacementItem(**p.to_dict()) for p in placements])
