"""Card API views - PNG stat cards."""

from fastapi import APIRouter, Response
from loguru import logger

from app.container import container
from app.services.cards import parse_card_request

router = APIRouter(tags=["cards"])


async def _serve_card(data: str | None, name: str | None, game: str | None, size: str | None) -> Response:
    request = parse_card_request(data, name=name, game=game, size=size)
    logger.info("Serving {} card for {}", request.game.name, request.name)
    container.statistics.register_request("card", request.name, request.game.name)

    png = await container.cards.get(request)
    return Response(content=png, media_type="image/png")


@router.get("/card/{data}")
async def get_card(data: str, name: str | None = None, game: str | None = None, size: str | None = None) -> Response:
    """Card described by base64url JSON ``{name, game, size}``; query parameters override it."""
    return await _serve_card(data, name, game, size)


@router.get("/card")
async def get_card_from_query(name: str | None = None, game: str | None = None, size: str | None = None) -> Response:
    return await _serve_card(None, name, game, size)
