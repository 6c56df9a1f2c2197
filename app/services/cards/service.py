"""Card service - request decoding and rendered cards cached per player, game and size."""

import asyncio
import base64
import binascii
import json
from dataclasses import dataclass

from loguru import logger

from app.repositories.common import ExpiringCache
from app.services.cards.games import CardGame, CardSize
from app.services.cards.renderer import render_card
from app.services.skyblock import SkyBlockService
from app.services.stats import StatsService
from stats_client.errors import NotFoundError, ValidationError


@dataclass(frozen=True)
class CardRequest:
    name: str
    game: CardGame
    size: CardSize


def decode_card_data(data: str | None) -> dict:
    """Fields of a base64url-encoded JSON card descriptor ({} when absent)."""
    if not data:
        return {}
    try:
        raw = base64.urlsafe_b64decode(data + "=" * (-len(data) % 4))
        fields = json.loads(raw)
    except (binascii.Error, ValueError) as e:
        raise ValidationError("Invalid card data") from e
    if not isinstance(fields, dict):
        raise ValidationError("Invalid card data")
    return fields


def parse_card_request(
    data: str | None,
    name: str | None = None,
    game: str | None = None,
    size: str | None = None,
) -> CardRequest:
    """Card request from encoded data, query parameters taking precedence."""
    fields = decode_card_data(data)
    name = name or fields.get("name")
    game = game or fields.get("game")
    size = size or fields.get("size")

    if not name:
        raise ValidationError("Missing name parameter")
    if not game:
        raise ValidationError("Missing game parameter")
    if not size:
        raise ValidationError("Missing size parameter")

    try:
        card_game = CardGame[str(game).upper()]
    except KeyError:
        valid = ", ".join(g.name for g in CardGame)
        raise ValidationError(f"Invalid game '{game}'. Valid games: [{valid}]") from None
    try:
        card_size = CardSize(str(size).lower())
    except ValueError:
        raise ValidationError(f"Invalid size '{size}'. Valid sizes: full, compact") from None

    return CardRequest(str(name), card_game, card_size)


class CardService:
    def __init__(self, stats: StatsService, skyblock: SkyBlockService, cache: ExpiringCache[bytes]):
        self._stats = stats
        self._skyblock = skyblock
        self._cache = cache

    async def get(self, request: CardRequest) -> bytes:
        uuid = await self._stats.uuid_for(request.name)

        async def render() -> bytes:
            if request.game.provider.skyblock:
                record = await self._skyblock.get(uuid)
            else:
                record = await self._stats.get(uuid)
            if not record.get("profile"):
                raise NotFoundError(f"{record['name']} has never joined Hypixel.")
            png = await asyncio.to_thread(render_card, request.game, request.size, record)
            logger.debug("Rendered {} {} card for {} ({} bytes)", request.size.value, request.game.name, uuid, len(png))
            return png

        return await self._cache.get(f"{uuid}:{request.game.name}:{request.size.value}", render)
