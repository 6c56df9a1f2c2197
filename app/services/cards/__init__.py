from app.services.cards.games import CardGame, CardProvider, CardSize
from app.services.cards.renderer import render_card
from app.services.cards.service import CardRequest, CardService, decode_card_data, parse_card_request

__all__ = [
    "CardGame",
    "CardProvider",
    "CardRequest",
    "CardService",
    "CardSize",
    "decode_card_data",
    "parse_card_request",
    "render_card",
]
