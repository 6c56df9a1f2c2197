"""Card API."""

from web.api.cards.views import get_card, get_card_from_query, router

__all__ = ["router", "get_card", "get_card_from_query"]
