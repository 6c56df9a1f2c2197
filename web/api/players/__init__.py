"""Player API."""

from web.api.players.views import get_achievements, get_quests, get_stats, router

__all__ = ["router", "get_stats", "get_achievements", "get_quests"]
