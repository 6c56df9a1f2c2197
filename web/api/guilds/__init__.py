"""Guild API."""

from web.api.guilds.views import get_guild, router

__all__ = ["router", "get_guild"]
