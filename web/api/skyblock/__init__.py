"""SkyBlock API."""

from web.api.skyblock.views import get_skyblock, router

__all__ = ["router", "get_skyblock"]
