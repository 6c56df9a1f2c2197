"""Leaderboard API."""

from web.api.leaderboards.views import get_leaderboard, get_leaderboards, get_placements, router

__all__ = ["router", "get_leaderboard", "get_leaderboards", "get_placements"]
