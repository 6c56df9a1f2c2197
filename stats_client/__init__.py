"""Upstream API client package - Hypixel, PlayerDB and Mojang."""

from stats_client.base import BaseClient, safe_request
from stats_client.errors import (
    FetchError,
    LeaderboardNotFound,
    NotFoundError,
    NotReadyError,
    UpstreamError,
    UpstreamTimeout,
    ValidationError,
)
from stats_client.hypixel import HypixelClient
from stats_client.mojang import MojangClient
from stats_client.playerdb import PlayerDbClient

__all__ = [
    # Base
    "BaseClient",
    "safe_request",
    # Errors
    "FetchError",
    "NotFoundError",
    "UpstreamError",
    "UpstreamTimeout",
    "LeaderboardNotFound",
    "ValidationError",
    "NotReadyError",
    # Clients
    "HypixelClient",
    "MojangClient",
    "PlayerDbClient",
]
