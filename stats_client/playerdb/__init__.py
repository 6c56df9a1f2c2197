"""PlayerDB client."""

from stats_client.playerdb.client import PlayerDbClient
from stats_client.playerdb.schemas import PlayerDbPlayer

__all__ = ["PlayerDbClient", "PlayerDbPlayer"]
