"""PlayerDB client - resolves names and UUIDs to Minecraft accounts."""

from pydantic import ValidationError

from settings import PLAYERDB_BASE_URL
from stats_client.base import BaseClient
from stats_client.errors import NotFoundError, UpstreamError
from stats_client.playerdb.schemas import PlayerDbPlayer, PlayerDbResponse

NOT_FOUND_CODES = {"minecraft.invalid_username", "minecraft.api_failure", "player.not_found"}


class PlayerDbClient(BaseClient):
    """Client for playerdb.co Minecraft lookups."""

    base_url = PLAYERDB_BASE_URL

    async def profile(self, identity: str) -> PlayerDbPlayer:
        """Look up an account by name or UUID."""
        if not identity:
            raise NotFoundError("No player name was provided.")

        resp = await self._request(f"{self.base_url}/{identity}")
        payload = self._json(resp)

        try:
            envelope = PlayerDbResponse.model_validate(payload)
        except ValidationError as e:
            raise UpstreamError("Couldn't fetch data from PlayerDB!") from e

        if envelope.code in NOT_FOUND_CODES or resp.status_code == 404:
            raise NotFoundError(f'No player by the name "{identity}" could be found.')
        if resp.is_error or not envelope.success:
            raise UpstreamError("Couldn't fetch data from PlayerDB!", resp.status_code if resp.is_error else None)

        try:
            return PlayerDbPlayer.model_validate(envelope.data.get("player") or {})
        except ValidationError as e:
            raise UpstreamError("Couldn't fetch data from PlayerDB!") from e
