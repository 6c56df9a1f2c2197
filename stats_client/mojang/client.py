"""Mojang client - skin textures and API health."""

import base64
import binascii
import json

from settings import MOJANG_API_URL, MOJANG_SESSION_URL
from stats_client.base import BaseClient
from stats_client.errors import NotFoundError, UpstreamError


class MojangClient(BaseClient):
    """Client for the Mojang session server."""

    base_url = MOJANG_SESSION_URL

    async def textures(self, uuid: str) -> dict:
        """Skin URL, model and cape URL for a player."""
        resp = await self._request(f"{self.base_url}/{uuid}")
        if resp.status_code in (204, 404):
            raise NotFoundError(f"No Mojang profile for {uuid}")

        profile = self._json(resp)
        if resp.is_error:
            raise self._status_error(resp, profile)

        try:
            encoded = profile["properties"][0]["value"]
            textures = json.loads(base64.b64decode(encoded))["textures"]
        except (KeyError, IndexError, ValueError, binascii.Error) as e:
            raise UpstreamError("Malformed textures from Mojang") from e

        skin = textures.get("SKIN") or {}
        cape = textures.get("CAPE") or {}
        return {
            "skin": skin.get("url"),
            "slim": (skin.get("metadata") or {}).get("model") == "slim",
            "cape": cape.get("url", ""),
        }

    async def probe(self) -> int:
        """Status code of a well-known profile lookup."""
        resp = await self._request(f"{MOJANG_API_URL}/hypixel")
        return resp.status_code
