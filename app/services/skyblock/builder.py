"""SkyBlock builder - one profile of a player, summarised."""

from loguru import logger

from app.services.resources import GameResources
from stats_client import HypixelClient
from stats_client.errors import NotFoundError


def select_profile(profiles: list[dict], name: str | None) -> dict | None:
    """Profile by cute name (case-insensitive), else the selected one, else the first."""
    if name:
        wanted = name.strip().lower()
        return next((p for p in profiles if (p.get("cute_name") or "").lower() == wanted), None)
    return next((p for p in profiles if p.get("selected")), profiles[0] if profiles else None)


def summarize_profile(profile: dict, uuid: str, collections: dict[str, str]) -> dict:
    members = profile.get("members") or {}
    member = members.get(uuid) or {}
    currencies = member.get("currencies") or {}
    experience = (member.get("player_data") or {}).get("experience") or {}

    return {
        "profile_id": profile.get("profile_id"),
        "cute_name": profile.get("cute_name"),
        "game_mode": profile.get("game_mode", "normal"),
        "selected": bool(profile.get("selected", False)),
        "members": list(members),
        "purse": currencies.get("coin_purse", member.get("coin_purse", 0)),
        "bank": (profile.get("banking") or {}).get("balance", 0),
        "skills": {k.removeprefix("SKILL_").lower(): v for k, v in experience.items()},
        "collections": sorted(collections[item] for item in member.get("collection") or {} if item in collections),
    }


class SkyBlockBuilder:
    def __init__(self, hypixel: HypixelClient, resources: GameResources):
        self._hypixel = hypixel
        self._resources = resources

    async def build(self, player: dict, profile_name: str | None) -> dict:
        """SkyBlock record for an already-built player record."""
        collections = self._resources.require_collections()
        uuid = player["uuid"]

        profiles = await self._hypixel.skyblock_profiles(uuid)
        profile = select_profile(profiles, profile_name)
        if profile is None:
            logger.warning("Attempted to look up invalid profile {!r} for {}", profile_name, uuid)
            raise NotFoundError(f"{player['name']} has no SkyBlock profile \"{profile_name or ''}\".")

        return {
            "success": True,
            "name": player["name"],
            "uuid": uuid,
            "badge": player.get("badge"),
            "profile": player.get("profile"),
            "skyblock_profile": summarize_profile(profile, uuid, collections),
        }
