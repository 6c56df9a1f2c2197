"""Player record builder - one fresh lookup across PlayerDB, Mojang and Hypixel."""

from loguru import logger

from app.services.stats.badges import BadgeBook
from helpers import formulas, ranks
from stats_client import HypixelClient, MojangClient, PlayerDbClient, safe_request


def build_profile(player: dict) -> dict:
    """Normalised Hypixel profile summary of a raw player object."""
    tag = ranks.rank_tag(player)
    display_name = player.get("displayname", "")

    if "networkExp" in player:
        level = formulas.exact_network_level(player["networkExp"])
        multiplier = formulas.coin_multiplier(int(level))
    else:
        level, multiplier = 1.0, 1.0

    social = player.get("socialMedia") or {}
    if "links" in social:
        social = social["links"]

    return {
        "tag": tag,
        "tagged_name": tag.replace("]", "] ") + display_name,
        "first_login": player.get("firstLogin", 0),
        "last_login": player.get("lastLogin", 0),
        "network_level": level,
        "coin_multiplier": multiplier,
        "achievement_points": player.get("achievementPoints", 0),
        "karma": player.get("karma", 0),
        "ranks_gifted": (player.get("giftingMeta") or {}).get("ranksGiven", 0),
        "quests_completed": formulas.count_quests(player.get("quests") or {}),
        "social_media": social,
    }


def build_status(session: dict) -> dict:
    status = {"online": bool(session.get("online", False))}
    if "gameType" in session:
        status["game"] = session["gameType"]
    if "mode" in session:
        status["mode"] = session["mode"]
    return status


def build_guild_summary(guild: dict | None, uuid: str) -> dict | None:
    """Short guild summary shown on a player record, None when guildless."""
    if not guild:
        return None
    members = guild.get("members") or []
    joined = next((m.get("joined", 0) for m in members if m.get("uuid") == uuid), 0)
    return {
        "name": guild.get("name", ""),
        "tag": ranks.guild_tag(guild),
        "level": formulas.guild_level(guild.get("exp", 0)),
        "members": len(members),
        "joined": joined,
    }


class PlayerBuilder:
    """Builds a normalised player record. Primary lookups raise, secondary ones degrade."""

    def __init__(
        self,
        playerdb: PlayerDbClient,
        mojang: MojangClient,
        hypixel: HypixelClient,
        badges: BadgeBook,
    ):
        self._playerdb = playerdb
        self._mojang = mojang
        self._hypixel = hypixel
        self._badges = badges

    async def build(self, identity: str) -> dict:
        account = await self._playerdb.profile(identity)
        uuid = account.uuid

        record = {
            "success": True,
            "name": account.username,
            "uuid": uuid,
            "badge": self._badges.badge(uuid),
        }

        textures = await safe_request(self._mojang.textures(uuid), default={})
        record.update({k: v for k, v in textures.items() if v is not None})
        record["status"] = build_status(await safe_request(self._hypixel.status(uuid), default={}))
        record["guild"] = build_guild_summary(await safe_request(self._hypixel.guild_by_player(uuid)), uuid)

        player = await self._hypixel.player(uuid)
        if player is None:
            logger.debug("{} has never joined Hypixel", account.username)
            return record

        record["profile"] = build_profile(player)
        record["stats"] = player.get("stats") or {}
        record["achievements"] = player.get("achievements") or {}
        record["achievements_one_time"] = player.get("achievementsOneTime") or []
        record["quests"] = player.get("quests") or {}
        return record
