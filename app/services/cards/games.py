"""Card games - one provider per game, each picking the stats shown on its card."""

from enum import Enum

from helpers.formulas import format_number, ratio


class CardSize(str, Enum):
    FULL = "full"
    COMPACT = "compact"

    @property
    def dimensions(self) -> tuple[int, int]:
        return (1200, 480) if self is CardSize.FULL else (600, 240)


class CardProvider:
    """Stats of one game as (label, value) pairs. Subclasses read ``stats[<stats_key>]``."""

    title = ""
    stats_key = ""
    color = (255, 255, 255)
    # Reads the SkyBlock record instead of the player record
    skyblock = False

    def game_stats(self, record: dict) -> dict:
        return (record.get("stats") or {}).get(self.stats_key) or {}

    def lines(self, record: dict) -> list[tuple[str, str]]:
        raise NotImplementedError


def _int(stats: dict, key: str) -> int:
    value = stats.get(key, 0)
    return value if isinstance(value, (int, float)) else 0


class BedwarsProvider(CardProvider):
    title = "Bed Wars"
    stats_key = "Bedwars"
    color = (255, 85, 85)

    def lines(self, record):
        bw = self.game_stats(record)
        return [
            ("FKDR", f"{ratio(_int(bw, 'final_kills_bedwars'), _int(bw, 'final_deaths_bedwars')):.2f}"),
            ("WLR", f"{ratio(_int(bw, 'wins_bedwars'), _int(bw, 'losses_bedwars')):.2f}"),
            ("Wins", format_number(_int(bw, "wins_bedwars"))),
            ("Final Kills", format_number(_int(bw, "final_kills_bedwars"))),
            ("Beds Broken", format_number(_int(bw, "beds_broken_bedwars"))),
            ("Winstreak", format_number(bw["winstreak"]) if "winstreak" in bw else "Unknown"),
        ]


class BuildBattleProvider(CardProvider):
    title = "Build Battle"
    stats_key = "BuildBattle"
    color = (85, 255, 255)

    def lines(self, record):
        bb = self.game_stats(record)
        return [
            ("Score", format_number(_int(bb, "score"))),
            ("Wins", format_number(_int(bb, "wins"))),
            ("Games", format_number(_int(bb, "games_played"))),
            ("Votes", format_number(_int(bb, "total_votes"))),
        ]


class DuelsProvider(CardProvider):
    title = "Duels"
    stats_key = "Duels"
    color = (255, 170, 0)

    def lines(self, record):
        duels = self.game_stats(record)
        return [
            ("WLR", f"{ratio(_int(duels, 'wins'), _int(duels, 'losses')):.2f}"),
            ("KDR", f"{ratio(_int(duels, 'kills'), _int(duels, 'deaths')):.2f}"),
            ("Wins", format_number(_int(duels, "wins"))),
            ("Kills", format_number(_int(duels, "kills"))),
            ("Best Winstreak", format_number(_int(duels, "best_overall_winstreak"))),
        ]


class NetworkProvider(CardProvider):
    title = "Network"
    color = (246, 173, 198)

    def lines(self, record):
        profile = record.get("profile") or {}
        return [
            ("Level", f"{profile.get('network_level', 1):.2f}"),
            ("Karma", format_number(profile.get("karma", 0))),
            ("Achievement Points", format_number(profile.get("achievement_points", 0))),
            ("Quests", format_number(profile.get("quests_completed", 0))),
            ("Ranks Gifted", format_number(profile.get("ranks_gifted", 0))),
        ]


class SkywarsProvider(CardProvider):
    title = "SkyWars"
    stats_key = "SkyWars"
    color = (85, 255, 85)

    def lines(self, record):
        sw = self.game_stats(record)
        return [
            ("KDR", f"{ratio(_int(sw, 'kills'), _int(sw, 'deaths')):.2f}"),
            ("WLR", f"{ratio(_int(sw, 'wins'), _int(sw, 'losses')):.2f}"),
            ("Wins", format_number(_int(sw, "wins"))),
            ("Kills", format_number(_int(sw, "kills"))),
            ("Souls", format_number(_int(sw, "souls"))),
        ]


class SkyBlockGeneralProvider(CardProvider):
    title = "SkyBlock"
    color = (206, 143, 18)
    skyblock = True

    def lines(self, record):
        sb = record.get("skyblock_profile") or {}
        skills = sb.get("skills") or {}
        top = max(skills, key=skills.get) if skills else None
        return [
            ("Profile", sb.get("cute_name") or "Unknown"),
            ("Purse", format_number(sb.get("purse") or 0)),
            ("Bank", format_number(sb.get("bank") or 0)),
            ("Skill XP", format_number(sum(skills.values()))),
            ("Top Skill", top.title() if top else "None"),
            ("Collections", format_number(len(sb.get("collections") or []))),
        ]


class CardGame(Enum):
    BEDWARS = BedwarsProvider()
    BUILD_BATTLE = BuildBattleProvider()
    DUELS = DuelsProvider()
    NETWORK = NetworkProvider()
    SKYBLOCK_GENERAL = SkyBlockGeneralProvider()
    SKYWARS = SkywarsProvider()

    @property
    def provider(self) -> CardProvider:
        return self.value
