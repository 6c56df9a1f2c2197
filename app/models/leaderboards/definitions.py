"""Leaderboard categories and definitions - fixed at process start."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from app.models.stats import PlayerStatRow
from helpers.formulas import ratio


class SortDirection(str, Enum):
    """Ranking order of a leaderboard."""

    ASCENDING = "ascending"
    DESCENDING = "descending"

    @property
    def sql(self) -> str:
        return "ASC" if self is SortDirection.ASCENDING else "DESC"


class LeaderboardCategory(Enum):
    """Group of leaderboards sharing one input object, given as a path into the player record."""

    NETWORK = ("profile",)
    BEDWARS = ("stats", "Bedwars")
    DUELS = ("stats", "Duels")
    SKYWARS = ("stats", "SkyWars")
    PIT = ("stats", "Pit")
    BUILD_BATTLE = ("stats", "BuildBattle")
    MURDER_MYSTERY = ("stats", "MurderMystery")
    TNT_GAMES = ("stats", "TNTGames")
    ARCADE = ("stats", "Arcade")
    BLITZ = ("stats", "HungerGames")
    ARENA_BRAWL = ("stats", "Arena")
    PAINTBALL = ("stats", "Paintball")
    QUAKECRAFT = ("stats", "Quake")
    TURBO_KART_RACERS = ("stats", "GingerBread")
    VAMPIREZ = ("stats", "VampireZ")
    WALLS = ("stats", "Walls")
    COPS_AND_CRIMS = ("stats", "MCGO")
    MEGA_WALLS = ("stats", "Walls3")
    SMASH_HEROES = ("stats", "SuperSmash")
    SPEED_UHC = ("stats", "SpeedUHC")
    UHC = ("stats", "UHC")
    WARLORDS = ("stats", "Battleground")
    WOOL_GAMES = ("stats", "WoolGames")
    FISHING = ("stats", "MainLobby", "fishing")

    def select(self, record: dict) -> dict:
        """The category's input object from a player record, {} when missing."""
        node = record
        for key in self.value:
            if not isinstance(node, dict):
                return {}
            node = node.get(key)
        return node if isinstance(node, dict) else {}


@dataclass(frozen=True)
class LeaderboardDefinition:
    """A ranked stat: which category input it reads and how it is derived and ordered."""

    name: str
    category: LeaderboardCategory
    derive: Callable[[dict], float]
    sort_direction: SortDirection = SortDirection.DESCENDING

    def derive_value(self, record: dict) -> float | None:
        """Stat value for a player record, None when the player doesn't have it."""
        try:
            value = self.derive(self.category.select(record))
        except (KeyError, TypeError, ValueError, AttributeError):
            return None
        if isinstance(value, bool) or value is None:
            return None
        return float(value)

    def extract(self, row: PlayerStatRow) -> float | None:
        """Orderable value of this leaderboard for a stored row."""
        return row.stat_fields.get(self.name)


def _stat(field: str) -> Callable[[dict], float]:
    return lambda data: data[field]


def _nested(*path: str) -> Callable[[dict], float]:
    def derive(data: dict) -> float:
        for key in path:
            data = data[key]
        return data

    return derive


def _ratio(numerator: str, denominator: str) -> Callable[[dict], float]:
    return lambda data: ratio(data[numerator], data.get(denominator, 0))


def _bedwars_mode(prefix: str, mode: str) -> list[LeaderboardDefinition]:
    bw = LeaderboardCategory.BEDWARS
    return [
        LeaderboardDefinition(f"BEDWARS_{mode}_WINS", bw, _stat(f"{prefix}_wins_bedwars")),
        LeaderboardDefinition(
            f"BEDWARS_{mode}_WLR", bw, _ratio(f"{prefix}_wins_bedwars", f"{prefix}_losses_bedwars")
        ),
        LeaderboardDefinition(f"BEDWARS_{mode}_FINALS", bw, _stat(f"{prefix}_final_kills_bedwars")),
        LeaderboardDefinition(
            f"BEDWARS_{mode}_FKDR", bw, _ratio(f"{prefix}_final_kills_bedwars", f"{prefix}_final_deaths_bedwars")
        ),
    ]


_NETWORK = LeaderboardCategory.NETWORK
_BEDWARS = LeaderboardCategory.BEDWARS

DEFINITIONS: list[LeaderboardDefinition] = [
    # Network - derived from the record's profile
    LeaderboardDefinition("NETWORK_FIRST_LOGIN", _NETWORK, _stat("first_login"), SortDirection.ASCENDING),
    LeaderboardDefinition("NETWORK_NETWORK_LEVEL", _NETWORK, _stat("network_level")),
    LeaderboardDefinition("NETWORK_ACHIEVEMENT_POINTS", _NETWORK, _stat("achievement_points")),
    LeaderboardDefinition("NETWORK_KARMA", _NETWORK, _stat("karma")),
    LeaderboardDefinition("NETWORK_RANKS_GIFTED", _NETWORK, _stat("ranks_gifted")),
    LeaderboardDefinition("NETWORK_QUESTS_COMPLETED", _NETWORK, _stat("quests_completed")),
    # Bed Wars - derived from stats.Bedwars
    LeaderboardDefinition("BEDWARS_EXP", _BEDWARS, _stat("Experience")),
    LeaderboardDefinition("BEDWARS_TICKETS_EARNED", _BEDWARS, _nested("slumber", "total_tickets_earned")),
    LeaderboardDefinition("BEDWARS_COMPLETED_CHALLENGES", _BEDWARS, _stat("total_challenges_completed")),
    LeaderboardDefinition("BEDWARS_COLLECTED_EMERALDS", _BEDWARS, _stat("emerald_resources_collected_bedwars")),
    LeaderboardDefinition("BEDWARS_COLLECTED_DIAMONDS", _BEDWARS, _stat("diamond_resources_collected_bedwars")),
    LeaderboardDefinition("BEDWARS_WINS", _BEDWARS, _stat("wins_bedwars")),
    LeaderboardDefinition("BEDWARS_WLR", _BEDWARS, _ratio("wins_bedwars", "losses_bedwars")),
    LeaderboardDefinition("BEDWARS_FINALS", _BEDWARS, _stat("final_kills_bedwars")),
    LeaderboardDefinition("BEDWARS_FKDR", _BEDWARS, _ratio("final_kills_bedwars", "final_deaths_bedwars")),
    LeaderboardDefinition("BEDWARS_KILLS", _BEDWARS, _stat("kills_bedwars")),
    LeaderboardDefinition("BEDWARS_KDR", _BEDWARS, _ratio("kills_bedwars", "deaths_bedwars")),
    LeaderboardDefinition("BEDWARS_BEDS", _BEDWARS, _stat("beds_broken_bedwars")),
    LeaderboardDefinition("BEDWARS_BBLR", _BEDWARS, _ratio("beds_broken_bedwars", "beds_lost_bedwars")),
    *_bedwars_mode("eight_one", "SOLO"),
    *_bedwars_mode("eight_two", "DOUBLES"),
    *_bedwars_mode("four_three", "THREES"),
    *_bedwars_mode("four_four", "FOURS"),
    *_bedwars_mode("two_four", "FOURVFOUR"),
]

LEADERBOARDS: dict[str, LeaderboardDefinition] = {d.name: d for d in DEFINITIONS}


def leaderboard_index(definitions: list[LeaderboardDefinition] = DEFINITIONS) -> dict[str, list[str]]:
    """Leaderboard names grouped by category, in declaration order."""
    index: dict[str, list[str]] = {}
    for d in definitions:
        index.setdefault(d.category.name, []).append(d.name)
    return index
