"""Pure math formulas - no dependencies, easily testable."""
from math import floor, log10, sqrt

# Network level curve
BASE = 10_000
GROWTH = 2_500
HALF_GROWTH = 0.5 * GROWTH
REVERSE_PQ_PREFIX = -(BASE - 0.5 * GROWTH) / GROWTH
REVERSE_CONST = REVERSE_PQ_PREFIX * REVERSE_PQ_PREFIX
GROWTH_DIVIDES_2 = 2 / GROWTH

GUILD_EXP_NEEDED = [
    100_000, 150_000, 250_000, 500_000, 750_000,
    1_000_000, 1_250_000, 1_500_000, 2_000_000, 2_500_000,
    2_500_000, 2_500_000, 2_500_000, 2_500_000, 3_000_000,
]
GUILD_MAX_LEVEL = 1000

COIN_MULTIPLIERS = [
    (5, 1.0), (10, 1.5), (15, 2.0), (20, 2.5), (25, 3.0), (30, 3.5), (40, 4.0),
    (50, 4.5), (100, 5.0), (125, 5.5), (150, 6.0), (200, 6.5), (250, 7.0),
]


def network_level(exp: float) -> int:
    """Whole network level for an amount of network experience."""
    if exp < 0:
        return 1
    return floor(1 + REVERSE_PQ_PREFIX + sqrt(REVERSE_CONST + GROWTH_DIVIDES_2 * exp))


def _exp_to_full_level(level: float) -> float:
    return (HALF_GROWTH * (level - 2) + BASE) * (level - 1)


def exact_network_level(exp: float) -> float:
    """Network level including progress towards the next level."""
    level = network_level(exp)
    start = _exp_to_full_level(level)
    end = _exp_to_full_level(level + 1)
    return level + (exp - start) / (end - start)


def coin_multiplier(level: float) -> float:
    for bound, multiplier in COIN_MULTIPLIERS:
        if level < bound:
            return multiplier
    return 8.0


def guild_level(exp: int) -> float:
    """Exact guild level, including progress towards the next level."""
    level = 0.0
    for i in range(GUILD_MAX_LEVEL):
        needed = GUILD_EXP_NEEDED[min(i, len(GUILD_EXP_NEEDED) - 1)]
        if exp - needed < 0:
            return level + exp / needed
        level += 1
        exp -= needed
    return level


def count_quests(quests: dict) -> int:
    """Total number of quest completions across all quests."""
    return sum(len(q.get("completions", [])) for q in quests.values() if isinstance(q, dict))


def ratio(numerator: float, denominator: float) -> float:
    """Ratio that treats a zero denominator as one, like the in-game stat screens."""
    return numerator / denominator if denominator else float(numerator)


def format_number(value: float) -> str:
    """Compact number: 1234 -> 1.2K, 1_500_000 -> 1.5M."""
    suffixes = ["", "K", "M", "B", "T"]
    if value == 0:
        return "0"
    if abs(value) < 1000:
        return f"{value:,.0f}" if float(value).is_integer() else f"{value:,.2f}"
    exponent = min(int(log10(abs(value)) / 3), len(suffixes) - 1)
    return f"{value / 10 ** (exponent * 3):.1f}{suffixes[exponent]}"
