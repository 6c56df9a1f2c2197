"""Leaderboard views - always derived from player stat rows, never authoritative."""

from dataclasses import dataclass, field

from app.models.common import BaseEntity

PLACEMENT_DDL = """
CREATE TABLE IF NOT EXISTS leaderboard_placement (
    leaderboard VARCHAR NOT NULL,
    uuid VARCHAR NOT NULL,
    rank INTEGER NOT NULL,
    total INTEGER NOT NULL,
    value DOUBLE NOT NULL
)
"""


def percentile(rank: int, total: int) -> float:
    """Share of ranked players below ``rank``: rank 1 of 200 -> 99.5, rank 200 of 200 -> 0.0."""
    if total <= 0:
        return 0.0
    return 100 - (rank / total) * 100


@dataclass
class LeaderboardEntry(BaseEntity):
    """One ranked player on a leaderboard page."""

    uuid: str
    display_name: str
    rank: int
    percentile: float
    value: float


@dataclass
class LeaderboardPage(BaseEntity):
    """A page of a ranked leaderboard."""

    leaderboard: str
    page: int
    page_size: int
    total_count: int
    entries: list[LeaderboardEntry] = field(default_factory=list)


@dataclass
class Placement(BaseEntity):
    """A player's position on one leaderboard as of the last rebuild."""

    leaderboard: str
    rank: int
    total: int
    percentile: float
    value: float
