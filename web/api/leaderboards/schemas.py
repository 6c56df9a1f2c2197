"""Leaderboard API response schemas."""

from pydantic import BaseModel


class LeaderboardEntryItem(BaseModel):
    """One ranked player."""

    uuid: str
    display_name: str
    rank: int
    percentile: float
    value: float


class LeaderboardPageResponse(BaseModel):
    """One page of a leaderboard."""

    success: bool = True
    leaderboard: str
    page: int
    page_size: int
    total_count: int
    entries: list[LeaderboardEntryItem]


class LeaderboardIndexResponse(BaseModel):
    """Leaderboard names per category."""

    success: bool = True
    leaderboards: dict[str, list[str]]


class PlacementItem(BaseModel):
    leaderboard: str
    rank: int
    total: int
    percentile: float
    value: float


class PlacementsResponse(BaseModel):
    """A player's placements as of the last rebuild."""

    success: bool = True
    uuid: str
    placements: list[PlacementItem]
