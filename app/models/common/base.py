"""Base for plain-data results (stat rows, leaderboard pages, statistics summaries)."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class BaseEntity:
    """Dataclass with a recursive dict form, used when serialising API responses."""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
