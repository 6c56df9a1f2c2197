"""Player stat row model - one row per known player."""

from dataclasses import dataclass, field
from datetime import datetime

from app.models.common import BaseEntity

PLAYER_DDL = """
CREATE TABLE IF NOT EXISTS player (
    uuid VARCHAR NOT NULL,
    display_name VARCHAR NOT NULL,
    last_updated TIMESTAMP NOT NULL
)
"""

# One row per (player, stat); absent stats have no row
PLAYER_STAT_DDL = """
CREATE TABLE IF NOT EXISTS player_stat (
    uuid VARCHAR NOT NULL,
    stat VARCHAR NOT NULL,
    value DOUBLE NOT NULL
)
"""


@dataclass
class PlayerStatRow(BaseEntity):
    """Derived statistics of one player. Replaced wholesale on every refresh."""

    uuid: str
    display_name: str
    last_updated: datetime
    stat_fields: dict[str, float] = field(default_factory=dict)
