"""Placement repository - materialised per-leaderboard ranks, replaced wholesale on rebuild."""

import polars as pl
from loguru import logger

from app.repositories.base import BaseRepository

STAGING_TABLE = "leaderboard_placement_staging"
PLACEMENT_COLUMNS = ["leaderboard", "uuid", "rank", "total", "value"]


class PlacementRepository(BaseRepository):
    """Repository for the leaderboard_placement table."""

    def swap(self, placements: pl.DataFrame) -> int:
        """Stage ``placements`` off to the side, then replace the live table in one transaction."""
        self.execute(f"CREATE OR REPLACE TABLE {STAGING_TABLE} AS SELECT * FROM leaderboard_placement LIMIT 0")
        rows = [list(r) for r in placements.select(PLACEMENT_COLUMNS).iter_rows()]
        if rows:
            self._db.cursor().executemany(f"INSERT INTO {STAGING_TABLE} VALUES (?, ?, ?, ?, ?)", rows)

        with self._db.transaction() as cur:
            cur.execute("DELETE FROM leaderboard_placement")
            cur.execute(f"INSERT INTO leaderboard_placement SELECT * FROM {STAGING_TABLE}")
        self.execute(f"DROP TABLE IF EXISTS {STAGING_TABLE}")

        logger.debug("swap(): {} placements", len(rows))
        return len(rows)

    def for_player(self, uuid: str) -> list[tuple[str, int, int, float]]:
        """(leaderboard, rank, total, value) for every leaderboard the player placed on."""
        return self.fetchall(
            """
            SELECT leaderboard, rank, total, value
            FROM leaderboard_placement
            WHERE uuid = ?
            ORDER BY leaderboard
            """,
            [uuid],
        )

    def count(self) -> int:
        return self.fetchone("SELECT COUNT(*) FROM leaderboard_placement")[0]
