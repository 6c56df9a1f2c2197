"""Player stat repository - the authoritative rows every leaderboard is derived from."""

import polars as pl
from loguru import logger

from app.models.leaderboards import SortDirection
from app.models.stats import PlayerStatRow
from app.repositories.base import BaseRepository

SNAPSHOT_SCHEMA = {"uuid": pl.Utf8, "stat": pl.Utf8, "value": pl.Float64}


class PlayerStatRepository(BaseRepository):
    """Repository for player and player_stat rows."""

    def replace(self, row: PlayerStatRow) -> None:
        """Delete whatever is stored for ``row.uuid`` and insert ``row``, in one transaction."""
        stats = [[row.uuid, name, value] for name, value in row.stat_fields.items() if value is not None]
        with self._db.transaction() as cur:
            cur.execute("DELETE FROM player_stat WHERE uuid = ?", [row.uuid])
            cur.execute("DELETE FROM player WHERE uuid = ?", [row.uuid])
            cur.execute(
                "INSERT INTO player (uuid, display_name, last_updated) VALUES (?, ?, ?)",
                [row.uuid, row.display_name, row.last_updated],
            )
            if stats:
                cur.executemany("INSERT INTO player_stat (uuid, stat, value) VALUES (?, ?, ?)", stats)
        logger.debug("replace({}): {} stats", row.uuid, len(stats))

    def get(self, uuid: str) -> PlayerStatRow | None:
        """Stored row for a player, None if never seen."""
        player = self.fetchone("SELECT uuid, display_name, last_updated FROM player WHERE uuid = ?", [uuid])
        if player is None:
            return None
        stats = self.fetchall("SELECT stat, value FROM player_stat WHERE uuid = ?", [uuid])
        return PlayerStatRow(
            uuid=player[0],
            display_name=player[1],
            last_updated=player[2],
            stat_fields={stat: value for stat, value in stats},
        )

    def count(self) -> int:
        """Number of known players."""
        return self.fetchone("SELECT COUNT(*) FROM player")[0]

    def ranked_page(
        self, stat: str, direction: SortDirection, limit: int, offset: int
    ) -> tuple[int, list[tuple[str, str, float]]]:
        """Total ranked players for ``stat`` and one page of (uuid, display_name, value).

        Only non-zero values rank. Ties are broken by uuid so pages are stable.
        Both reads run in one transaction and see the same snapshot. A page past
        the end is empty without querying, so any offset is accepted.
        """
        with self._db.transaction() as cur:
            total = cur.execute(
                "SELECT COUNT(*) FROM player_stat WHERE stat = ? AND value != 0",
                [stat],
            ).fetchone()[0]
            if offset >= total:
                return total, []
            rows = cur.execute(
                f"""
                SELECT s.uuid, p.display_name, s.value
                FROM player_stat s
                JOIN player p ON p.uuid = s.uuid
                WHERE s.stat = ? AND s.value != 0
                ORDER BY s.value {direction.sql}, s.uuid ASC
                LIMIT ? OFFSET ?
                """,
                [stat, limit, offset],
            ).fetchall()
        logger.debug("ranked_page({}, {}, {}): {}/{}", stat, limit, offset, len(rows), total)
        return total, rows

    def snapshot(self) -> pl.DataFrame:
        """All non-zero stat values as one frame (uuid, stat, value)."""
        rows = self.fetchall("SELECT uuid, stat, value FROM player_stat WHERE value != 0")
        return pl.DataFrame(rows, schema=SNAPSHOT_SCHEMA, orient="row")
