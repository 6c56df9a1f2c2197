"""Leaderboard store - player stat rows in, ranked pages and placements out."""

import json
import threading
from datetime import datetime
from pathlib import Path

import polars as pl
from loguru import logger

from app.models.leaderboards import (
    LEADERBOARDS,
    LeaderboardDefinition,
    LeaderboardEntry,
    LeaderboardPage,
    Placement,
    SortDirection,
    leaderboard_index,
    percentile,
)
from app.models.stats import PlayerStatRow
from app.repositories.leaderboards import PlacementRepository
from app.repositories.stats import PlayerStatRepository
from settings import LEADERBOARD_PAGE_SIZE
from stats_client.errors import LeaderboardNotFound, ValidationError

ROW_LOCK_STRIPES = 64


def derive_row(
    record: dict,
    definitions: dict[str, LeaderboardDefinition] = LEADERBOARDS,
    now: datetime | None = None,
) -> PlayerStatRow:
    """Stat row of a player record: every leaderboard value the player has."""
    stats = {}
    for d in definitions.values():
        value = d.derive_value(record)
        if value is not None:
            stats[d.name] = value
    return PlayerStatRow(
        uuid=record["uuid"],
        display_name=record.get("name", ""),
        last_updated=now or datetime.now(),
        stat_fields=stats,
    )


def rank_placements(snapshot: pl.DataFrame, definitions: dict[str, LeaderboardDefinition]) -> pl.DataFrame:
    """Rank every (uuid, stat, value) of a snapshot within its leaderboard.

    Order is the leaderboard's sort direction, ties by uuid, same as the paged query.
    """
    directions = pl.DataFrame(
        {
            "stat": list(definitions),
            "sign": [1.0 if d.sort_direction is SortDirection.ASCENDING else -1.0 for d in definitions.values()],
        }
    )
    return (
        snapshot.join(directions, on="stat", how="inner")
        .with_columns((pl.col("value") * pl.col("sign")).alias("key"))
        .sort(["stat", "key", "uuid"])
        .with_columns(
            (pl.int_range(pl.len()).over("stat") + 1).alias("rank"),
            pl.len().over("stat").alias("total"),
        )
        .select(
            pl.col("stat").alias("leaderboard"),
            "uuid",
            pl.col("rank").cast(pl.Int32),
            pl.col("total").cast(pl.Int32),
            "value",
        )
    )


class LeaderboardStore:
    """Authoritative player stat rows plus the leaderboard views derived from them.

    Writes for one uuid are serialised on a striped lock; different uuids only
    contend when they hash to the same stripe. Pages are read from the rows at
    query time. Placements are materialised by ``rebuild`` and swapped in whole.
    """

    def __init__(
        self,
        stats_repo: PlayerStatRepository,
        placement_repo: PlacementRepository,
        definitions: dict[str, LeaderboardDefinition] = LEADERBOARDS,
        page_size: int = LEADERBOARD_PAGE_SIZE,
    ):
        self._stats = stats_repo
        self._placements = placement_repo
        self._definitions = definitions
        self.page_size = page_size
        self._row_locks = [threading.Lock() for _ in range(ROW_LOCK_STRIPES)]
        self._rebuild_lock = threading.Lock()
        self.last_rebuild: datetime | None = None
        logger.debug("LeaderboardStore initialized ({} leaderboards)", len(definitions))

    def definition(self, name: str) -> LeaderboardDefinition:
        """Registered definition by name (case-insensitive)."""
        definition = self._definitions.get(name.strip().upper()) if name else None
        if definition is None:
            raise LeaderboardNotFound("Unknown leaderboard!")
        return definition

    def index(self) -> dict[str, list[str]]:
        return leaderboard_index(list(self._definitions.values()))

    def write_index(self, path: Path) -> None:
        """Dump ``{category: [leaderboard names]}``, replacing the file."""
        path = Path(path)
        path.write_text(json.dumps(self.index(), indent=2), encoding="utf-8")
        logger.info("Wrote leaderboard index to {}", path)

    def insert_or_replace(self, row: PlayerStatRow) -> None:
        """Replace every stored stat of ``row.uuid`` with ``row``. Last write wins."""
        with self._row_locks[hash(row.uuid) % ROW_LOCK_STRIPES]:
            self._stats.replace(row)

    def insert_record(self, record: dict) -> PlayerStatRow:
        """Derive a player's row from a fresh record and store it."""
        row = derive_row(record, self._definitions)
        self.insert_or_replace(row)
        return row

    def query(self, definition: LeaderboardDefinition | str, page: int = 1) -> LeaderboardPage:
        """One page of a leaderboard. Rank is 1-based and continuous across pages."""
        if isinstance(definition, str):
            definition = self.definition(definition)
        if page < 1:
            raise ValidationError("Invalid page number!")

        offset = (page - 1) * self.page_size
        total, rows = self._stats.ranked_page(definition.name, definition.sort_direction, self.page_size, offset)

        entries = []
        for i, (uuid, display_name, value) in enumerate(rows):
            rank = offset + i + 1
            entries.append(
                LeaderboardEntry(
                    uuid=uuid,
                    display_name=display_name,
                    rank=rank,
                    percentile=percentile(rank, total),
                    value=value,
                )
            )
        return LeaderboardPage(
            leaderboard=definition.name,
            page=page,
            page_size=self.page_size,
            total_count=total,
            entries=entries,
        )

    def rebuild(self) -> int | None:
        """Recompute every placement from a snapshot of the rows and swap it in.

        Returns the number of placements, or None when a rebuild is already running.
        """
        if not self._rebuild_lock.acquire(blocking=False):
            logger.warning("Leaderboard rebuild already running, skipping")
            return None
        try:
            started = datetime.now()
            snapshot = self._stats.snapshot()
            placements = rank_placements(snapshot, self._definitions)
            count = self._placements.swap(placements)
            self.last_rebuild = datetime.now()
            logger.info(
                "Rebuilt leaderboards: {} placements in {:.2f}s",
                count,
                (self.last_rebuild - started).total_seconds(),
            )
            return count
        finally:
            self._rebuild_lock.release()

    def placements(self, uuid: str) -> list[Placement]:
        """A player's placements as of the last rebuild."""
        return [
            Placement(
                leaderboard=leaderboard,
                rank=rank,
                total=total,
                percentile=percentile(rank, total),
                value=value,
            )
            for leaderboard, rank, total, value in self._placements.for_player(uuid)
        ]
