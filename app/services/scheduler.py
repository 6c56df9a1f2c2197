"""Background schedule - daily statistics flush and periodic leaderboard rebuilds."""

import asyncio
from collections.abc import Callable
from datetime import datetime, timedelta

from loguru import logger

from app.services.leaderboards import LeaderboardStore
from app.services.monitoring import DiscordMonitor, StatisticsAggregator
from settings import LEADERBOARD_REBUILD_INTERVAL


def seconds_until_midnight(now: datetime) -> float:
    """Seconds from ``now`` to the next local midnight."""
    midnight = (now + timedelta(days=1)).replace(hour=0, minute=0, second=0, microsecond=0)
    return (midnight - now).total_seconds()


class Scheduler:
    """Runs the recurring jobs as asyncio tasks; ``stop`` cancels them."""

    def __init__(
        self,
        statistics: StatisticsAggregator,
        store: LeaderboardStore,
        monitor: DiscordMonitor,
        rebuild_interval: float = LEADERBOARD_REBUILD_INTERVAL,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._statistics = statistics
        self._store = store
        self._monitor = monitor
        self._rebuild_interval = rebuild_interval
        self._clock = clock
        self._tasks: list[asyncio.Task] = []

    def start(self) -> None:
        self._tasks = [
            asyncio.create_task(self._daily_flush(), name="statistics-flush"),
            asyncio.create_task(self._periodic_rebuild(), name="leaderboard-rebuild"),
        ]
        logger.info("Scheduler started (rebuild every {}s)", self._rebuild_interval)

    async def stop(self) -> None:
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        logger.info("Scheduler stopped")

    def flush_statistics(self) -> None:
        """Flush yesterday's usage and send it to the stats webhook."""
        day = (self._clock() - timedelta(days=1)).date()
        try:
            summary = self._statistics.flush(day)
            self._monitor.send_statistics(summary)
        except Exception as e:
            logger.exception("Statistics flush for {} failed", day)
            self._monitor.alert_exception(e, "Statistics flush for {} failed", day)

    async def rebuild_leaderboards(self) -> int | None:
        try:
            return await asyncio.to_thread(self._store.rebuild)
        except Exception as e:
            logger.exception("Leaderboard rebuild failed")
            self._monitor.alert_exception(e, "Leaderboard rebuild failed")
            return None

    async def _daily_flush(self) -> None:
        while True:
            await asyncio.sleep(seconds_until_midnight(self._clock()))
            self.flush_statistics()
            # Past midnight before computing the next wait
            await asyncio.sleep(1)

    async def _periodic_rebuild(self) -> None:
        while True:
            await asyncio.sleep(self._rebuild_interval)
            await self.rebuild_leaderboards()
