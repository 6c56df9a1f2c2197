"""Request statistics - in-memory usage log flushed once a day."""

import json
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime

import httpx
import polars as pl
from loguru import logger

from app.models.common import BaseEntity

KINDS = ("stats", "card", "guild", "skyblock")
QUICKCHART_URL = "https://quickchart.io/chart"


@dataclass(frozen=True, slots=True)
class RequestRecord:
    time: datetime
    identity: str
    detail: str | None = None


@dataclass
class StatisticsSummary(BaseEntity):
    """Usage of one day: totals per kind and counts per hour of day per kind."""

    day: date
    totals: dict[str, int] = field(default_factory=dict)
    hourly: dict[str, list[int]] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.totals.values())


def summarize(buckets: dict[str, list[RequestRecord]], day: date) -> StatisticsSummary:
    """Summary of a set of request buckets; every known kind is present, even with no requests."""
    kinds = list(dict.fromkeys([*KINDS, *buckets]))
    rows = [(kind, r.time.hour) for kind, records in buckets.items() for r in records]
    frame = pl.DataFrame(rows, schema={"kind": pl.Utf8, "hour": pl.Int32}, orient="row")
    counts = frame.group_by(["kind", "hour"]).agg(pl.len().alias("count"))

    hourly = {kind: [0] * 24 for kind in kinds}
    for kind, hour, count in counts.iter_rows():
        hourly[kind][hour] = count
    return StatisticsSummary(
        day=day,
        totals={kind: sum(hours) for kind, hours in hourly.items()},
        hourly=hourly,
    )


def chart_url(summary: StatisticsSummary) -> str:
    """quickchart.io bar chart of requests per hour, one dataset per kind."""
    config = {
        "type": "bar",
        "data": {
            "labels": [f"{h:02d}:00" for h in range(24)],
            "datasets": [{"label": f"/{kind} requests", "data": hours} for kind, hours in summary.hourly.items()],
        },
    }
    return str(httpx.URL(QUICKCHART_URL, params={"c": json.dumps(config, separators=(",", ":"))}))


class StatisticsAggregator:
    """Thread-safe append-only request log, bucketed by kind.

    ``flush`` swaps the buckets out under the lock, so registrations racing a
    flush land either in the flushed day or in the next one, never in neither.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._clock = clock
        self._lock = threading.Lock()
        self._buckets: dict[str, list[RequestRecord]] = {kind: [] for kind in KINDS}

    def register_request(self, kind: str, identity: str, detail: str | None = None) -> None:
        record = RequestRecord(self._clock(), identity, detail)
        with self._lock:
            self._buckets.setdefault(kind, []).append(record)

    def count(self, kind: str | None = None) -> int:
        with self._lock:
            if kind is not None:
                return len(self._buckets.get(kind, []))
            return sum(len(records) for records in self._buckets.values())

    def snapshot(self) -> dict[str, list[RequestRecord]]:
        """Copy of the current log."""
        with self._lock:
            return {kind: list(records) for kind, records in self._buckets.items()}

    def flush(self, day: date | None = None) -> StatisticsSummary:
        """Summarise and clear the log."""
        with self._lock:
            buckets, self._buckets = self._buckets, {kind: [] for kind in KINDS}
        summary = summarize(buckets, day or self._clock().date())
        logger.info("Flushed statistics for {}: {} requests {}", summary.day, summary.total, summary.totals)
        return summary
