from app.services.monitoring.discord import DiscordMonitor
from app.services.monitoring.probes import probe_hypixel, probe_mojang, run_probes
from app.services.monitoring.statistics import (
    KINDS,
    RequestRecord,
    StatisticsAggregator,
    StatisticsSummary,
    chart_url,
    summarize,
)

__all__ = [
    "KINDS",
    "DiscordMonitor",
    "RequestRecord",
    "StatisticsAggregator",
    "StatisticsSummary",
    "chart_url",
    "probe_hypixel",
    "probe_mojang",
    "run_probes",
    "summarize",
]
