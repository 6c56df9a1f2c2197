"""Startup connectivity probes, retried with backoff."""

from loguru import logger
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from app.services.monitoring.discord import DiscordMonitor
from stats_client import HypixelClient, MojangClient
from stats_client.errors import FetchError, UpstreamError


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type(FetchError),
    reraise=True,
)
async def probe_hypixel(hypixel: HypixelClient) -> int:
    """Players online right now, raises when Hypixel can't be reached."""
    counts = await hypixel.counts()
    return counts.get("playerCount", 0)


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type(FetchError),
    reraise=True,
)
async def probe_mojang(mojang: MojangClient) -> int:
    status = await mojang.probe()
    if status >= 500:
        raise UpstreamError(f"Mojang API responded {status}", status)
    return status


async def run_probes(hypixel: HypixelClient, mojang: MojangClient, monitor: DiscordMonitor) -> dict[str, bool]:
    """Probe every upstream. Failures are alerted, never raised."""
    results = {}

    if not hypixel.key_valid:
        monitor.alert("Hypixel API key is missing or malformed")
        results["hypixel"] = False
    else:
        try:
            players = await probe_hypixel(hypixel)
            logger.info("Hypixel API reachable ({} players online)", players)
            results["hypixel"] = True
        except FetchError as e:
            logger.error("Hypixel API unreachable: {}", e)
            monitor.alert("Hypixel API unreachable on startup: {}", e.cause)
            results["hypixel"] = False

    try:
        status = await probe_mojang(mojang)
        logger.info("Mojang API reachable ({})", status)
        results["mojang"] = True
    except FetchError as e:
        logger.error("Mojang API unreachable: {}", e)
        monitor.alert("Mojang API unreachable on startup: {}", e.cause)
        results["mojang"] = False

    return results
