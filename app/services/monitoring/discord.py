"""Discord monitor - log/alert/statistics embeds posted to webhooks, fire-and-forget."""

import asyncio
import time
import traceback

import httpx
from loguru import logger

from app.services.monitoring.statistics import StatisticsSummary, chart_url
from settings import API_TIMEOUT, VERSION

COLOR_OK = 0x80FF80
COLOR_LOG = 0x808080
COLOR_ALERT = 0xFF8080
COLOR_STATS = 0xF6ADC6
MAX_DESCRIPTION = 4000


def _fmt(message: str, args: tuple) -> str:
    return message.format(*args) if args else message


class DiscordMonitor:
    """Posts embeds to Discord webhooks.

    Sending never raises: failures are logged and the failing webhook is
    disabled for the rest of the process. An unset URL disables its channel.
    """

    def __init__(
        self,
        log_url: str | None = None,
        alert_url: str | None = None,
        stats_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._urls = {"log": log_url, "alert": alert_url, "stats": stats_url}
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._tasks: set[asyncio.Task] = set()

    def enabled(self, channel: str) -> bool:
        return bool(self._urls.get(channel))

    def log(self, message: str, *args) -> None:
        self._submit("log", COLOR_LOG, _fmt(message, args))

    def ok(self, message: str, *args) -> None:
        self._submit("log", COLOR_OK, _fmt(message, args))

    def alert(self, message: str, *args) -> None:
        self._submit("alert", COLOR_ALERT, _fmt(message, args))

    def alert_exception(self, exc: BaseException, message: str, *args) -> None:
        trace = "".join(traceback.format_exception(exc))
        self._submit("alert", COLOR_ALERT, f"{_fmt(message, args)}.\n\n**Stack Trace:**\n```\n{trace}\n```")

    def send_statistics(self, summary: StatisticsSummary) -> None:
        lines = [f"Total `/{kind}` requests: **{count}**" for kind, count in summary.totals.items()]
        description = f"**Requests:**\nTotal requests: **{summary.total}**\n\n" + "\n".join(lines)
        self._submit(
            "stats",
            COLOR_STATS,
            description + "\n\n**Hourly Visualization:**",
            title=f"API statistics for {summary.day.isoformat()}",
            image=chart_url(summary),
        )

    def _embed(self, color: int, description: str, title: str | None = None, image: str | None = None) -> dict:
        if len(description) > MAX_DESCRIPTION:
            description = description[: MAX_DESCRIPTION - 4] + "\n```"
        embed = {
            "color": color,
            "description": f"<t:{int(time.time())}:f>: {description}",
            "footer": {"text": f"Sent from Nadeshiko {VERSION}"},
        }
        if title:
            embed["title"] = title
        if image:
            embed["image"] = {"url": image}
        return embed

    def _submit(self, channel: str, color: int, description: str, **extra) -> None:
        if not self.enabled(channel):
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No event loop, dropping {} webhook message", channel)
            return
        task = loop.create_task(self.send(channel, self._embed(color, description, **extra)))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def send(self, channel: str, embed: dict) -> bool:
        """Post one embed; False (and the channel disabled) on failure."""
        url = self._urls.get(channel)
        if not url:
            return False
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=API_TIMEOUT, transport=self._transport)
        try:
            resp = await self._client.post(url, json={"embeds": [embed]})
            resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Failed to post to the {} webhook, disabling it: {}", channel, e)
            self._urls[channel] = None
            return False
        return True

    async def close(self) -> None:
        """Wait for pending messages, then close the HTTP client."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        if self._client:
            await self._client.aclose()
            self._client = None
