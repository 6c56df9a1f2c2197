"""Player badges - uuid to badge name, read from a JSON file and reloaded periodically."""

import json
import time
from collections.abc import Callable
from pathlib import Path

from loguru import logger

from settings import BADGES_PATH, BADGES_RELOAD_INTERVAL

NO_BADGE = "NONE"


class BadgeBook:
    """Badges keyed by undashed uuid. Missing or unreadable file means no badges."""

    def __init__(
        self,
        path: Path = BADGES_PATH,
        reload_interval: float = BADGES_RELOAD_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._path = Path(path)
        self._interval = reload_interval
        self._clock = clock
        self._badges: dict[str, str] = {}
        self._loaded_at: float | None = None

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            logger.warning("No {} was found, badges will not function", self._path)
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error("Failed to read {}: {}", self._path, e)
            return {}
        if not isinstance(raw, dict):
            logger.error("{} is not a JSON object, badges will not function", self._path)
            return {}
        return {k.replace("-", "").lower(): str(v) for k, v in raw.items()}

    def reload_if_stale(self) -> None:
        now = self._clock()
        if self._loaded_at is None or now - self._loaded_at > self._interval:
            self._badges = self._read()
            self._loaded_at = now
            logger.info("Loaded {} player badges", len(self._badges))

    def badge(self, uuid: str) -> str:
        self.reload_if_stale()
        return self._badges.get(uuid, NO_BADGE)
