"""Application settings."""

import os
from pathlib import Path


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


VERSION = "0.9.0"

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = _env_int("PORT", 2000)

# Database
DB_PATH = os.getenv("STATS_DB_PATH", "stats.duckdb")

# Logging
LOG_DIR = Path("logs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_TO_FILE = _env_bool("LOG_TO_FILE", True)

# Upstream APIs
HYPIXEL_API_KEY = os.getenv("HYPIXEL_API_KEY", "")
HYPIXEL_BASE_URL = "https://api.hypixel.net/v2"
PLAYERDB_BASE_URL = "https://playerdb.co/api/player/minecraft"
MOJANG_SESSION_URL = "https://sessionserver.mojang.com/session/minecraft/profile"
MOJANG_API_URL = "https://api.mojang.com/users/profiles/minecraft"
API_TIMEOUT = _env_int("API_TIMEOUT", 10)
MAX_CONCURRENT = _env_int("MAX_CONCURRENT", 20)
USER_AGENT = f"nadeshiko-backend/{VERSION}"

# Cache TTLs (seconds)
STATS_TTL = _env_int("STATS_TTL", 5 * 60)
SKYBLOCK_TTL = _env_int("SKYBLOCK_TTL", 5 * 60)
CARD_TTL = _env_int("CARD_TTL", 15 * 60)
GUILD_TTL = _env_int("GUILD_TTL", 60 * 60)

# Guilds
GUILD_MEMBER_CONCURRENCY = _env_int("GUILD_MEMBER_CONCURRENCY", 10)

# Badges
BADGES_PATH = Path(os.getenv("BADGES_PATH", "badges.json"))
BADGES_RELOAD_INTERVAL = 5 * 60

# Leaderboards
LEADERBOARD_PAGE_SIZE = _env_int("LEADERBOARD_PAGE_SIZE", 100)
LEADERBOARD_REBUILD_INTERVAL = _env_int("LEADERBOARD_REBUILD_INTERVAL", 24 * 60 * 60)
LEADERBOARD_INDEX_PATH = Path(os.getenv("LEADERBOARD_INDEX_PATH", "leaderboards.json"))

# Monitoring
DISCORD_LOG_URL = os.getenv("DISCORD_LOG_URL")
DISCORD_ALERT_URL = os.getenv("DISCORD_ALERT_URL")
DISCORD_STATS_URL = os.getenv("DISCORD_STATS_URL")
