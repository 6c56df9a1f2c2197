"""Player identity normalisation - names and UUIDs to one canonical key."""

import re

UUID_RE = re.compile(r"^[0-9a-f]{32}$")
NAME_RE = re.compile(r"^[A-Za-z0-9_]{1,16}$")


def normalize_uuid(value: str) -> str | None:
    """Undashed lowercase UUID, or None when ``value`` isn't a UUID (dashed or not)."""
    candidate = value.strip().replace("-", "").lower()
    if UUID_RE.match(candidate):
        return candidate
    return None


def is_player_name(value: str) -> bool:
    return bool(NAME_RE.match(value.strip()))


def dashed(uuid: str) -> str:
    """8-4-4-4-12 form of an undashed UUID."""
    u = uuid.replace("-", "")
    return f"{u[:8]}-{u[8:12]}-{u[12:16]}-{u[16:20]}-{u[20:]}"
