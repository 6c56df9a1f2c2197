"""Hypixel rank tags and Minecraft colour codes."""

SECTION = "§"

COLORS = {
    "BLACK": "§0",
    "DARK_BLUE": "§1",
    "DARK_GREEN": "§2",
    "DARK_AQUA": "§3",
    "DARK_RED": "§4",
    "DARK_PURPLE": "§5",
    "GOLD": "§6",
    "GRAY": "§7",
    "DARK_GRAY": "§8",
    "BLUE": "§9",
    "GREEN": "§a",
    "AQUA": "§b",
    "RED": "§c",
    "LIGHT_PURPLE": "§d",
    "YELLOW": "§e",
    "WHITE": "§f",
}

STAFF_RANKS = {
    "ADMIN": "§c[ADMIN]",
    "GAME_MASTER": "§2[GM]",
    "YOUTUBER": "§c[§fYOUTUBE§c]",
}

# "x" is replaced with the player's plus colour
PACKAGE_RANKS = {
    "VIP": "§a[VIP]",
    "VIP_PLUS": "§a[VIP§6+§a]",
    "MVP": "§b[MVP]",
    "MVP_PLUS": "§b[MVPx+§b]",
}


def color_code(name: str | None, default: str = "§7") -> str:
    """Colour code for a Hypixel colour name (e.g. ``DARK_AQUA``)."""
    if not name:
        return default
    return COLORS.get(name.upper(), default)


def _present(player: dict, field: str) -> str | None:
    value = player.get(field)
    if not value or value == "NONE":
        return None
    return value


def rank_tag(player: dict) -> str:
    """Formatted rank tag for a Hypixel player object, "" for non-ranked players.

    Priority: custom prefix, staff rank, active MVP++, new package rank, legacy package rank.
    """
    prefix = _present(player, "prefix")
    if prefix:
        return prefix

    rank = _present(player, "rank")
    if rank and rank != "NORMAL" and rank in STAFF_RANKS:
        return STAFF_RANKS[rank]

    plus_color = color_code(player.get("rankPlusColor"), default="§c")

    if player.get("monthlyPackageRank") == "SUPERSTAR":
        rank_color = color_code(player.get("monthlyRankColor"), default="§6")
        return f"{rank_color}[MVP{plus_color}++{rank_color}]"

    for field in ("newPackageRank", "packageRank"):
        package = _present(player, field)
        if package in PACKAGE_RANKS:
            return PACKAGE_RANKS[package].replace("x", plus_color)

    return ""


def guild_tag(guild: dict) -> str:
    """Coloured ``[TAG]`` for a guild, "" when the guild has no tag."""
    tag = guild.get("tag")
    if not tag:
        return ""
    return f"{color_code(guild.get('tagColor'))}[{tag}]"


def strip_colors(text: str) -> str:
    """Remove ``§x`` colour codes."""
    out = []
    skip = False
    for ch in text:
        if skip:
            skip = False
            continue
        if ch == SECTION:
            skip = True
            continue
        out.append(ch)
    return "".join(out)
