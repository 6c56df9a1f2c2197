"""Card renderer - draws a player's game stats onto a PNG with Pillow."""

from io import BytesIO

from PIL import Image, ImageDraw, ImageFont

from app.services.cards.games import CardGame, CardSize
from app.services.stats.badges import NO_BADGE
from helpers.ranks import strip_colors

BACKGROUND = (24, 24, 32, 255)
PANEL = (0, 0, 0, 128)
LABEL = (138, 138, 138)
WHITE = (255, 255, 255)


def _font(size: int) -> ImageFont.ImageFont:
    return ImageFont.load_default(size=size)


def render_card(game: CardGame, size: CardSize, record: dict) -> bytes:
    """PNG bytes of ``game``'s card for a built player record."""
    provider = game.provider
    width, height = size.dimensions
    scale = width / 1200

    card = Image.new("RGBA", (width, height), BACKGROUND)
    overlay = Image.new("RGBA", card.size)
    overlay_draw = ImageDraw.Draw(overlay)
    draw = ImageDraw.Draw(card)

    # Accent bar and name panel
    draw.rectangle((0, 0, width, int(12 * scale)), fill=provider.color)
    overlay_draw.rectangle((int(30 * scale), int(40 * scale), width - int(30 * scale), int(120 * scale)), fill=PANEL)
    card = Image.alpha_composite(card, overlay)
    draw = ImageDraw.Draw(card)

    profile = record.get("profile") or {}
    name = strip_colors(profile.get("tagged_name") or record.get("name", ""))
    badge = record.get("badge", NO_BADGE)
    if badge and badge != NO_BADGE:
        name = f"{name}  [{badge}]"
    draw.text((width / 2, int(80 * scale)), name, font=_font(int(44 * scale)), fill=WHITE, anchor="mm")
    draw.text(
        (width - int(40 * scale), int(150 * scale)),
        provider.title.upper(),
        font=_font(int(26 * scale)),
        fill=provider.color,
        anchor="rm",
    )

    # Stat grid, three per row
    lines = provider.lines(record)
    col_width = (width - int(80 * scale)) / 3
    label_font, value_font = _font(int(22 * scale)), _font(int(40 * scale))
    for i, (label, value) in enumerate(lines):
        x = int(40 * scale + (i % 3) * col_width)
        y = int(200 * scale + (i // 3) * 130 * scale)
        draw.text((x, y), label, font=label_font, fill=LABEL)
        draw.text((x, y + int(30 * scale)), value, font=value_font, fill=WHITE)

    buf = BytesIO()
    card.save(buf, format="PNG")
    return buf.getvalue()
