from app.services.guilds.builder import GuildBuilder
from app.services.guilds.service import GuildService

__all__ = ["GuildBuilder", "GuildService"]
