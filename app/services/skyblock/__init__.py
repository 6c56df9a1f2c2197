from app.services.skyblock.builder import SkyBlockBuilder, select_profile, summarize_profile
from app.services.skyblock.service import SkyBlockService

__all__ = ["SkyBlockBuilder", "SkyBlockService", "select_profile", "summarize_profile"]
