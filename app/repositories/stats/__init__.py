from app.repositories.stats.player_stats import PlayerStatRepository

__all__ = ["PlayerStatRepository"]
