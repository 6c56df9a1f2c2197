from app.repositories.leaderboards.placements import PlacementRepository

__all__ = ["PlacementRepository"]
