from app.services.leaderboards.store import LeaderboardStore, derive_row, rank_placements

__all__ = ["LeaderboardStore", "derive_row", "rank_placements"]
