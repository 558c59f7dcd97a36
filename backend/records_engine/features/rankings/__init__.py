"""Rankings feature module: ranking and proceeds of round results."""

from .calculator import RankingEntry, compute_rankings, set_ranking_and_proceeds

__all__ = ["RankingEntry", "compute_rankings", "set_ranking_and_proceeds"]
