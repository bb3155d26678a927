"""Round evaluation and per-player statistics."""

from trickcore.evaluator.analysis import build_round_analysis
from trickcore.evaluator.move_rating import RatingContext, rate_move
from trickcore.evaluator.player_stats import PlayerRecord, PlayerStatsBook
from trickcore.evaluator.round_evaluator import RoundEvaluator

__all__ = [
    "PlayerRecord",
    "PlayerStatsBook",
    "RatingContext",
    "RoundEvaluator",
    "build_round_analysis",
    "rate_move",
]
