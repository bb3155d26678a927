"""Per-player rolling move statistics."""

from dataclasses import dataclass

from trickcore.constants import BAD_MOVE_RATING, GOOD_MOVE_RATING
from trickcore.models.trick import PlayerStats


@dataclass
class PlayerRecord:
    """Running totals for one player."""

    total_moves: int = 0
    good_moves: int = 0
    bad_moves: int = 0
    average_rating: float = 0.0
    trump_moves: int = 0

    def add(self, rating: int, used_trump: bool) -> None:
        self.total_moves += 1
        if rating >= GOOD_MOVE_RATING:
            self.good_moves += 1
        elif rating <= BAD_MOVE_RATING:
            self.bad_moves += 1
        if used_trump:
            self.trump_moves += 1
        self.average_rating += (rating - self.average_rating) / self.total_moves

    def snapshot(self) -> PlayerStats:
        return PlayerStats(
            total_moves=self.total_moves,
            good_move_pct=self.good_moves / self.total_moves * 100,
            bad_move_pct=self.bad_moves / self.total_moves * 100,
            avg_rating=self.average_rating,
            trump_usage_rate=self.trump_moves / self.total_moves,
        )


class PlayerStatsBook:
    """Statistics for every player seen by an evaluator.

    The evaluator writes to the book after each round; engines hold a
    reference to it so they can answer stats queries.
    """

    def __init__(self) -> None:
        self._records: dict[str, PlayerRecord] = {}

    def record(self, player_id: str, rating: int, used_trump: bool) -> None:
        """Add one rated move for a player."""
        self._records.setdefault(player_id, PlayerRecord()).add(rating, used_trump)

    def get(self, player_id: str) -> PlayerStats | None:
        """Stats for a player, None if they have not been rated yet."""
        record = self._records.get(player_id)
        if record is None or record.total_moves == 0:
            return None
        return record.snapshot()

    def reset(self) -> None:
        self._records.clear()
