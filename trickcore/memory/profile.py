"""Long-term opponent profile spanning several matches."""

import logging

from pydantic import BaseModel, Field

from trickcore.config import settings
from trickcore.memory.opponent_memory import BehaviorMetrics, PlayStatistics
from trickcore.models.enums import Suit

logger = logging.getLogger(__name__)

# Weight kept from the previous suit preference when blending in a new match
SUIT_PREFERENCE_RETENTION = 0.7


class BehaviorSnapshot(BaseModel):
    """Behavior metrics at the end of one match."""

    saves_trumps: float
    plays_aggressively: float
    avoids_risk: float
    predictability: float
    score: int
    won: bool


class OpponentProfile(BaseModel):
    """Aggregated play style of one opponent.

    Owned by whatever layer persists cross-match data; the engine only
    updates it at match end through ``record_match``.
    """

    opponent_id: str
    games_played: int = 0
    wins: int = 0
    average_score: float = 0.0
    behavior_history: list[BehaviorSnapshot] = Field(default_factory=list)
    preferred_suits: dict[Suit, float] = Field(default_factory=dict)
    value_preference: float = 0.0
    trump_usage: float = 0.0

    @property
    def win_rate(self) -> float:
        return self.wins / self.games_played if self.games_played else 0.0

    def record_match(
        self,
        stats: PlayStatistics,
        metrics: BehaviorMetrics,
        won: bool,
        score: int,
        history_limit: int | None = None,
    ) -> None:
        """Fold one finished match into the profile.

        Args:
            stats: Opponent play counts for the match
            metrics: Opponent behavior metrics at match end
            won: Whether the opponent won the match
            score: Opponent's final score
            history_limit: Snapshots to keep, defaults to the configured limit

        """
        limit = history_limit if history_limit is not None else settings.profile_history_limit

        self.games_played += 1
        if won:
            self.wins += 1
        self.average_score += (score - self.average_score) / self.games_played

        total = stats.total_cards_played
        if total > 0:
            for suit, count in stats.suit_leads.items():
                frequency = count / total
                if suit in self.preferred_suits:
                    old = self.preferred_suits[suit]
                    self.preferred_suits[suit] = (
                        SUIT_PREFERENCE_RETENTION * old + (1 - SUIT_PREFERENCE_RETENTION) * frequency
                    )
                else:
                    self.preferred_suits[suit] = frequency

            # Both mapped from [0, 1] rates onto [-1, 1]
            self.value_preference = stats.high_value_rate * 2 - 1
            self.trump_usage = stats.trump_rate * 2 - 1

        self.behavior_history.append(
            BehaviorSnapshot(
                saves_trumps=metrics.saves_trumps,
                plays_aggressively=metrics.plays_aggressively,
                avoids_risk=metrics.avoids_risk,
                predictability=metrics.predictability,
                score=score,
                won=won,
            )
        )
        if len(self.behavior_history) > limit:
            self.behavior_history = self.behavior_history[-limit:]

        logger.info(
            "Profile %s updated: games=%d wins=%d avg_score=%.1f",
            self.opponent_id,
            self.games_played,
            self.wins,
            self.average_score,
        )
