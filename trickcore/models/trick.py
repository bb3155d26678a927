"""Move and round-result models exchanged with the evaluator."""

from dataclasses import dataclass

from pydantic import BaseModel, Field

from trickcore.models.card import Card
from trickcore.models.enums import QualityBand, ResolutionRule


@dataclass
class PlayerMove:
    """A card played by one player in a round.

    Attributes:
        player_id: Player who played the card
        card: Card played
        team_id: Team the player belongs to
        move_quality: Rating assigned by the evaluator, None before evaluation

    """

    player_id: str
    card: Card
    team_id: str
    move_quality: int | None = None


class MoveRating(BaseModel):
    """Quality rating of one move."""

    player_id: str
    card: str  # Card as display text for serialization
    quality: int = Field(ge=1, le=10)
    reasoning: str


class RoundResult(BaseModel):
    """Outcome of an evaluated round."""

    winning_team: str
    winning_player_id: str
    points_earned: int
    bonus_points: int = 0
    rule: ResolutionRule
    move_ratings: list[MoveRating]
    overall_round_quality: float
    quality_band: QualityBand
    round_analysis: str
    fallback: bool = False
    fallback_reason: str | None = None


class PlayerStats(BaseModel):
    """Rolling statistics for one player."""

    total_moves: int
    good_move_pct: float
    bad_move_pct: float
    avg_rating: float
    trump_usage_rate: float
