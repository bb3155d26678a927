"""Enums for cards, bots and evaluation."""

from enum import Enum

from trickcore.constants import EARLY_PHASE_LIMIT, MID_PHASE_LIMIT


class Suit(str, Enum):
    """The four suits of the deck."""

    SPADES = "spades"
    HEARTS = "hearts"
    CLUBS = "clubs"
    DIAMONDS = "diamonds"


class Rank(str, Enum):
    """The nine ranks of the deck."""

    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"


class Personality(str, Enum):
    """Heuristic-adjustment profiles for the decision engine."""

    CAUTIOUS = "cautious"
    AGGRESSIVE = "aggressive"
    ANALYTICAL = "analytical"
    GREEDY = "greedy"
    TRAP_SETTER = "trap_setter"
    UNPREDICTABLE = "unpredictable"


class Difficulty(str, Enum):
    """Bot difficulty levels."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    VERY_HARD = "very_hard"
    ADAPTIVE = "adaptive"


class GamePhase(str, Enum):
    """Coarse stage of the match."""

    EARLY = "early"
    MID = "mid"
    LATE = "late"

    @classmethod
    def from_progress(cls, current_round: int, total_rounds: int) -> "GamePhase":
        """Classify the match stage from the round counter.

        Args:
            current_round: Rounds played so far
            total_rounds: Rounds in the whole match

        Returns:
            EARLY below a third of the match, MID below two thirds, else LATE

        """
        progress = current_round / total_rounds if total_rounds > 0 else 1.0
        if progress < EARLY_PHASE_LIMIT:
            return cls.EARLY
        if progress < MID_PHASE_LIMIT:
            return cls.MID
        return cls.LATE


class MoveCategory(str, Enum):
    """Classification of a move for trait evolution."""

    AGGRESSIVE = "aggressive"
    DEFENSIVE = "defensive"
    BLUFF = "bluff"


class ResolutionRule(str, Enum):
    """Which winner-resolution rule decided a round."""

    ACE_OVER_SEVEN = "ace_over_seven"
    HIGHER_RANK = "higher_rank"
    TRUMP = "trump"
    FIRST_PLAYED = "first_played"
    FALLBACK = "fallback"


class QualityBand(str, Enum):
    """Qualitative band for an aggregate round rating."""

    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    BELOW_AVERAGE = "below average"

    @classmethod
    def from_rating(cls, rating: float) -> "QualityBand":
        """Band a 1-10 rating."""
        if rating >= 8:
            return cls.EXCELLENT
        if rating >= 6:
            return cls.GOOD
        if rating >= 4:
            return cls.AVERAGE
        return cls.BELOW_AVERAGE
