"""Difficulty profiles."""

from dataclasses import dataclass, replace

from trickcore.constants import SCORE_GAP_THRESHOLD
from trickcore.models.enums import Difficulty


@dataclass(frozen=True)
class DifficultyProfile:
    """Knobs controlled by the difficulty level.

    Attributes:
        risk_multiplier: Scale applied to the leading-card risk score
        randomness: Magnitude of the noise added to card scores
        target_win_rate: Probability of contesting a cheap round instead of conceding it

    """

    risk_multiplier: float
    randomness: float
    target_win_rate: float


DIFFICULTY_PROFILES: dict[Difficulty, DifficultyProfile] = {
    Difficulty.EASY: DifficultyProfile(risk_multiplier=1.0, randomness=15.0, target_win_rate=0.3),
    Difficulty.MEDIUM: DifficultyProfile(risk_multiplier=0.8, randomness=10.0, target_win_rate=0.5),
    Difficulty.HARD: DifficultyProfile(risk_multiplier=1.0, randomness=5.0, target_win_rate=0.8),
    Difficulty.VERY_HARD: DifficultyProfile(risk_multiplier=1.2, randomness=3.0, target_win_rate=0.9),
    Difficulty.ADAPTIVE: DifficultyProfile(risk_multiplier=1.0, randomness=10.0, target_win_rate=0.6),
}


def profile_for(difficulty: Difficulty, score_differential: int = 0) -> DifficultyProfile:
    """Resolve the profile for a difficulty and the current standing.

    Adaptive plays tighter and contests more rounds when behind, and
    loosens up when comfortably ahead.

    Args:
        difficulty: Configured difficulty
        score_differential: Own score minus opponent score

    Returns:
        The profile to use for the next decision

    """
    profile = DIFFICULTY_PROFILES[difficulty]
    if difficulty != Difficulty.ADAPTIVE:
        return profile

    if score_differential < -SCORE_GAP_THRESHOLD:
        return replace(profile, risk_multiplier=0.9, randomness=8.0, target_win_rate=0.7)
    if score_differential > SCORE_GAP_THRESHOLD:
        return replace(profile, risk_multiplier=1.1, randomness=12.0, target_win_rate=0.5)
    return profile
