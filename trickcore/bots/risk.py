"""Risk estimates used when scoring candidate cards."""

from trickcore.bots.personalities import ScoringContext
from trickcore.constants import HIGH_VALUE_THRESHOLD, LOW_VALUE_THRESHOLD
from trickcore.memory.deception import DeceptionTracker
from trickcore.memory.patterns import CrossMatchPatternStore
from trickcore.models.card import Card
from trickcore.models.enums import GamePhase, Suit

# Non-trump leads are most exposed early, while the opponent still holds everything
PHASE_EXPOSURE: dict[GamePhase, float] = {
    GamePhase.EARLY: 0.3,
    GamePhase.MID: 0.2,
    GamePhase.LATE: 0.1,
}

VERY_HIGH_VALUE_THRESHOLD = 8
BAIT_PATTERN_WEIGHT = 0.3
RECENT_BAIT_PENALTY = 0.2


def lead_risk(card: Card, ctx: ScoringContext, opponent_void: set[Suit], multiplier: float = 1.0) -> float:
    """Estimate how likely a led card is to be captured, and how costly that is.

    Args:
        card: Candidate card to lead
        ctx: Scoring situation
        opponent_void: Suits the opponent has shown it does not hold
        multiplier: Difficulty risk-aversion multiplier

    Returns:
        Risk in [0, 1]

    """
    points = card.point_value
    risk = 0.0

    if points > HIGH_VALUE_THRESHOLD:
        risk += 0.3
    if points > VERY_HIGH_VALUE_THRESHOLD:
        risk += 0.2
    if ctx.trump_suit not in opponent_void:
        risk += 0.2
    if card.suit not in opponent_void:
        risk += 0.2

    if card.is_trump(ctx.trump_suit):
        risk -= 0.2
        if points > HIGH_VALUE_THRESHOLD and ctx.phase == GamePhase.EARLY:
            risk += 0.1
    else:
        risk += PHASE_EXPOSURE[ctx.phase]
        if ctx.trumps_in_hand > 0:
            # Leading side cards while holding trumps wastes the tempo
            risk += 0.2
        if points < LOW_VALUE_THRESHOLD:
            risk += 0.15

    return max(0.0, min(1.0, risk * multiplier))


def deception_risk(card: Card, store: CrossMatchPatternStore, tracker: DeceptionTracker) -> float:
    """Estimate whether committing a card plays into an opponent bait.

    Draws on the cross-match bluff store (situations sharing the card's suit
    or rank) and on how many of the opponent's recent leads were baits.

    Args:
        card: Candidate card
        store: Cross-match bluff patterns
        tracker: Bait bookkeeping for the current match

    Returns:
        Risk in [0, 1]

    """
    risk = 0.0
    similar = store.matching(suit=card.suit, rank=card.rank)
    if similar:
        risk += sum(e.success_rate for e in similar) / len(similar) * BAIT_PATTERN_WEIGHT
    if card.point_value > HIGH_VALUE_THRESHOLD and tracker.recent_opponent_baits() > 1:
        risk += RECENT_BAIT_PENALTY
    return min(1.0, risk)
