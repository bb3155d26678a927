"""Personality strategy table.

Each personality contributes a set of scoring adjustments applied on top of
the shared card heuristic. Adding a personality means adding one entry to
``PERSONALITY_STRATEGIES``.
"""

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from trickcore.constants import HIGH_STAKE_THRESHOLD, HIGH_VALUE_THRESHOLD
from trickcore.models.card import Card
from trickcore.models.enums import GamePhase, Personality, Rank, Suit


@dataclass(frozen=True)
class ScoringContext:
    """Situation a card is scored in.

    Attributes:
        trump_suit: Trump suit for the match
        round_stake: Stake carried into the round
        cards_in_hand: Cards the acting seat holds
        trumps_in_hand: Trumps the acting seat holds
        phase: Stage of the match
        score_differential: Own team score minus opponents
        rng: Shared random source

    """

    trump_suit: Suit
    round_stake: int
    cards_in_hand: int
    trumps_in_hand: int
    phase: GamePhase
    score_differential: int
    rng: np.random.Generator

    @property
    def high_stake(self) -> bool:
        return self.round_stake > HIGH_STAKE_THRESHOLD


CardAdjustment = Callable[[Card, ScoringContext], float]
SuitAdjustment = Callable[[Card, ScoringContext, bool], float]
ResponseAdjustment = Callable[[Card, Card, ScoringContext], float]


def _none(*_args: object) -> float:
    return 0.0


@dataclass(frozen=True)
class PersonalityStrategy:
    """Scoring adjustments for one personality.

    Attributes:
        lead_top_trump: Leading the Ace or Seven of trump while the opponent may hold trump
        lead_trump: Leading any other trump
        lead_suit: Leading a non-trump; the flag says whether the opponent may follow
        respond_top_trump: Answering the Ace or Seven of trump with the other one
        discard_weight: Multiplier on the point loss of a losing same-suit card
        card_bonus: Flat bonus for any card

    """

    lead_top_trump: CardAdjustment = _none
    lead_trump: CardAdjustment = _none
    lead_suit: SuitAdjustment = _none
    respond_top_trump: ResponseAdjustment = _none
    discard_weight: float = 1.0
    card_bonus: CardAdjustment = _none


def _high_value(card: Card) -> bool:
    return card.point_value > HIGH_VALUE_THRESHOLD


CAUTIOUS = PersonalityStrategy(
    lead_top_trump=lambda card, ctx: -20.0,
    lead_trump=lambda card, ctx: -5.0,
    respond_top_trump=lambda card, lead, ctx: -25.0,
    card_bonus=lambda card, ctx: -2.0 if _high_value(card) else 0.0,
)

AGGRESSIVE = PersonalityStrategy(
    lead_top_trump=lambda card, ctx: 15.0,
    lead_trump=lambda card, ctx: 3.0,
    respond_top_trump=lambda card, lead, ctx: 20.0,
    card_bonus=lambda card, ctx: 3.0 if _high_value(card) else 0.0,
)

ANALYTICAL = PersonalityStrategy(
    lead_top_trump=lambda card, ctx: 10.0 if ctx.high_stake else -5.0,
    # Opponent void in the suit will trump it
    lead_suit=lambda card, ctx, may_follow: 0.0 if may_follow else -0.5 * card.point_value,
    respond_top_trump=lambda card, lead, ctx: 15.0 if ctx.high_stake else -10.0,
)

GREEDY = PersonalityStrategy(
    lead_top_trump=lambda card, ctx: 1.5 * card.point_value,
    lead_suit=lambda card, ctx, may_follow: -0.3 * card.point_value if may_follow else 0.0,
    respond_top_trump=lambda card, lead, ctx: 2.0 * card.point_value,
    discard_weight=2.0,
    card_bonus=lambda card, ctx: card.point_value / 2,
)

TRAP_SETTER = PersonalityStrategy(
    # Holds the Ace back and uses the Seven as bait
    lead_top_trump=lambda card, ctx: 8.0 if card.rank == Rank.SEVEN else -5.0,
    lead_suit=lambda card, ctx, may_follow: 0.5 * card.point_value if may_follow else 0.0,
    respond_top_trump=lambda card, lead, ctx: 15.0,
    card_bonus=lambda card, ctx: 2.0 if 3 <= card.point_value <= 6 else 0.0,
)

UNPREDICTABLE = PersonalityStrategy(
    lead_top_trump=lambda card, ctx: float(ctx.rng.uniform(-10.0, 10.0)),
    respond_top_trump=lambda card, lead, ctx: float(ctx.rng.uniform(-15.0, 15.0)),
    card_bonus=lambda card, ctx: float(ctx.rng.uniform(-3.0, 3.0)),
)

PERSONALITY_STRATEGIES: dict[Personality, PersonalityStrategy] = {
    Personality.CAUTIOUS: CAUTIOUS,
    Personality.AGGRESSIVE: AGGRESSIVE,
    Personality.ANALYTICAL: ANALYTICAL,
    Personality.GREEDY: GREEDY,
    Personality.TRAP_SETTER: TRAP_SETTER,
    Personality.UNPREDICTABLE: UNPREDICTABLE,
}


def contextual_bonus(card: Card, ctx: ScoringContext) -> float:
    """Late-game and stake bonus shared by every personality."""
    bonus = 0.0
    if ctx.cards_in_hand < 5 and _high_value(card):
        bonus += 3.0
    if ctx.round_stake > 0:
        bonus += min(5.0, ctx.round_stake / 2)
    return bonus
