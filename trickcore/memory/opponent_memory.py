"""Decaying model of a single opponent's play."""

import logging
from dataclasses import dataclass, field
from itertools import pairwise

from trickcore.config import settings
from trickcore.constants import (
    HIGH_STAKE_THRESHOLD,
    HIGH_VALUE_THRESHOLD,
    LOW_VALUE_THRESHOLD,
    METRIC_MAX,
    METRIC_MIN,
    MIN_ACTIONS_FOR_PREDICTABILITY,
    PREDICTABILITY_CONSISTENCY_WEIGHT,
    PREDICTABILITY_PATTERN_WEIGHT,
    PREDICTABILITY_VARIANCE_WEIGHT,
)
from trickcore.memory.deception import DeceptionTracker
from trickcore.memory.ring_buffer import RingBuffer
from trickcore.memory.traits import TraitEvolution
from trickcore.models.card import Card
from trickcore.models.enums import Suit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ObservedAction:
    """One card the opponent played, with the situation around it.

    Attributes:
        card: Card the opponent played
        round_stake: Stake carried into the round
        was_leader: Whether the opponent opened the round
        trump_played: Whether the card was a trump
        round_number: Round in which it was played
        lead_suit: Suit that was led, None when the opponent led
        won: Whether the opponent took the round

    """

    card: Card
    round_stake: int
    was_leader: bool
    trump_played: bool
    round_number: int
    lead_suit: Suit | None = None
    won: bool | None = None

    @property
    def high_value(self) -> bool:
        return self.card.point_value > HIGH_VALUE_THRESHOLD

    @property
    def high_stake(self) -> bool:
        return self.round_stake > HIGH_STAKE_THRESHOLD


@dataclass
class BehaviorMetrics:
    """Decaying tendencies in [-1, 1] plus predictability in [0, 1]."""

    saves_trumps: float = 0.0
    plays_aggressively: float = 0.0
    avoids_risk: float = 0.0
    predictability: float = 0.5

    def decay(self, factor: float) -> None:
        self.saves_trumps *= factor
        self.plays_aggressively *= factor
        self.avoids_risk *= factor

    def clamp(self) -> None:
        self.saves_trumps = _clamp_metric(self.saves_trumps)
        self.plays_aggressively = _clamp_metric(self.plays_aggressively)
        self.avoids_risk = _clamp_metric(self.avoids_risk)


@dataclass
class PlayStatistics:
    """Per-match counts of what the opponent played."""

    total_cards_played: int = 0
    trumps_played: int = 0
    high_value_plays: int = 0
    suit_leads: dict[Suit, int] = field(default_factory=lambda: dict.fromkeys(Suit, 0))

    def record(self, action: ObservedAction) -> None:
        self.total_cards_played += 1
        if action.trump_played:
            self.trumps_played += 1
        if action.high_value:
            self.high_value_plays += 1
        if action.was_leader:
            self.suit_leads[action.card.suit] += 1

    @property
    def trump_rate(self) -> float:
        return self.trumps_played / self.total_cards_played if self.total_cards_played else 0.0

    @property
    def high_value_rate(self) -> float:
        return self.high_value_plays / self.total_cards_played if self.total_cards_played else 0.0


def _clamp_metric(value: float) -> float:
    return max(METRIC_MIN, min(METRIC_MAX, value))


def compute_predictability(actions: list[ObservedAction]) -> float | None:
    """Score how consistent a sequence of actions is.

    Consecutive pairs are compared on three measures:
    pattern strength (both led the same suit), consistency (same stake level
    and same value class) and variance (the stake level changed and the value
    class changed with it).

    Args:
        actions: Observed actions, oldest first

    Returns:
        Predictability in [0, 1], or None with fewer than three actions

    """
    if len(actions) < MIN_ACTIONS_FOR_PREDICTABILITY:
        return None

    pattern = consistency = variance = 0
    for prev, cur in pairwise(actions):
        same_stake = prev.high_stake == cur.high_stake
        same_value = prev.high_value == cur.high_value
        if same_stake and same_value:
            consistency += 1
        if not same_stake and not same_value:
            variance += 1
        if prev.was_leader and cur.was_leader and prev.card.suit == cur.card.suit:
            pattern += 1

    pairs = len(actions) - 1
    score = (
        PREDICTABILITY_PATTERN_WEIGHT * (pattern / pairs)
        + PREDICTABILITY_CONSISTENCY_WEIGHT * (consistency / pairs)
        + PREDICTABILITY_VARIANCE_WEIGHT * (1 - variance / pairs)
    )
    return max(0.0, min(1.0, score))


@dataclass
class OpponentMemory:
    """Everything one engine instance has learned about its opponent.

    Attributes:
        known_cards: Engine's own hand when it was bound to its seat
        played_cards: Every card seen played this match
        void_suits: Suits the opponent has shown it does not hold
        metrics: Decaying behavior metrics
        recent_actions: Last observed opponent actions
        stats: Per-match play counts
        traits: Trait evolution state
        deception: Bait bookkeeping
        responses: Recent (opponent card, answering card) pairs

    """

    decay_factor: float = field(default_factory=lambda: settings.memory_decay)
    recent_limit: int = field(default_factory=lambda: settings.recent_actions_limit)
    trait_history_limit: int = field(default_factory=lambda: settings.trait_history_limit)
    known_cards: list[Card] = field(default_factory=list)
    played_cards: list[Card] = field(default_factory=list)
    void_suits: set[Suit] = field(default_factory=set)
    metrics: BehaviorMetrics = field(default_factory=BehaviorMetrics)
    stats: PlayStatistics = field(default_factory=PlayStatistics)
    recent_actions: RingBuffer[ObservedAction] = field(init=False)
    traits: TraitEvolution = field(init=False)
    deception: DeceptionTracker = field(init=False)
    responses: RingBuffer[tuple[Card, Card]] = field(init=False)

    def __post_init__(self) -> None:
        self.recent_actions = RingBuffer(self.recent_limit)
        self.traits = TraitEvolution(history_limit=self.trait_history_limit)
        self.deception = DeceptionTracker(capacity=self.recent_limit)
        self.responses = RingBuffer(self.recent_limit)

    def observe(self, action: ObservedAction) -> BehaviorMetrics:
        """Fold one opponent action into the behavior metrics.

        Existing metrics decay first, then the bounded increments for this
        action are applied and everything is clamped.

        Args:
            action: What the opponent played and in which situation

        Returns:
            The updated metrics

        """
        d = self.decay_factor
        m = self.metrics
        m.decay(d)

        self.recent_actions.append(action)
        self.stats.record(action)
        points = action.card.point_value

        if action.trump_played:
            if action.high_stake:
                m.saves_trumps -= 0.1 * d
                m.plays_aggressively += 0.1 * d
            else:
                m.saves_trumps -= 0.2 * d
        elif action.lead_suit is not None and action.card.suit != action.lead_suit:
            # Discarded off-suit instead of trumping
            m.saves_trumps += 0.1 * d

        if action.was_leader and points > LOW_VALUE_THRESHOLD and not action.high_stake:
            m.plays_aggressively += 0.1 * d
            m.avoids_risk -= 0.1 * d

        if action.high_stake and points < LOW_VALUE_THRESHOLD:
            m.avoids_risk += 0.2 * d

        m.clamp()

        predictability = compute_predictability(list(self.recent_actions))
        if predictability is not None:
            m.predictability = predictability

        logger.debug(
            "Observed %s: saves_trumps=%.3f aggressive=%.3f avoids_risk=%.3f predictability=%.3f",
            action.card,
            m.saves_trumps,
            m.plays_aggressively,
            m.avoids_risk,
            m.predictability,
        )
        return m

    def mark_void(self, suit: Suit) -> None:
        """Record that the opponent holds no cards of a suit."""
        if suit not in self.void_suits:
            logger.debug("Opponent shown void in %s", suit.value)
        self.void_suits.add(suit)

    def may_hold(self, suit: Suit) -> bool:
        """Check if the opponent could still hold a suit."""
        return suit not in self.void_suits

    def record_response(self, opponent_card: Card, answer: Card) -> None:
        self.responses.append((opponent_card, answer))

    def response_pattern_strength(self, window: int = 5) -> float:
        """How repetitive the recent card/answer pairs have been, in [0, 1]."""
        recent = self.responses.latest(window)
        if len(recent) < 2:
            return 0.0
        score = 0.0
        for (prev_card, prev_answer), (card, answer) in pairwise(recent):
            if prev_card.suit == card.suit:
                score += 0.2
            if prev_card.point_value == card.point_value:
                score += 0.2
            if prev_answer.suit == answer.suit:
                score += 0.2
        return min(1.0, score)
