"""Personality state machine for the Adaptive difficulty."""

import logging
from dataclasses import dataclass, field

import numpy as np

from trickcore.constants import PREDICTABILITY_TRIGGER
from trickcore.models.enums import Personality

logger = logging.getLogger(__name__)

# Score differential boundaries, from the adapting side's point of view
DESPERATE_DEFICIT = -50
LARGE_DEFICIT = -30
SMALL_DEFICIT = -10
SMALL_LEAD = 10
LARGE_LEAD = 30

ENDGAME_HAND_SIZE = 4
TENDENCY_TRIGGER = 0.5


@dataclass(frozen=True)
class AdaptationInput:
    """Signals the state machine reacts to at the end of a round.

    Attributes:
        score_differential: Own score minus opponent score
        cards_in_hand: Cards left in the adapting seat's hand
        predictability: Opponent predictability in [0, 1]
        plays_aggressively: Opponent aggressiveness metric in [-1, 1]
        saves_trumps: Opponent trump-saving metric in [-1, 1]

    """

    score_differential: int
    cards_in_hand: int
    predictability: float
    plays_aggressively: float
    saves_trumps: float


@dataclass(frozen=True)
class Transition:
    """One recorded state change."""

    round_number: int
    source: Personality
    target: Personality


@dataclass
class PersonalityStateMachine:
    """Re-selects the active personality once per round.

    Every personality is a state and there is no terminal state. The score
    differential picks a base state; a highly predictable opponent then
    overrides it with a counter to their dominant tendency.
    """

    state: Personality = Personality.ANALYTICAL
    transitions: list[Transition] = field(default_factory=list)

    def step(self, signals: AdaptationInput, rng: np.random.Generator, round_number: int = 0) -> Personality:
        """Evaluate the transition for a completed round.

        Args:
            signals: Current standing and opponent metrics
            rng: Shared random source for the mixed choices
            round_number: Round that just finished, for the transition log

        Returns:
            The personality to play the next round with

        """
        target = self._base_target(signals, rng)

        if signals.predictability > PREDICTABILITY_TRIGGER:
            if signals.plays_aggressively > TENDENCY_TRIGGER:
                target = Personality.AGGRESSIVE if signals.score_differential < 0 else Personality.CAUTIOUS
            elif signals.saves_trumps > TENDENCY_TRIGGER:
                target = Personality.TRAP_SETTER

        if target != self.state:
            logger.info(
                "Personality %s -> %s (diff=%d, predictability=%.2f)",
                self.state.value,
                target.value,
                signals.score_differential,
                signals.predictability,
            )
            self.transitions.append(Transition(round_number, self.state, target))
            self.state = target
        return self.state

    @staticmethod
    def _base_target(signals: AdaptationInput, rng: np.random.Generator) -> Personality:
        diff = signals.score_differential

        if diff < LARGE_DEFICIT:
            if signals.cards_in_hand < ENDGAME_HAND_SIZE and diff < DESPERATE_DEFICIT:
                return Personality.UNPREDICTABLE
            return Personality.AGGRESSIVE if rng.random() < 0.5 else Personality.TRAP_SETTER
        if diff < SMALL_DEFICIT:
            options = [Personality.ANALYTICAL, Personality.AGGRESSIVE, Personality.TRAP_SETTER]
            return options[int(rng.integers(len(options)))]
        if diff < SMALL_LEAD:
            return Personality.ANALYTICAL
        if diff < LARGE_LEAD:
            return Personality.CAUTIOUS if rng.random() < 0.7 else Personality.ANALYTICAL
        return Personality.CAUTIOUS
