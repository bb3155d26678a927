"""Trait evolution for the highest difficulty tier."""

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from trickcore.constants import (
    TRAIT_CORRECTION,
    TRAIT_DEFAULT,
    TRAIT_FAILURE_STREAK,
    TRAIT_MAX,
    TRAIT_MIN,
    TRAIT_STEP,
)
from trickcore.memory.ring_buffer import RingBuffer
from trickcore.models.enums import MoveCategory


class Trait(str, Enum):
    """Bounded traits nudged by move outcomes."""

    AGGRESSIVENESS = "aggressiveness"
    RISK_AVERSION = "risk_aversion"
    DECEPTION_TENDENCY = "deception_tendency"
    ADAPTABILITY = "adaptability"


# Which trait a move category trains
CATEGORY_TRAITS: dict[MoveCategory, Trait] = {
    MoveCategory.AGGRESSIVE: Trait.AGGRESSIVENESS,
    MoveCategory.DEFENSIVE: Trait.RISK_AVERSION,
    MoveCategory.BLUFF: Trait.DECEPTION_TENDENCY,
}


@dataclass(frozen=True)
class TraitSnapshot:
    """Trait values right after an outcome was applied."""

    traits: dict[Trait, float]
    category: MoveCategory
    success: bool


def _clamp(value: float) -> float:
    return max(TRAIT_MIN, min(TRAIT_MAX, value))


@dataclass
class TraitEvolution:
    """Four bounded traits plus a short outcome history.

    Attributes:
        traits: Current value of each trait in [0, 100]
        history: Most recent snapshots, oldest first

    """

    history_limit: int = 10
    traits: dict[Trait, float] = field(default_factory=lambda: dict.fromkeys(Trait, TRAIT_DEFAULT))
    history: RingBuffer[TraitSnapshot] = field(init=False)

    def __post_init__(self) -> None:
        self.history = RingBuffer(self.history_limit)

    def __getitem__(self, trait: Trait) -> float:
        return self.traits[trait]

    def record_outcome(self, success: bool, category: MoveCategory) -> float:
        """Nudge the trait trained by a move category.

        A success moves the trait up by the fixed step, a failure moves it
        down. When the last three outcomes of the same category all failed
        the trait is scaled down by the correction factor.

        Args:
            success: Whether the move achieved its aim
            category: Kind of move that was made

        Returns:
            New value of the trained trait

        """
        trait = CATEGORY_TRAITS[category]
        step = TRAIT_STEP if success else -TRAIT_STEP
        self.traits[trait] = _clamp(self.traits[trait] + step)
        # A successful adaptation of any kind counts toward adaptability
        if success:
            self.traits[Trait.ADAPTABILITY] = _clamp(self.traits[Trait.ADAPTABILITY] + TRAIT_STEP / 2)

        self.history.append(TraitSnapshot(dict(self.traits), category, success))

        same_category = [s for s in self.history if s.category == category][-TRAIT_FAILURE_STREAK:]
        if len(same_category) == TRAIT_FAILURE_STREAK and not any(s.success for s in same_category):
            self.traits[trait] = _clamp(self.traits[trait] * TRAIT_CORRECTION)

        return self.traits[trait]

    def perturb(self, rng: np.random.Generator, magnitude: float) -> None:
        """Shift every trait by uniform noise in [-magnitude, magnitude]."""
        for trait in Trait:
            self.traits[trait] = _clamp(self.traits[trait] + rng.uniform(-magnitude, magnitude))
