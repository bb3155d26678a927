"""Opponent modeling: decaying metrics, traits, bluff patterns and profiles."""

from trickcore.memory.deception import DeceptionTracker
from trickcore.memory.opponent_memory import (
    BehaviorMetrics,
    ObservedAction,
    OpponentMemory,
    PlayStatistics,
    compute_predictability,
)
from trickcore.memory.patterns import (
    CrossMatchPatternStore,
    PatternEntry,
    SituationSignature,
    is_bluff,
    score_bucket,
    stake_bucket,
)
from trickcore.memory.profile import BehaviorSnapshot, OpponentProfile
from trickcore.memory.ring_buffer import RingBuffer
from trickcore.memory.traits import Trait, TraitEvolution, TraitSnapshot

__all__ = [
    "BehaviorMetrics",
    "BehaviorSnapshot",
    "CrossMatchPatternStore",
    "DeceptionTracker",
    "ObservedAction",
    "OpponentMemory",
    "OpponentProfile",
    "PatternEntry",
    "PlayStatistics",
    "RingBuffer",
    "SituationSignature",
    "Trait",
    "TraitEvolution",
    "TraitSnapshot",
    "compute_predictability",
    "is_bluff",
    "score_bucket",
    "stake_bucket",
]
