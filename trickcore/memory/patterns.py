"""Cross-match store of inferred bluff situations."""

from typing import NamedTuple

from pydantic import BaseModel, Field

from trickcore.constants import HIGH_STAKE_THRESHOLD, LOW_VALUE_THRESHOLD, SCORE_GAP_THRESHOLD
from trickcore.models.card import Card
from trickcore.models.enums import Rank, Suit


def stake_bucket(stake: int) -> str:
    """Coarse stake level: none, low or high."""
    if stake <= 0:
        return "none"
    if stake <= HIGH_STAKE_THRESHOLD:
        return "low"
    return "high"


def score_bucket(score_differential: int) -> str:
    """Coarse standing: behind, even or ahead."""
    if score_differential < -SCORE_GAP_THRESHOLD:
        return "behind"
    if score_differential > SCORE_GAP_THRESHOLD:
        return "ahead"
    return "even"


def is_bluff(card: Card, stake: int) -> bool:
    """A low-value card played while the stake is high."""
    return card.point_value < LOW_VALUE_THRESHOLD and stake > HIGH_STAKE_THRESHOLD


class SituationSignature(NamedTuple):
    """Key describing the situation a card was played in."""

    suit: Suit
    rank: Rank
    stake: str
    score: str

    @classmethod
    def of(cls, card: Card, stake: int, score_differential: int) -> "SituationSignature":
        return cls(card.suit, card.rank, stake_bucket(stake), score_bucket(score_differential))

    def key(self) -> str:
        return f"{self.suit.value}|{self.rank.value}|{self.stake}|{self.score}"


class PatternEntry(BaseModel):
    """How often a bluff situation was seen and how often it paid off."""

    frequency: int = 0
    successes: int = 0

    @property
    def success_rate(self) -> float:
        return self.successes / self.frequency if self.frequency else 0.0


class CrossMatchPatternStore(BaseModel):
    """Bluff situations keyed by signature.

    The store is a plain model so the owning layer can persist it with
    ``model_dump`` and restore it with ``model_validate`` between matches.
    """

    entries: dict[str, PatternEntry] = Field(default_factory=dict)

    def record(self, signature: SituationSignature, success: bool) -> PatternEntry:
        """Count one observed bluff in a situation.

        Args:
            signature: Situation the bluff was played in
            success: Whether the bluffing side took the round

        Returns:
            The updated entry

        """
        entry = self.entries.setdefault(signature.key(), PatternEntry())
        entry.frequency += 1
        if success:
            entry.successes += 1
        return entry

    def get(self, signature: SituationSignature) -> PatternEntry | None:
        return self.entries.get(signature.key())

    def matching(self, suit: Suit | None = None, rank: Rank | None = None) -> list[PatternEntry]:
        """Entries whose signature shares the given suit or rank."""
        found = []
        for key, entry in self.entries.items():
            entry_suit, entry_rank, _, _ = key.split("|")
            if (suit is not None and entry_suit == suit.value) or (rank is not None and entry_rank == rank.value):
                found.append(entry)
        return found

    def __len__(self) -> int:
        return len(self.entries)
