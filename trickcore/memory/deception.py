"""Bait bookkeeping for deception estimates."""

from dataclasses import dataclass, field

from trickcore.memory.ring_buffer import RingBuffer


@dataclass
class DeceptionTracker:
    """Counts the engine's own baits and remembers the opponent's recent ones.

    Attributes:
        bait_attempts: Baits the engine has tried
        successful_baits: Baits that won the round
        opponent_baits: Whether each recent opponent lead was a bait, oldest first

    """

    capacity: int = 10
    bait_attempts: int = 0
    successful_baits: int = 0
    opponent_baits: RingBuffer[bool] = field(init=False)

    def __post_init__(self) -> None:
        self.opponent_baits = RingBuffer(self.capacity)

    def record_bait(self, success: bool) -> None:
        """Count one of the engine's own baits."""
        self.bait_attempts += 1
        if success:
            self.successful_baits += 1

    def record_opponent_lead(self, was_bait: bool) -> None:
        self.opponent_baits.append(was_bait)

    def recent_opponent_baits(self, window: int = 3) -> int:
        """Number of baits among the opponent's last `window` leads."""
        return sum(self.opponent_baits.latest(window))

    @property
    def bait_success_rate(self) -> float:
        return self.successful_baits / self.bait_attempts if self.bait_attempts else 0.0
