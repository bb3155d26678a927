"""Player model."""

from dataclasses import dataclass, field

from trickcore.models.card import Card


@dataclass
class Player:
    """Represents one seat at the table.

    Attributes:
        id: Unique player identifier
        seat: Seat index, which also fixes the team by parity
        hand: Cards currently held, in deal order
        collected_cards: Cards won in earlier rounds
        score: Points collected so far

    """

    id: str
    seat: int = 0
    hand: list[Card] = field(default_factory=list)
    collected_cards: list[Card] = field(default_factory=list)
    score: int = 0

    @property
    def team_id(self) -> str:
        """Team of this seat: even seats are team1, odd seats team2."""
        return team_for_seat(self.seat)

    def play_card(self, index: int) -> Card:
        """Remove and return the card at a hand index."""
        if not 0 <= index < len(self.hand):
            msg = f"Hand index {index} out of range for {len(self.hand)} cards"
            raise ValueError(msg)
        return self.hand.pop(index)

    def add_card(self, card: Card) -> None:
        """Add a drawn card to the hand."""
        self.hand.append(card)

    def collect(self, cards: list[Card], points: int) -> None:
        """Take the cards of a won round and its points."""
        self.collected_cards.extend(cards)
        self.score += points

    def __str__(self) -> str:
        """Return string representation."""
        return f"{self.id} (seat {self.seat}) - Score: {self.score}"


def team_for_seat(seat: int) -> str:
    """Team identifier for a seat."""
    return "team1" if seat % 2 == 0 else "team2"
