"""Card model and winner-resolution rules."""

from dataclasses import dataclass
from enum import IntEnum

from trickcore.models.enums import Rank, ResolutionRule, Suit


class Ordering(IntEnum):
    """Result of comparing two ranks."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


POINT_VALUES: dict[Rank, int] = {
    Rank.ACE: 11,
    Rank.SEVEN: 10,
    Rank.KING: 4,
    Rank.JACK: 3,
    Rank.QUEEN: 2,
    Rank.SIX: 0,
    Rank.FIVE: 0,
    Rank.FOUR: 0,
    Rank.THREE: 0,
}

# Strongest first. The Seven outranks the court cards.
RANK_ORDER: list[Rank] = [
    Rank.ACE,
    Rank.SEVEN,
    Rank.KING,
    Rank.JACK,
    Rank.QUEEN,
    Rank.SIX,
    Rank.FIVE,
    Rank.FOUR,
    Rank.THREE,
]

RANK_STRENGTH: dict[Rank, int] = {rank: len(RANK_ORDER) - i for i, rank in enumerate(RANK_ORDER)}

SUIT_SYMBOLS: dict[Suit, str] = {
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
}


def point_value(rank: Rank) -> int:
    """Return the fixed point value of a rank."""
    return POINT_VALUES[rank]


def compare_rank(a: Rank, b: Rank) -> Ordering:
    """Compare two ranks using the fixed rank order.

    Args:
        a: First rank
        b: Second rank

    Returns:
        GREATER if a outranks b, LESS if b outranks a, EQUAL if they match

    """
    diff = RANK_STRENGTH[a] - RANK_STRENGTH[b]
    if diff > 0:
        return Ordering.GREATER
    if diff < 0:
        return Ordering.LESS
    return Ordering.EQUAL


@dataclass(frozen=True)
class Card:
    """A single playing card.

    Attributes:
        suit: Card suit
        rank: Card rank; the point value is always derived from it

    """

    suit: Suit
    rank: Rank

    @property
    def point_value(self) -> int:
        """Points this card is worth when captured."""
        return POINT_VALUES[self.rank]

    @property
    def strength(self) -> int:
        """Position in the rank order, higher is stronger."""
        return RANK_STRENGTH[self.rank]

    def is_trump(self, trump_suit: Suit) -> bool:
        """Check if card belongs to the trump suit."""
        return self.suit == trump_suit

    def is_top_trump(self, trump_suit: Suit) -> bool:
        """Check if card is the Ace or Seven of trump."""
        return self.suit == trump_suit and self.rank in (Rank.ACE, Rank.SEVEN)

    def label(self) -> str:
        """Short label such as 7♠."""
        return f"{self.rank.value}{SUIT_SYMBOLS[self.suit]}"

    @classmethod
    def from_label(cls, text: str) -> "Card":
        """Parse a short label such as 7♠ or A♥."""
        symbol, rank = text[-1], text[:-1]
        for suit, suit_symbol in SUIT_SYMBOLS.items():
            if suit_symbol == symbol:
                return cls(suit, Rank(rank))
        msg = f"Unknown card label {text!r}"
        raise ValueError(msg)

    def __str__(self) -> str:
        """Return string representation."""
        return f"{self.rank.value} of {self.suit.value.capitalize()}"


def generate_full_deck() -> list[Card]:
    """Build one card per (suit, rank) pair, 36 cards in total."""
    return [Card(suit, rank) for suit in Suit for rank in RANK_ORDER]


def is_top_trump_pair(a: Card, b: Card, trump_suit: Suit) -> bool:
    """Check if two cards are the Ace and the Seven of trump."""
    return a.is_top_trump(trump_suit) and b.is_top_trump(trump_suit) and a.rank != b.rank


def outranks(challenger: Card, incumbent: Card, lead_suit: Suit, trump_suit: Suit) -> bool:
    """Check if a later card takes the round from the card currently winning it.

    Same suit compares by rank order. A trump beats any non-trump. Between
    two unrelated non-trump suits only a card following the lead suit can
    win, so an off-suit challenger never takes the round.

    Args:
        challenger: Card played later
        incumbent: Card currently winning
        lead_suit: Suit of the first card of the round
        trump_suit: Trump suit for the match

    Returns:
        True if the challenger wins

    """
    if challenger.suit == incumbent.suit:
        return challenger.strength > incumbent.strength
    if challenger.suit == trump_suit:
        return True
    if incumbent.suit == trump_suit:
        return False
    return challenger.suit == lead_suit


def resolve_pair(first: Card, second: Card, trump_suit: Suit) -> tuple[int, ResolutionRule]:
    """Determine which of two cards wins.

    Resolution order:
    1. Ace and Seven of trump together: the Ace wins
    2. Same suit: higher rank wins
    3. Exactly one trump: the trump wins
    4. Different non-trump suits: the first-played card wins

    Rule 1 gives the same winner as rule 2 and is kept so the evaluator can
    report it separately.

    Args:
        first: Card played first
        second: Card played second
        trump_suit: Trump suit for the match

    Returns:
        Tuple of (winning index 0 or 1, rule that decided it)

    """
    if is_top_trump_pair(first, second, trump_suit):
        return (0 if first.rank == Rank.ACE else 1), ResolutionRule.ACE_OVER_SEVEN

    second_wins = outranks(second, first, first.suit, trump_suit)
    winner = 1 if second_wins else 0

    if first.suit == second.suit:
        return winner, ResolutionRule.HIGHER_RANK
    if first.suit == trump_suit or second.suit == trump_suit:
        return winner, ResolutionRule.TRUMP
    return winner, ResolutionRule.FIRST_PLAYED


def best_card(cards: list[Card], lead_suit: Suit, trump_suit: Suit) -> int:
    """Find the card that beats every other card in a sequence.

    Args:
        cards: Cards in the order they were played
        lead_suit: Suit of the first card of the round
        trump_suit: Trump suit for the match

    Returns:
        Index of the strongest card

    """
    if not cards:
        msg = "Cannot pick the best of zero cards"
        raise ValueError(msg)

    best_index = 0
    for i, card in enumerate(cards[1:], start=1):
        if outranks(card, cards[best_index], lead_suit, trump_suit):
            best_index = i
    return best_index


def legal_cards(hand: list[Card], lead_suit: Suit) -> list[int]:
    """Return hand indices that may be played in response to a lead.

    A seat holding the lead suit must follow it; otherwise any card is legal.
    """
    following = [i for i, card in enumerate(hand) if card.suit == lead_suit]
    if following:
        return following
    return list(range(len(hand)))
