"""Deck model for shuffling, dealing and drawing cards."""

import numpy as np

from trickcore.models.card import Card, generate_full_deck


class Deck:
    """
    Represents the 36-card deck.

    The deck holds one card for each of the 4 suits and 9 ranks. The top of
    the deck is the end of the card list, so drawing pops from the end.
    """

    def __init__(self, rng: np.random.Generator | None = None) -> None:
        """Initialize an empty deck.

        Args:
            rng: Random source used for shuffling

        """
        self.cards: list[Card] = []
        self.rng = rng if rng is not None else np.random.default_rng()

    def fill(self) -> None:
        """Fill the deck with all 36 cards."""
        self.cards = generate_full_deck()

    def shuffle(self) -> None:
        """Fill and shuffle the deck."""
        self.fill()
        order = self.rng.permutation(len(self.cards))
        self.cards = [self.cards[i] for i in order]

    def deal(self, num_players: int, cards_per_player: int) -> list[list[Card]]:
        """
        Deal cards to players from the top of the deck.

        Args:
            num_players: Number of players to deal to
            cards_per_player: Number of cards per player

        Returns:
            List of hands, one per seat

        """
        if not self.cards:
            self.shuffle()

        needed = num_players * cards_per_player
        if needed > len(self.cards):
            msg = f"Cannot deal {needed} cards from a deck of {len(self.cards)}"
            raise ValueError(msg)

        hands: list[list[Card]] = [[] for _ in range(num_players)]
        for _ in range(cards_per_player):
            for hand in hands:
                hand.append(self.cards.pop())
        return hands

    def draw(self) -> Card | None:
        """Take the top card, or None when the deck is exhausted."""
        if not self.cards:
            return None
        return self.cards.pop()

    def __len__(self) -> int:
        return len(self.cards)
