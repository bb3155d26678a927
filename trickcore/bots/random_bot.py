"""Random bot that makes random legal moves."""

from trickcore.bots.base_bot import BaseBot
from trickcore.models.card import Card, legal_cards


class RandomBot(BaseBot):
    """Bot that plays a uniformly random legal card.

    This serves as a baseline for evaluating the heuristic engine
    and provides a simple opponent for testing.
    """

    def choose_leading_card(self) -> int:
        """Pick any card in the hand."""
        hand = self._hand()
        return int(self.rng.integers(len(hand)))

    def choose_responding_card(self, lead_card: Card) -> int:
        """Pick a random card among those that follow suit when possible."""
        playable = legal_cards(self._hand(), lead_card.suit)
        return playable[int(self.rng.integers(len(playable)))]
