"""Shared fixtures for the test suite."""

import numpy as np
import pytest

from trickcore.models import Card, GameState, Player, Suit


@pytest.fixture
def rng():
    """Seeded random source."""
    return np.random.default_rng(1234)


@pytest.fixture
def make_state():
    """Build a GameState from hand labels such as ["A♠", "3♥"]."""

    def _make(
        hands: list[list[str]],
        trump: Suit = Suit.HEARTS,
        scores: list[int] | None = None,
        current_round: int = 0,
        total_rounds: int = 18,
        stake: int = 0,
    ) -> GameState:
        scores = scores or [0] * len(hands)
        players = [
            Player(
                id=f"player{seat + 1}",
                seat=seat,
                hand=[Card.from_label(label) for label in hand],
                score=scores[seat],
            )
            for seat, hand in enumerate(hands)
        ]
        return GameState(
            trump_suit=trump,
            players=players,
            current_round=current_round,
            total_rounds=total_rounds,
            round_stake=stake,
        )

    return _make
