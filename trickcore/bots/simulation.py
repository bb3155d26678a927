"""What-if valuation of candidate moves."""

import numpy as np

from trickcore.models.card import Card, outranks
from trickcore.models.enums import Suit


def estimate_move_value(lead_card: Card, answer: Card, trump_suit: Suit, stake: int) -> float:
    """Value of answering a lead with a card, from the answering side.

    Winning collects the lead and the stake at a small cost for spending a
    valuable card; losing gives the card's points away.
    """
    if outranks(answer, lead_card, lead_card.suit, trump_suit):
        return lead_card.point_value + stake - 0.5 * answer.point_value
    return -float(answer.point_value)


def sample_lead_outcomes(
    card: Card,
    hand: list[Card],
    unseen: list[Card],
    trump_suit: Suit,
    stake: int,
    rng: np.random.Generator,
    samples: int = 100,
) -> float:
    """Average outcome of leading a card against randomly drawn answers.

    Answers are drawn uniformly from cards the leader has not seen. A won
    round is worth the points on the table, a lost one costs them. Holding
    more cards of the led suit adds follow-up potential.

    Args:
        card: Card to lead
        hand: Leader's whole hand
        unseen: Cards the opponent might hold
        trump_suit: Trump suit for the match
        stake: Stake carried into the round
        rng: Shared random source
        samples: Number of simulated answers

    Returns:
        Mean simulated value

    """
    follow_up = 2.0 * sum(1 for c in hand if c.suit == card.suit and c != card)
    if not unseen or samples <= 0:
        return card.point_value + stake + follow_up

    picks = rng.integers(len(unseen), size=samples)
    total = 0.0
    for pick in picks:
        answer = unseen[int(pick)]
        at_stake = card.point_value + answer.point_value + stake
        total += -at_stake if outranks(answer, card, card.suit, trump_suit) else at_stake
    return total / samples + follow_up
