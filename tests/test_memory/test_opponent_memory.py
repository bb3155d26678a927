"""Tests for the decaying opponent memory."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from trickcore.memory import ObservedAction, OpponentMemory, compute_predictability
from trickcore.models import Card, Suit, generate_full_deck

c = Card.from_label


def action(label: str, stake: int = 0, leader: bool = True, trump: Suit = Suit.HEARTS, lead_suit: Suit | None = None):
    card = c(label)
    return ObservedAction(
        card=card,
        round_stake=stake,
        was_leader=leader,
        trump_played=card.is_trump(trump),
        round_number=1,
        lead_suit=None if leader else (lead_suit or card.suit),
    )


class TestBehaviorMetrics:
    """Test decay, increments and clamping."""

    def test_decay_applies_before_increment(self):
        """An action with no increments only decays the metrics."""
        memory = OpponentMemory(decay_factor=0.95)
        memory.metrics.plays_aggressively = 0.5
        memory.observe(action("3♠", leader=False))
        assert memory.metrics.plays_aggressively == pytest.approx(0.475)

    def test_high_lead_at_low_stake_is_aggressive(self):
        """Leading a valuable card cheaply raises aggression and lowers risk avoidance."""
        memory = OpponentMemory(decay_factor=0.95)
        memory.observe(action("A♠"))
        assert memory.metrics.plays_aggressively == pytest.approx(0.095)
        assert memory.metrics.avoids_risk == pytest.approx(-0.095)

    def test_trump_at_low_stake_spends_trumps(self):
        """Playing trump on a small stake lowers saves_trumps twice as much."""
        memory = OpponentMemory(decay_factor=0.95)
        memory.observe(action("3♥", leader=False, lead_suit=Suit.SPADES))
        assert memory.metrics.saves_trumps == pytest.approx(-0.19)

    def test_discarding_instead_of_trumping_saves_trumps(self):
        """Throwing an off-suit card raises saves_trumps."""
        memory = OpponentMemory(decay_factor=0.95)
        memory.observe(action("3♦", leader=False, lead_suit=Suit.SPADES))
        assert memory.metrics.saves_trumps == pytest.approx(0.095)

    def test_metrics_are_clamped(self):
        """Metrics never leave [-1, 1]."""
        memory = OpponentMemory(decay_factor=0.95)
        memory.metrics.avoids_risk = 1.0
        memory.observe(action("3♠", stake=15))
        assert memory.metrics.avoids_risk == 1.0

    @given(
        cards=st.lists(st.sampled_from(generate_full_deck()), min_size=1, max_size=40),
        stakes=st.lists(st.integers(0, 30), min_size=40, max_size=40),
        leaders=st.lists(st.booleans(), min_size=40, max_size=40),
    )
    @settings(max_examples=50, deadline=None)
    def test_metrics_stay_bounded(self, cards: list[Card], stakes: list[int], leaders: list[bool]) -> None:
        """Any sequence of actions keeps every metric in range."""
        memory = OpponentMemory()
        for card, stake, leader in zip(cards, stakes, leaders):
            memory.observe(action(card.label(), stake=stake, leader=leader, lead_suit=Suit.SPADES))
            m = memory.metrics
            for value in (m.saves_trumps, m.plays_aggressively, m.avoids_risk):
                assert -1.0 <= value <= 1.0
            assert 0.0 <= m.predictability <= 1.0
        assert len(memory.recent_actions) <= 10


class TestRecentActions:
    """Test the bounded action history."""

    def test_ring_buffer_evicts_oldest(self):
        """Only the last ten actions are kept."""
        memory = OpponentMemory(recent_limit=10)
        labels = ["3♠", "4♠", "5♠", "6♠", "Q♠", "J♠", "K♠", "7♠", "A♠", "3♦", "4♦", "5♦"]
        for label in labels:
            memory.observe(action(label))
        kept = [a.card.label() for a in memory.recent_actions]
        assert kept == labels[-10:]
        assert memory.stats.total_cards_played == 12

    def test_play_statistics(self):
        """Trumps, high-value plays and suit leads are counted."""
        memory = OpponentMemory()
        memory.observe(action("A♥"))
        memory.observe(action("3♠"))
        memory.observe(action("7♠", leader=False))
        assert memory.stats.trumps_played == 1
        assert memory.stats.high_value_plays == 2
        assert memory.stats.suit_leads[Suit.HEARTS] == 1
        assert memory.stats.suit_leads[Suit.SPADES] == 1


class TestPredictability:
    """Test the predictability score."""

    def test_needs_three_actions(self):
        """Fewer than three actions give no score."""
        assert compute_predictability([action("3♠"), action("4♠")]) is None

    def test_repetitive_opponent(self):
        """Same suit, same stake level and same value class is fully predictable."""
        actions = [action("3♠"), action("4♠"), action("5♠")]
        assert compute_predictability(actions) == pytest.approx(1.0)

    def test_erratic_opponent(self):
        """Behavior flipping with every stake change scores zero."""
        actions = [
            action("A♠", stake=0, leader=False),
            action("3♦", stake=20, leader=False),
            action("A♣", stake=0, leader=False),
            action("4♦", stake=20, leader=False),
        ]
        assert compute_predictability(actions) == pytest.approx(0.0)

    def test_memory_updates_predictability(self):
        """The stored score changes once three actions are seen."""
        memory = OpponentMemory()
        memory.observe(action("3♠"))
        memory.observe(action("4♠"))
        assert memory.metrics.predictability == 0.5
        memory.observe(action("5♠"))
        assert memory.metrics.predictability == pytest.approx(1.0)


class TestVoidSuits:
    """Test void-suit inference."""

    def test_void_is_monotonic(self):
        """A suit marked void stays void."""
        memory = OpponentMemory()
        assert memory.may_hold(Suit.CLUBS)
        memory.mark_void(Suit.CLUBS)
        memory.mark_void(Suit.CLUBS)
        assert not memory.may_hold(Suit.CLUBS)
        assert memory.void_suits == {Suit.CLUBS}
