"""Basic tests for bot functionality."""

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from trickcore.bots import (
    DIFFICULTY_PROFILES,
    PERSONALITY_STRATEGIES,
    HeuristicBot,
    RandomBot,
    classify_move,
    profile_for,
)
from trickcore.bots.adaptive import AdaptationInput, PersonalityStateMachine
from trickcore.errors import EmptyHand, EngineNotInitialized
from trickcore.evaluator import PlayerStatsBook
from trickcore.memory import CrossMatchPatternStore, OpponentProfile, SituationSignature, Trait
from trickcore.models import (
    Card,
    Difficulty,
    GameState,
    MoveCategory,
    Personality,
    RoundRecord,
    Suit,
    legal_cards,
)

c = Card.from_label


def bound_bot(state: GameState, seat: int = 0, **kwargs) -> HeuristicBot:
    kwargs.setdefault("rng", np.random.default_rng(7))
    bot = HeuristicBot(f"player{seat + 1}", **kwargs)
    bot.initialize(state, seat)
    return bot


class TestPreconditions:
    """Test caller errors raised by the engine."""

    def test_move_before_initialize(self):
        """Asking for a move before binding to a seat raises."""
        bot = HeuristicBot("player1")
        with pytest.raises(EngineNotInitialized):
            bot.choose_leading_card()
        with pytest.raises(EngineNotInitialized):
            bot.choose_responding_card(c("A♠"))

    def test_memory_update_before_initialize(self, make_state):
        """Memory updates also need a bound seat."""
        bot = HeuristicBot("player1")
        with pytest.raises(EngineNotInitialized):
            bot.update_memory(make_state([["3♠"], ["4♠"]]))

    def test_empty_hand(self, make_state):
        """A seat without cards cannot move."""
        bot = bound_bot(make_state([[], ["3♠"]]))
        with pytest.raises(EmptyHand):
            bot.choose_leading_card()

    def test_bad_seat(self, make_state):
        """Seats outside the table are rejected."""
        bot = HeuristicBot("player1")
        with pytest.raises(ValueError, match="out of range"):
            bot.initialize(make_state([["3♠"], ["4♠"]]), 2)


class TestRandomBot:
    """Test RandomBot behavior."""

    @given(seed=st.integers(0, 10000))
    @settings(max_examples=30, deadline=None)
    def test_random_bot_plays_legal_cards(self, seed: int) -> None:
        """Random answers always follow suit when possible."""
        rng = np.random.default_rng(seed)
        state = GameState.new_match(2, rng=rng)
        bot = RandomBot("player1", rng=rng)
        bot.initialize(state, 0)

        lead = state.players[1].hand[0]
        index = bot.choose_responding_card(lead)
        assert index in legal_cards(state.players[0].hand, lead.suit)
        assert 0 <= bot.choose_leading_card() < len(state.players[0].hand)


class TestLeadScoring:
    """Test leading-card scores."""

    def test_top_trump_timing(self, make_state):
        """Leading the Ace of trump scores better late than early."""
        early = bound_bot(make_state([["A♥", "3♠"], ["4♠"]], current_round=0))
        late = bound_bot(make_state([["A♥", "3♠"], ["4♠"]], current_round=15))
        diff = late.score_leading_cards()[0] - early.score_leading_cards()[0]
        assert diff == pytest.approx(14.8)

    def test_personalities_differ_on_top_trump(self, make_state):
        """Aggressive wants to lead the Ace of trump far more than Cautious."""
        bot = bound_bot(make_state([["A♥", "3♠"], ["4♠"]]))
        aggressive = bot.score_leading_cards(PERSONALITY_STRATEGIES[Personality.AGGRESSIVE])
        cautious = bot.score_leading_cards(PERSONALITY_STRATEGIES[Personality.CAUTIOUS])
        assert aggressive[0] - cautious[0] == pytest.approx(40.0)
        assert aggressive[1] == pytest.approx(cautious[1])

    @pytest.mark.parametrize("personality", [p for p in Personality if p != Personality.UNPREDICTABLE])
    def test_scores_are_deterministic(self, make_state, personality):
        """Without the Unpredictable personality, scoring uses no randomness."""
        bot = bound_bot(make_state([["A♥", "7♠", "3♦"], ["4♠"]], stake=6), personality=personality)
        assert bot.score_leading_cards() == bot.score_leading_cards()

    def test_unpredictable_is_reproducible_with_a_seed(self, make_state):
        """The same seed gives the same scores."""
        hands = [["A♥", "7♠", "3♦"], ["4♠"]]
        a = bound_bot(make_state(hands), personality=Personality.UNPREDICTABLE, rng=np.random.default_rng(3))
        b = bound_bot(make_state(hands), personality=Personality.UNPREDICTABLE, rng=np.random.default_rng(3))
        assert a.score_leading_cards() == b.score_leading_cards()

    def test_very_hard_discounts_known_bait_cards(self, make_state):
        """Cards resembling successful opponent bluffs score lower."""
        store = CrossMatchPatternStore()
        bot = bound_bot(
            make_state([["3♠", "4♦"], ["5♠"]]),
            difficulty=Difficulty.VERY_HARD,
            pattern_store=store,
        )
        before = bot.score_leading_cards()
        store.record(SituationSignature.of(c("3♣"), 15, 0), True)
        after = bot.score_leading_cards()
        assert before[0] - after[0] == pytest.approx(3.0)
        assert before[1] == pytest.approx(after[1])


class TestResponding:
    """Test responding choices."""

    def test_response_scores_cover_legal_cards_only(self, make_state):
        """A seat holding the lead suit only scores cards of that suit."""
        bot = bound_bot(make_state([["A♠", "3♠", "A♥"], ["K♠"]]))
        scores = bot.score_responding_cards(c("K♠"))
        assert set(scores) == {0, 1}
        assert scores[0] == pytest.approx(16.0)
        assert scores[1] == pytest.approx(0.0)
        assert bot.choose_responding_card(c("K♠")) == 0

    def test_top_trump_answer_depends_on_personality(self, make_state):
        """Aggressive takes the Seven of trump with the Ace, Cautious ducks."""
        hands = [["A♥", "3♥"], ["7♥"]]
        aggressive = bound_bot(make_state(hands), personality=Personality.AGGRESSIVE)
        cautious = bound_bot(make_state(hands), personality=Personality.CAUTIOUS)
        assert aggressive.choose_responding_card(c("7♥")) == 0
        assert cautious.choose_responding_card(c("7♥")) == 1

    def test_concedes_cheap_rounds_sometimes(self, make_state):
        """Cheap rounds are sometimes given up with the cheapest losing card."""
        bot = bound_bot(make_state([["A♠", "3♠", "K♦"], ["4♠"]]), difficulty=Difficulty.EASY)
        conceded = contested = 0
        for _ in range(40):
            index = bot.choose_responding_card(c("4♠"))
            if bot.last_decision.conceded:
                assert index == 1
                conceded += 1
            else:
                assert index == 0
                contested += 1
        assert conceded > 0
        assert contested > 0

    def test_never_concedes_valuable_rounds(self, make_state):
        """A lead worth three points or more is always contested."""
        bot = bound_bot(make_state([["A♠", "3♠"], ["J♠"]]), difficulty=Difficulty.EASY)
        for _ in range(20):
            bot.choose_responding_card(c("J♠"))
            assert not bot.last_decision.conceded

    def test_no_legal_move_falls_back_to_random(self, make_state, monkeypatch):
        """An empty legal set is answered with a flagged random pick."""
        monkeypatch.setattr("trickcore.bots.heuristic_bot.legal_cards", lambda hand, suit: [])
        bot = bound_bot(make_state([["A♠", "3♠"], ["J♠"]]))
        index = bot.choose_responding_card(c("J♠"))
        assert index in (0, 1)
        assert bot.last_decision.fallback

    @given(
        seed=st.integers(0, 10000),
        personality=st.sampled_from(list(Personality)),
        difficulty=st.sampled_from(list(Difficulty)),
    )
    @settings(max_examples=50, deadline=None)
    def test_always_plays_legal_cards(self, seed: int, personality: Personality, difficulty: Difficulty) -> None:
        """Every personality and difficulty follows suit when it can."""
        rng = np.random.default_rng(seed)
        state = GameState.new_match(2, rng=rng)
        bot = HeuristicBot("player1", personality, difficulty, rng)
        bot.initialize(state, 0)

        lead = state.players[1].hand[0]
        assert bot.choose_responding_card(lead) in legal_cards(state.players[0].hand, lead.suit)
        assert 0 <= bot.choose_leading_card() < len(state.players[0].hand)


class TestTeamResponses:
    """Test answers when more than one card is already on the table."""

    def test_partner_winning_gets_cheapest_discard(self, make_state):
        """With the partner's Ace taking the round, the trump is kept back."""
        state = make_state([["5♣"], ["6♣"], ["3♥", "4♦"], ["Q♣"]])
        state.cards_on_table = [c("A♠"), c("3♠")]
        bot = bound_bot(state, seat=2, difficulty=Difficulty.EASY)

        for _ in range(10):
            assert bot.choose_responding_card(c("A♠")) == 1
            assert bot.last_decision.supporting
            assert not bot.last_decision.conceded

    def test_answers_current_winner_not_lead(self, make_state):
        """An opponent's King played after the lead has to be beaten, not the lead."""
        state = make_state([["5♣"], ["6♣"], ["A♠", "4♠"], ["Q♣"]])
        state.cards_on_table = [c("3♠"), c("K♠")]
        bot = bound_bot(state, seat=2)

        scores = bot.score_responding_cards(c("3♠"))
        assert scores[0] == pytest.approx(16.0)
        assert scores[1] == pytest.approx(0.0)
        assert bot.choose_responding_card(c("3♠")) == 0
        assert not bot.last_decision.supporting

    def test_opponent_trump_is_not_answered_in_suit(self, make_state):
        """Following suit under an opponent's trump is scored as a loss."""
        state = make_state([["5♣"], ["6♣"], ["A♠", "4♠"], ["Q♣"]])
        state.cards_on_table = [c("3♠"), c("4♥")]
        bot = bound_bot(state, seat=2)

        scores = bot.score_responding_cards(c("3♠"))
        assert scores[0] < scores[1]


class TestExploration:
    """Test what-if comparison of personalities."""

    def test_hard_bot_explores_when_far_behind(self, make_state):
        """Hard compares personalities when trailing by more than 20."""
        bot = bound_bot(make_state([["A♥", "7♠", "3♦"], ["4♠"]], scores=[0, 30]), difficulty=Difficulty.HARD)
        index = bot.choose_leading_card()
        assert bot.last_decision.explored
        assert 0 <= index < 3

    def test_exploration_values_every_personality(self, make_state):
        """All personalities are compared."""
        bot = bound_bot(make_state([["A♠", "3♠", "A♥"], ["K♠"]]), difficulty=Difficulty.HARD)
        result = bot.explore_personalities(c("K♠"))
        assert set(result.values) == set(Personality)
        assert result.hand_index in (0, 1)
        assert result.values[result.personality] == max(result.values.values())

    def test_medium_bot_does_not_explore(self, make_state):
        """Only Hard and Adaptive explore."""
        bot = bound_bot(make_state([["A♥", "7♠"], ["4♠"]], scores=[0, 30]))
        bot.choose_leading_card()
        assert not bot.last_decision.explored


class TestMemoryUpdates:
    """Test learning from completed rounds."""

    def test_void_inferred_from_off_suit_answer(self, make_state):
        """Failing to follow the lead marks the suit void."""
        state = make_state([["A♠", "3♥"], ["4♣", "5♣"]])
        bot = bound_bot(state)
        state.round_history.append(RoundRecord(0, ((0, c("K♠")), (1, c("3♦"))), winner_seat=0))
        bot.update_memory(state)

        assert bot.memory.void_suits == {Suit.SPADES}
        assert bot.memory.stats.total_cards_played == 1
        assert bot.memory.played_cards == [c("K♠"), c("3♦")]

        # Rounds already seen are not observed twice
        bot.update_memory(state)
        assert bot.memory.stats.total_cards_played == 1

    def test_opponent_bluff_is_recorded(self, make_state):
        """A cheap lead on a high stake feeds the pattern store."""
        state = make_state([["A♠"], ["5♣"]])
        bot = bound_bot(state)
        state.round_history.append(RoundRecord(1, ((1, c("3♣")), (0, c("4♣"))), winner_seat=0, stake_at_time=15))
        bot.update_memory(state)

        entry = bot.pattern_store.get(SituationSignature.of(c("3♣"), 15, 0))
        assert entry is not None
        assert entry.frequency == 1
        assert entry.successes == 0
        assert bot.memory.deception.recent_opponent_baits() == 1
        assert len(bot.memory.responses) == 1
        assert not bot.memory.void_suits

    def test_very_hard_evolves_traits(self, make_state):
        """Own outcomes train the matching trait."""
        bot = bound_bot(make_state([["A♠"], ["5♣"]]), difficulty=Difficulty.VERY_HARD)
        category = bot.record_outcome(c("3♠"), 15, True)
        assert category == MoveCategory.BLUFF
        assert bot.memory.traits[Trait.DECEPTION_TENDENCY] == 55
        assert bot.memory.deception.bait_attempts == 1

    def test_classify_move(self):
        """Bluffs, aggressive and defensive plays are told apart."""
        assert classify_move(c("3♠"), 15, Suit.HEARTS) == MoveCategory.BLUFF
        assert classify_move(c("A♠"), 0, Suit.HEARTS) == MoveCategory.AGGRESSIVE
        assert classify_move(c("3♥"), 0, Suit.HEARTS) == MoveCategory.AGGRESSIVE
        assert classify_move(c("J♠"), 0, Suit.HEARTS) == MoveCategory.DEFENSIVE


class TestAdaptation:
    """Test personality re-selection."""

    def test_only_adaptive_changes_personality(self, make_state):
        """Other difficulties keep their personality."""
        bot = bound_bot(make_state([["A♠"], ["5♣"]], scores=[40, 0]), personality=Personality.GREEDY)
        assert bot.adapt_personality() == Personality.GREEDY

    def test_comfortable_lead_turns_cautious(self, make_state):
        """A lead over 30 points switches to Cautious."""
        bot = bound_bot(make_state([["A♠"], ["5♣"]], scores=[40, 0]), difficulty=Difficulty.ADAPTIVE)
        assert bot.adapt_personality() == Personality.CAUTIOUS
        assert bot.personality == Personality.CAUTIOUS
        assert len(bot.state_machine.transitions) == 1

    def test_close_game_is_analytical(self, rng):
        """A close score stays Analytical."""
        machine = PersonalityStateMachine(Personality.GREEDY)
        signals = AdaptationInput(0, 3, 0.5, 0.0, 0.0)
        assert machine.step(signals, rng) == Personality.ANALYTICAL

    def test_desperate_endgame_is_unpredictable(self, rng):
        """Far behind with few cards left goes Unpredictable."""
        machine = PersonalityStateMachine()
        signals = AdaptationInput(-60, 3, 0.5, 0.0, 0.0)
        assert machine.step(signals, rng) == Personality.UNPREDICTABLE

    def test_large_deficit_goes_on_the_attack(self, rng):
        """Behind by more than 30 picks Aggressive or TrapSetter."""
        machine = PersonalityStateMachine()
        signals = AdaptationInput(-40, 6, 0.5, 0.0, 0.0)
        for _ in range(10):
            assert machine.step(signals, rng) in (Personality.AGGRESSIVE, Personality.TRAP_SETTER)

    def test_counters_predictable_opponent(self, rng):
        """A predictable opponent's dominant tendency is countered."""
        machine = PersonalityStateMachine()
        aggressive_opponent = AdaptationInput(-5, 6, 0.8, 0.6, 0.0)
        assert machine.step(aggressive_opponent, rng) == Personality.AGGRESSIVE
        trump_saver = AdaptationInput(0, 6, 0.8, 0.0, 0.6)
        assert machine.step(trump_saver, rng) == Personality.TRAP_SETTER
        assert [t.target for t in machine.transitions] == [Personality.AGGRESSIVE, Personality.TRAP_SETTER]


class TestProfilesAndStats:
    """Test difficulty profiles, opponent profiles and stats queries."""

    def test_difficulty_table(self):
        """Every difficulty has a profile."""
        assert set(DIFFICULTY_PROFILES) == set(Difficulty)
        assert profile_for(Difficulty.MEDIUM, -50) == DIFFICULTY_PROFILES[Difficulty.MEDIUM]

    def test_adaptive_profile_follows_score(self):
        """Adaptive contests more rounds when behind."""
        assert profile_for(Difficulty.ADAPTIVE, -30).target_win_rate == 0.7
        assert profile_for(Difficulty.ADAPTIVE, 30).target_win_rate == 0.5
        assert profile_for(Difficulty.ADAPTIVE, 0) == DIFFICULTY_PROFILES[Difficulty.ADAPTIVE]

    def test_every_personality_has_a_strategy(self):
        """The strategy table covers every personality."""
        assert set(PERSONALITY_STRATEGIES) == set(Personality)

    def test_update_opponent_profile(self, make_state):
        """The attached profile is updated at match end."""
        profile = OpponentProfile(opponent_id="player2")
        bot = bound_bot(make_state([["A♠"], ["5♣"]]), profile=profile)
        assert bot.update_opponent_profile(won=True, score=80) is profile
        assert profile.games_played == 1
        assert bound_bot(make_state([["A♠"], ["5♣"]])).update_opponent_profile(False, 10) is None

    def test_get_stats(self, make_state):
        """Stats queries go to the attached book."""
        book = PlayerStatsBook()
        book.record("player2", 8, True)
        bot = bound_bot(make_state([["A♠"], ["5♣"]]), stats_book=book)
        stats = bot.get_stats("player2")
        assert stats is not None
        assert stats.total_moves == 1
        assert stats.trump_usage_rate == 1.0
        assert bot.get_stats("player9") is None
        assert HeuristicBot("player1").get_stats("player2") is None
