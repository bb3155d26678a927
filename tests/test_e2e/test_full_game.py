"""End-to-end tests for complete matches."""

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from trickcore.bots import BaseBot, HeuristicBot, RandomBot
from trickcore.constants import TOTAL_DECK_POINTS
from trickcore.memory import OpponentProfile
from trickcore.models import Difficulty, Personality
from trickcore.services.match_runner import MatchRunner


def heuristic_table(count: int, seed: int, difficulty: Difficulty = Difficulty.MEDIUM) -> list[BaseBot]:
    rng = np.random.default_rng(seed)
    personalities = list(Personality)
    return [
        HeuristicBot(f"player{i + 1}", personalities[i % len(personalities)], difficulty, rng)
        for i in range(count)
    ]


class TestTwoPlayerMatch:
    """Tests for a full two-player match."""

    def test_match_plays_every_card(self):
        """Eighteen rounds are played and the whole deck is scored."""
        runner = MatchRunner(heuristic_table(2, seed=1), rng=np.random.default_rng(1))
        summary = runner.play_match()

        assert summary.rounds_played == 18
        assert len(summary.results) == 18
        assert sum(summary.scores.values()) == TOTAL_DECK_POINTS
        assert sum(summary.team_scores.values()) == TOTAL_DECK_POINTS
        assert all(not p.hand for p in runner.state.players)
        assert not runner.state.draw_pile
        assert len(runner.state.round_history) == 18

    def test_winner_matches_scores(self):
        """The winning team has the higher score, or there is a tie."""
        summary = MatchRunner(heuristic_table(2, seed=2), rng=np.random.default_rng(2)).play_match()
        team1, team2 = summary.team_scores["team1"], summary.team_scores["team2"]
        if team1 == team2:
            assert summary.winning_team is None
        else:
            assert summary.winning_team == ("team1" if team1 > team2 else "team2")

    def test_stats_cover_every_move(self):
        """The evaluator rated all eighteen moves of each player."""
        bots = heuristic_table(2, seed=3)
        summary = MatchRunner(bots, rng=np.random.default_rng(3)).play_match()

        for player_id, stats in summary.stats.items():
            assert stats is not None
            assert stats.total_moves == 18
            assert bots[0].get_stats(player_id) == stats

    def test_same_seed_same_match(self):
        """Seeding every random source reproduces the match."""
        first = MatchRunner(heuristic_table(2, seed=4), rng=np.random.default_rng(4)).play_match()
        second = MatchRunner(heuristic_table(2, seed=4), rng=np.random.default_rng(4)).play_match()
        assert first.scores == second.scores
        assert [r.winning_player_id for r in first.results] == [r.winning_player_id for r in second.results]

    def test_heuristic_against_random(self):
        """Mixed tables play to completion."""
        rng = np.random.default_rng(5)
        bots: list[BaseBot] = [HeuristicBot("player1", rng=rng), RandomBot("player2", rng=rng)]
        summary = MatchRunner(bots, rng=rng).play_match()
        assert sum(summary.scores.values()) == TOTAL_DECK_POINTS

    @given(seed=st.integers(0, 10000), difficulty=st.sampled_from(list(Difficulty)))
    @settings(max_examples=10, deadline=None)
    def test_any_difficulty_completes(self, seed: int, difficulty: Difficulty) -> None:
        """Every difficulty finishes a match with all points accounted for."""
        summary = MatchRunner(heuristic_table(2, seed, difficulty), rng=np.random.default_rng(seed)).play_match()
        assert summary.rounds_played == 18
        assert sum(summary.scores.values()) == TOTAL_DECK_POINTS


class TestTeamMatches:
    """Tests for four- and six-player matches."""

    @pytest.mark.parametrize(("count", "rounds"), [(4, 9), (6, 6)])
    def test_team_match_completes(self, count: int, rounds: int):
        """Team matches deal the whole deck and score it, plus any first-round bonus."""
        runner = MatchRunner(heuristic_table(count, seed=count), rng=np.random.default_rng(count))
        summary = runner.play_match()

        assert summary.rounds_played == rounds
        bonus = sum(r.bonus_points for r in summary.results)
        assert sum(summary.team_scores.values()) == TOTAL_DECK_POINTS + bonus
        assert all(r.bonus_points == 0 for r in summary.results[1:])
        assert set(summary.team_scores) == {"team1", "team2"}

    def test_seats_alternate_teams(self):
        """Even seats play for team1, odd seats for team2."""
        runner = MatchRunner(heuristic_table(4, seed=9), rng=np.random.default_rng(9))
        assert [p.team_id for p in runner.state.players] == ["team1", "team2", "team1", "team2"]


class TestAdaptiveAndProfiles:
    """Tests for per-round adaptation and match-end profile updates."""

    def test_adaptive_bot_plays_a_match(self):
        """Adaptive personalities are re-selected as the match goes."""
        rng = np.random.default_rng(11)
        adaptive = HeuristicBot("player1", difficulty=Difficulty.ADAPTIVE, rng=rng)
        opponent = HeuristicBot("player2", Personality.AGGRESSIVE, Difficulty.HARD, rng)
        MatchRunner([adaptive, opponent], rng=rng).play_match()

        for transition in adaptive.state_machine.transitions:
            assert transition.source != transition.target
        assert adaptive.personality == adaptive.state_machine.state

    def test_profile_updated_at_match_end(self):
        """An attached opponent profile records the finished match."""
        rng = np.random.default_rng(12)
        profile = OpponentProfile(opponent_id="player2")
        bots: list[BaseBot] = [
            HeuristicBot("player1", rng=rng, profile=profile),
            RandomBot("player2", rng=rng),
        ]
        summary = MatchRunner(bots, rng=rng).play_match()

        assert profile.games_played == 1
        assert profile.average_score == summary.scores["player2"]
        assert profile.wins == (1 if summary.winning_team == "team2" else 0)
        assert len(profile.behavior_history) == 1

    def test_memory_tracks_every_opponent_card(self):
        """The engine saw each of the opponent's eighteen cards."""
        rng = np.random.default_rng(13)
        bot = HeuristicBot("player1", difficulty=Difficulty.VERY_HARD, rng=rng)
        MatchRunner([bot, RandomBot("player2", rng=rng)], rng=rng).play_match()

        assert bot.memory.stats.total_cards_played == 18
        assert len(bot.memory.played_cards) == 36
        assert len(bot.memory.recent_actions) == 10
        assert len(bot.memory.traits.history) == 10
