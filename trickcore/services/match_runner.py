"""Match runner playing the caller role around the engine and the evaluator."""

from dataclasses import dataclass, field

import numpy as np

from trickcore.bots.base_bot import BaseBot
from trickcore.bots.heuristic_bot import HeuristicBot
from trickcore.config import settings
from trickcore.constants import TOTAL_DECK_POINTS
from trickcore.evaluator.round_evaluator import RoundEvaluator
from trickcore.models.card import Card
from trickcore.models.enums import Difficulty
from trickcore.models.game_state import GameState, RoundRecord
from trickcore.models.trick import PlayerMove, PlayerStats, RoundResult
from trickcore.services.log_service import LogService


@dataclass
class MatchSummary:
    """Final standing of a played match.

    Attributes:
        scores: Final score per player ID
        team_scores: Final score per team
        winning_team: Team with the higher score, None on a tie
        rounds_played: Rounds completed
        results: Evaluator result of every round
        stats: Evaluator statistics per player ID

    """

    scores: dict[str, int]
    team_scores: dict[str, int]
    winning_team: str | None
    rounds_played: int
    results: list[RoundResult] = field(default_factory=list)
    stats: dict[str, PlayerStats | None] = field(default_factory=dict)


class MatchRunner:
    """Plays a match among bots, one per seat.

    Each round the leading seat's bot opens, every other seat answers the
    lead in seat order, the evaluator scores the round and the runner
    applies the result to the GameState: the winner collects the cards and
    points, draws first and leads next. Bots then update their memory, and
    Adaptive engines re-select their personality.
    """

    def __init__(
        self,
        bots: list[BaseBot],
        rng: np.random.Generator | None = None,
        game_state: GameState | None = None,
        evaluator: RoundEvaluator | None = None,
    ) -> None:
        """Initialize the runner and bind every bot to its seat.

        Args:
            bots: One bot per seat, in seat order
            rng: Random source for dealing, defaults to one seeded from settings
            game_state: Prepared state, a freshly dealt match by default
            evaluator: Round evaluator, a new one for the match by default

        """
        self.bots = bots
        self.rng = rng if rng is not None else np.random.default_rng(settings.rng_seed)
        self.state = game_state or GameState.new_match(
            player_count=len(bots),
            rng=self.rng,
            player_ids=[bot.player_id for bot in bots],
        )
        if self.state.player_count != len(bots):
            msg = f"Got {len(bots)} bots for {self.state.player_count} seats"
            raise ValueError(msg)

        self.evaluator = evaluator or RoundEvaluator(
            self.state.trump_suit,
            self.state.total_rounds,
            self.state.player_count,
        )
        self.results: list[RoundResult] = []
        self._log = LogService(__name__)

        for seat, bot in enumerate(bots):
            if isinstance(bot, HeuristicBot) and bot.stats_book is None:
                bot.stats_book = self.evaluator.stats
            bot.initialize(self.state, seat)

    def play_round(self) -> RoundResult:
        """Play, evaluate and apply one round.

        Returns:
            The evaluator's result for the round

        """
        state = self.state
        count = state.player_count
        leader = state.current_player_seat

        lead_index = self.bots[leader].choose_leading_card()
        lead_card = state.players[leader].play_card(lead_index)
        state.cards_on_table.append(lead_card)
        plays: list[tuple[int, Card]] = [(leader, lead_card)]

        for offset in range(1, count):
            seat = (leader + offset) % count
            index = self.bots[seat].choose_responding_card(lead_card)
            card = state.players[seat].play_card(index)
            state.cards_on_table.append(card)
            plays.append((seat, card))

        moves = [PlayerMove(state.players[s].id, c, state.players[s].team_id) for s, c in plays]
        result = self.evaluator.evaluate_round(moves, state.round_stake)
        self._apply(result, leader, plays)
        self.results.append(result)

        for bot in self.bots:
            bot.update_memory(state)
        for bot in self.bots:
            if isinstance(bot, HeuristicBot) and bot.difficulty == Difficulty.ADAPTIVE:
                bot.adapt_personality()

        return result

    def _apply(self, result: RoundResult, leader: int, plays: list[tuple[int, Card]]) -> None:
        state = self.state
        winner = state.get_player(result.winning_player_id)
        if winner is None:
            msg = f"Evaluator named unknown player {result.winning_player_id}"
            raise ValueError(msg)

        winner.collect([card for _, card in plays], result.points_earned)
        state.round_history.append(RoundRecord(leader, tuple(plays), winner.seat, state.round_stake))
        state.cards_on_table = []
        state.round_stake = 0
        state.current_round += 1
        state.current_player_seat = winner.seat

        # Winner draws first, then the others in seat order
        count = state.player_count
        for offset in range(count):
            if not state.draw_pile:
                break
            state.players[(winner.seat + offset) % count].add_card(state.draw_pile.pop())

    def play_match(self) -> MatchSummary:
        """Play rounds until the match is complete.

        Returns:
            Final scores, winner and statistics

        """
        while not self.state.is_complete():
            self.play_round()

        state = self.state
        team_scores = {team: state.team_score(team) for team in sorted({p.team_id for p in state.players})}
        total = sum(team_scores.values())
        # Holds only while every dealt card is played and no stake or bonus is awarded
        if total > TOTAL_DECK_POINTS:
            self._log.warning({"event": "point_total_exceeded", "total": total, "deck_points": TOTAL_DECK_POINTS})

        ranked = sorted(team_scores.items(), key=lambda item: item[1], reverse=True)
        winning_team = ranked[0][0] if len(ranked) > 1 and ranked[0][1] > ranked[1][1] else None

        self._update_profiles(winning_team)

        summary = MatchSummary(
            scores={p.id: p.score for p in state.players},
            team_scores=team_scores,
            winning_team=winning_team,
            rounds_played=state.current_round,
            results=list(self.results),
            stats={p.id: self.evaluator.get_player_stats(p.id) for p in state.players},
        )
        self._log.info(
            {
                "event": "match_complete",
                "rounds": summary.rounds_played,
                "winner": winning_team or "tie",
                **{f"score_{team}": score for team, score in team_scores.items()},
            }
        )
        return summary

    def _update_profiles(self, winning_team: str | None) -> None:
        for bot in self.bots:
            if not isinstance(bot, HeuristicBot) or bot.profile is None or bot.opponent_seat is None:
                continue
            opponent = self.state.players[bot.opponent_seat]
            bot.update_opponent_profile(won=winning_team == opponent.team_id, score=opponent.score)
