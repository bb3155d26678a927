"""Round evaluation: winner resolution, points, move ratings and statistics."""

import logging

from trickcore.constants import (
    DECK_SIZE,
    RANK_SUPERIORITY_BONUS,
    RATING_DEFAULT,
    SUPPORTED_PLAYER_COUNTS,
    TRUMP_THREE_BONUS,
)
from trickcore.errors import MalformedMoveSet
from trickcore.evaluator.analysis import build_round_analysis
from trickcore.evaluator.move_rating import TEAM_PLAYER_COUNTS, RatingContext, rate_move
from trickcore.evaluator.player_stats import PlayerStatsBook
from trickcore.models.card import Card, best_card, resolve_pair
from trickcore.models.enums import GamePhase, QualityBand, Rank, ResolutionRule, Suit
from trickcore.models.trick import MoveRating, PlayerMove, PlayerStats, RoundResult
from trickcore.services.log_service import LogService

logger = logging.getLogger(__name__)


class RoundEvaluator:
    """Scores completed rounds for one match.

    The evaluator counts the rounds it has seen to place each round in the
    early, mid or late phase, and keeps rolling statistics for every player
    it rates. It never looks at AI internals.
    """

    def __init__(
        self,
        trump_suit: Suit,
        total_rounds: int | None = None,
        player_count: int = 2,
        stats_book: PlayerStatsBook | None = None,
    ) -> None:
        """Initialize the evaluator.

        Args:
            trump_suit: Trump suit for the match
            total_rounds: Rounds in the match, defaults to one per card per seat
            player_count: Seats at the table (2, 4 or 6)
            stats_book: Statistics book to write to, a new one by default

        """
        if player_count not in SUPPORTED_PLAYER_COUNTS:
            msg = f"Unsupported player count {player_count}, expected one of {SUPPORTED_PLAYER_COUNTS}"
            raise ValueError(msg)

        self.trump_suit = trump_suit
        self.player_count = player_count
        self.total_rounds = total_rounds if total_rounds is not None else DECK_SIZE // player_count
        self.stats = stats_book if stats_book is not None else PlayerStatsBook()
        self.current_round = 0
        self.played_cards: list[Card] = []
        self._log = LogService(__name__)

    @property
    def phase(self) -> GamePhase:
        return GamePhase.from_progress(self.current_round, self.total_rounds)

    def evaluate_round(self, moves: list[PlayerMove], round_stake: int = 0, *, strict: bool = False) -> RoundResult:
        """Evaluate one completed round.

        Args:
            moves: Moves in play order
            round_stake: Points carried over into this round
            strict: Raise on a malformed move list instead of designating a fallback winner

        Returns:
            Winner, points, per-move ratings and analysis

        Raises:
            MalformedMoveSet: moves is empty, or malformed while strict

        """
        if not moves:
            msg = "Cannot evaluate a round without moves"
            raise MalformedMoveSet(msg)

        self.current_round += 1
        self.played_cards.extend(m.card for m in moves)
        logger.debug(
            "[Round %d] Evaluating %s",
            self.current_round,
            ", ".join(f"{m.player_id}: {m.card}" for m in moves),
        )

        teams: dict[str, list[PlayerMove]] = {}
        for move in moves:
            teams.setdefault(move.team_id, []).append(move)

        problem = self._find_problem(moves, teams)
        if problem is not None:
            if strict:
                raise MalformedMoveSet(problem)
            self._log.warning({"event": "malformed_moves", "round": self.current_round, "problem": problem})
            winning_move = next(iter(teams.values()))[0]
            rule = ResolutionRule.FALLBACK
        else:
            winning_move, rule = self._resolve_winner(moves, teams)

        points = sum(m.card.point_value for m in moves) + round_stake
        notes: list[str] = []
        bonus, bonus_note = 0, ""
        if problem is None:
            bonus, bonus_note = self._first_round_bonus(moves, teams[winning_move.team_id], rule)
            if bonus:
                notes.append(f"First round special win: {bonus_note}")
        else:
            notes.append(f"Fallback winner designation: {problem}")
        points += bonus

        ctx = RatingContext(
            trump_suit=self.trump_suit,
            phase=self.phase,
            player_count=self.player_count,
            winning_team=winning_move.team_id,
            winning_player_id=winning_move.player_id,
        )
        ratings: list[MoveRating] = []
        for index, move in enumerate(moves):
            quality, reasoning = rate_move(index, moves, ctx)
            if bonus:
                reasoning = f"{reasoning} {bonus_note}"
            move.move_quality = quality
            ratings.append(MoveRating(player_id=move.player_id, card=str(move.card), quality=quality, reasoning=reasoning))
            self.stats.record(move.player_id, quality, move.card.is_trump(self.trump_suit))

        overall = sum(r.quality for r in ratings) / len(ratings) if ratings else float(RATING_DEFAULT)
        band = QualityBand.from_rating(overall)
        analysis = build_round_analysis(
            moves,
            ratings,
            winning_move.team_id,
            winning_move.player_id,
            points,
            overall,
            band,
            notes,
        )

        self._log.info(
            {
                "event": "round_evaluated",
                "round": str(self.current_round),
                "winner": winning_move.player_id,
                "team": winning_move.team_id,
                "rule": rule.value,
                "points": str(points),
                "quality": f"{overall:.1f}",
            }
        )

        return RoundResult(
            winning_team=winning_move.team_id,
            winning_player_id=winning_move.player_id,
            points_earned=points,
            bonus_points=bonus,
            rule=rule,
            move_ratings=ratings,
            overall_round_quality=overall,
            quality_band=band,
            round_analysis=analysis,
            fallback=problem is not None,
            fallback_reason=problem,
        )

    def _find_problem(self, moves: list[PlayerMove], teams: dict[str, list[PlayerMove]]) -> str | None:
        """Describe what is wrong with a move list, None when it is well-formed."""
        if len(moves) != self.player_count:
            return f"Expected {self.player_count} moves, got {len(moves)}"
        if len({m.player_id for m in moves}) != len(moves):
            return "A player appears more than once"
        if len(teams) != 2:
            return f"Expected 2 teams, got {len(teams)}"
        sizes = {len(team_moves) for team_moves in teams.values()}
        if len(sizes) != 1:
            return "Teams played different numbers of cards"
        return None

    def _resolve_winner(
        self,
        moves: list[PlayerMove],
        teams: dict[str, list[PlayerMove]],
    ) -> tuple[PlayerMove, ResolutionRule]:
        """Pick the winning move of a well-formed round.

        With one card per team the two cards are compared directly. Otherwise
        each team is represented by the card that beats all its teammates'
        cards, and the leading team's representative is compared against the
        other team's.
        """
        lead_suit = moves[0].card.suit
        representatives = []
        for team_moves in teams.values():
            index = best_card([m.card for m in team_moves], lead_suit, self.trump_suit)
            representatives.append(team_moves[index])

        # Teams are keyed in order of first play, so the leading team comes first
        first, second = representatives
        winner, rule = resolve_pair(first.card, second.card, self.trump_suit)
        if rule == ResolutionRule.ACE_OVER_SEVEN:
            logger.debug("[Round %d] Ace of trump takes the Seven of trump", self.current_round)
        return (first, second)[winner], rule

    def _first_round_bonus(
        self,
        moves: list[PlayerMove],
        winning_team_moves: list[PlayerMove],
        rule: ResolutionRule,
    ) -> tuple[int, str]:
        """Extra points for special first-round wins in team matches."""
        if self.current_round != 1 or self.player_count not in TEAM_PLAYER_COUNTS:
            return 0, ""

        team = winning_team_moves[0].team_id
        if any(m.card.suit == self.trump_suit and m.card.rank == Rank.THREE for m in winning_team_moves):
            return TRUMP_THREE_BONUS, f"Team {team} won the first round with the 3 of trumps."
        no_trumps = not any(m.card.is_trump(self.trump_suit) for m in moves)
        if no_trumps and rule == ResolutionRule.HIGHER_RANK:
            return RANK_SUPERIORITY_BONUS, f"Team {team} won the first round on card superiority without trumps."
        return 0, ""

    def get_player_stats(self, player_id: str) -> PlayerStats | None:
        """Rolling statistics for a player, None if they have not been rated."""
        return self.stats.get(player_id)

    def reset(self) -> None:
        """Forget rounds and statistics, keeping trump and player count."""
        self.current_round = 0
        self.played_cards = []
        self.stats.reset()
