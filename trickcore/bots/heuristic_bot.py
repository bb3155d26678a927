"""Heuristic decision engine with personalities, difficulty levels and opponent modeling."""

import logging
from dataclasses import dataclass, field

import numpy as np

from trickcore.bots.adaptive import AdaptationInput, PersonalityStateMachine
from trickcore.bots.base_bot import BaseBot
from trickcore.bots.difficulty import DifficultyProfile, profile_for
from trickcore.bots.personalities import (
    PERSONALITY_STRATEGIES,
    PersonalityStrategy,
    ScoringContext,
    contextual_bonus,
)
from trickcore.bots.risk import deception_risk, lead_risk
from trickcore.bots.simulation import estimate_move_value, sample_lead_outcomes
from trickcore.config import settings
from trickcore.constants import (
    HIGH_STAKE_THRESHOLD,
    HIGH_VALUE_THRESHOLD,
    LOW_VALUE_THRESHOLD,
    PREDICTABILITY_TRIGGER,
    SCORE_GAP_THRESHOLD,
    TRAIT_DEFAULT,
    TRAIT_JITTER,
)
from trickcore.errors import EngineNotInitialized
from trickcore.evaluator.player_stats import PlayerStatsBook
from trickcore.memory.opponent_memory import ObservedAction, OpponentMemory
from trickcore.memory.patterns import CrossMatchPatternStore, SituationSignature, is_bluff
from trickcore.memory.profile import OpponentProfile
from trickcore.memory.traits import Trait
from trickcore.models.card import Card, best_card, generate_full_deck, is_top_trump_pair, legal_cards, outranks
from trickcore.models.enums import Difficulty, GamePhase, MoveCategory, Personality, Suit
from trickcore.models.game_state import GameState, RoundRecord
from trickcore.models.player import team_for_seat
from trickcore.models.trick import PlayerStats

logger = logging.getLogger(__name__)

# Score weights
RISK_WEIGHT = 10.0
DECEPTION_WEIGHT = 10.0
JITTER_SCALE = 0.2
TRAIT_SCALE = 25.0

# Responding
WIN_BASE = 10.0
MAX_TRUMP_DISCOUNT = 10.0
FEW_TRUMPS = 2
SMALL_STAKE = 5

# Leading the Ace or Seven of trump, regardless of personality
TOP_TRUMP_TIMING: dict[GamePhase, float] = {
    GamePhase.EARLY: -8.0,
    GamePhase.MID: 0.0,
    GamePhase.LATE: 6.0,
}

EXPLORING_DIFFICULTIES = (Difficulty.HARD, Difficulty.ADAPTIVE)


@dataclass
class Decision:
    """Record of the engine's last choice.

    Attributes:
        hand_index: Index that was returned
        scores: Score per considered hand index, after jitter
        personality: Personality the choice was made with
        fallback: A uniform-random pick replaced the scored choice
        conceded: The round was deliberately given up with a cheap card
        explored: The choice came from a what-if comparison of personalities
        supporting: A teammate was already taking the round, so the cheapest card went

    """

    hand_index: int
    scores: dict[int, float] = field(default_factory=dict)
    personality: Personality | None = None
    fallback: bool = False
    conceded: bool = False
    explored: bool = False
    supporting: bool = False


@dataclass(frozen=True)
class ExplorationResult:
    """Outcome of comparing every personality on the same decision."""

    personality: Personality
    hand_index: int
    values: dict[Personality, float]


def classify_move(card: Card, stake: int, trump_suit: Suit) -> MoveCategory:
    """Classify a played card for trait evolution."""
    if is_bluff(card, stake):
        return MoveCategory.BLUFF
    if card.point_value > HIGH_VALUE_THRESHOLD or card.is_trump(trump_suit):
        return MoveCategory.AGGRESSIVE
    return MoveCategory.DEFENSIVE


class HeuristicBot(BaseBot):
    """Decision engine that scores every candidate card and plays the best one.

    Scoring combines a shared base heuristic (point value, capture risk,
    late-game and stake bonuses) with the adjustments of the active
    personality. The difficulty sets the risk aversion, the amount of score
    noise and how often cheap rounds are conceded. The engine owns an
    OpponentMemory for its match and may hold references to a cross-match
    pattern store, an opponent profile and an evaluator's stats book.

    Very Hard additionally evolves traits, discounts cards that resemble
    successful opponent baits and perturbs its traits when its own answers
    become repetitive. Adaptive re-selects its personality after every round.
    Hard and Adaptive compare all personalities on the current decision when
    they are well behind.
    """

    def __init__(
        self,
        player_id: str,
        personality: Personality | None = None,
        difficulty: Difficulty | None = None,
        rng: np.random.Generator | None = None,
        *,
        pattern_store: CrossMatchPatternStore | None = None,
        profile: OpponentProfile | None = None,
        stats_book: PlayerStatsBook | None = None,
        opponent_seat: int | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            player_id: ID of the player this engine controls
            personality: Starting personality, defaults to the configured one
            difficulty: Difficulty level, defaults to the configured one
            rng: Random source for every stochastic heuristic
            pattern_store: Cross-match bluff store shared with the persistence layer
            profile: Long-term profile of the opponent, updated at match end
            stats_book: Evaluator statistics used to answer stats queries
            opponent_seat: Seat to model, defaults to the next seat

        """
        super().__init__(player_id, difficulty or Difficulty(settings.default_difficulty), rng)
        self.personality = personality or Personality(settings.default_personality)
        self.pattern_store = pattern_store if pattern_store is not None else CrossMatchPatternStore()
        self.profile = profile
        self.stats_book = stats_book
        self.opponent_seat = opponent_seat
        self.memory = OpponentMemory()
        self.state_machine = PersonalityStateMachine(self.personality)
        self.last_decision: Decision | None = None
        self._rounds_seen = 0

    @property
    def strategy(self) -> PersonalityStrategy:
        """Strategy of the active personality."""
        return PERSONALITY_STRATEGIES[self.personality]

    def initialize(self, game_state: GameState, seat: int) -> None:
        """Bind to a seat and start a fresh memory for the match.

        Args:
            game_state: State of the match being played
            seat: Seat this engine plays

        """
        super().initialize(game_state, seat)
        if self.opponent_seat is None or self.opponent_seat >= game_state.player_count:
            self.opponent_seat = (seat + 1) % game_state.player_count

        self.memory = OpponentMemory()
        self.memory.known_cards = list(game_state.players[seat].hand)
        self.state_machine = PersonalityStateMachine(self.personality)
        self.last_decision = None
        self._rounds_seen = len(game_state.round_history)

        logger.debug(
            "Engine %s bound to seat %d against seat %d (%s, %s)",
            self.player_id,
            seat,
            self.opponent_seat,
            self.personality.value,
            self.difficulty.value,
        )

    # === SCORING ===

    def _context(self) -> ScoringContext:
        state = self._state()
        hand = state.players[self.seat].hand
        trump = state.trump_suit
        return ScoringContext(
            trump_suit=trump,
            round_stake=state.round_stake,
            cards_in_hand=len(hand),
            trumps_in_hand=sum(1 for c in hand if c.is_trump(trump)),
            phase=state.phase,
            score_differential=state.score_differential(self.seat),
            rng=self.rng,
        )

    def score_leading_cards(self, strategy: PersonalityStrategy | None = None) -> dict[int, float]:
        """Score every card in hand as a lead, without noise.

        Args:
            strategy: Personality strategy to score with, defaults to the active one

        Returns:
            Score per hand index

        """
        hand = self._hand()
        strategy = strategy or self.strategy
        ctx = self._context()
        profile = profile_for(self.difficulty, ctx.score_differential)
        return {i: self._score_lead(card, ctx, strategy, profile) for i, card in enumerate(hand)}

    def _score_lead(
        self,
        card: Card,
        ctx: ScoringContext,
        strategy: PersonalityStrategy,
        profile: DifficultyProfile,
    ) -> float:
        trump = ctx.trump_suit
        score = float(card.point_value)

        if card.is_top_trump(trump):
            if self.memory.may_hold(trump):
                score += strategy.lead_top_trump(card, ctx)
            score += TOP_TRUMP_TIMING[ctx.phase]
        elif card.is_trump(trump):
            score += strategy.lead_trump(card, ctx)
        else:
            score += strategy.lead_suit(card, ctx, self.memory.may_hold(card.suit))

        score += contextual_bonus(card, ctx) + strategy.card_bonus(card, ctx)

        multiplier = profile.risk_multiplier
        if self.difficulty == Difficulty.VERY_HARD:
            multiplier *= self.memory.traits[Trait.RISK_AVERSION] / TRAIT_DEFAULT
            score += self._trait_adjustment(card, ctx)
            score -= DECEPTION_WEIGHT * deception_risk(card, self.pattern_store, self.memory.deception)

        score -= RISK_WEIGHT * lead_risk(card, ctx, self.memory.void_suits, multiplier)
        return score

    def _trait_adjustment(self, card: Card, ctx: ScoringContext) -> float:
        traits = self.memory.traits
        bonus = 0.0
        if card.point_value > HIGH_VALUE_THRESHOLD:
            bonus += (traits[Trait.AGGRESSIVENESS] - TRAIT_DEFAULT) / TRAIT_SCALE
        if is_bluff(card, ctx.round_stake):
            bonus += (traits[Trait.DECEPTION_TENDENCY] - TRAIT_DEFAULT) / TRAIT_SCALE
        return bonus

    def score_responding_cards(
        self,
        lead_card: Card,
        strategy: PersonalityStrategy | None = None,
    ) -> dict[int, float]:
        """Score every legal answer to a lead, without noise.

        Answers are scored against the card currently taking the round, which
        in team matches may be a later card than the lead.

        Args:
            lead_card: Card that opened the round
            strategy: Personality strategy to score with, defaults to the active one

        Returns:
            Score per legal hand index

        """
        hand = self._hand()
        strategy = strategy or self.strategy
        ctx = self._context()
        target, at_stake, _ = self._current_winner(lead_card)
        return {
            i: self._score_response(hand[i], lead_card, ctx, strategy, target, at_stake)
            for i in legal_cards(hand, lead_card.suit)
        }

    def _current_winner(self, lead_card: Card) -> tuple[Card, int, bool]:
        """Card taking the round so far, points on the table, and whether a teammate played it."""
        state = self._state()
        table = state.cards_on_table
        if not table or table[0] != lead_card:
            return lead_card, lead_card.point_value, False
        index = best_card(table, lead_card.suit, state.trump_suit)
        # Cards on the table follow seat order from the leader
        seat = (state.current_player_seat + index) % state.player_count
        at_stake = sum(card.point_value for card in table)
        return table[index], at_stake, team_for_seat(seat) == team_for_seat(self.seat)

    def _score_response(
        self,
        card: Card,
        lead: Card,
        ctx: ScoringContext,
        strategy: PersonalityStrategy,
        target: Card,
        at_stake: int,
    ) -> float:
        trump = ctx.trump_suit

        if is_top_trump_pair(target, card, trump):
            score = strategy.respond_top_trump(card, target, ctx)
        elif outranks(card, target, lead.suit, trump):
            if card.is_trump(trump) and not target.is_trump(trump):
                score = WIN_BASE + at_stake + ctx.round_stake - self._trump_discount(card, ctx)
            else:
                # Win with as little as possible
                score = WIN_BASE + at_stake + ctx.round_stake - 0.5 * (card.strength - target.strength)
        elif card.suit == target.suit:
            score = -card.point_value * strategy.discard_weight
        else:
            score = -float(card.point_value)

        score += contextual_bonus(card, ctx) + strategy.card_bonus(card, ctx)

        if self.difficulty == Difficulty.VERY_HARD:
            score -= DECEPTION_WEIGHT * deception_risk(card, self.pattern_store, self.memory.deception)
        return score

    @staticmethod
    def _trump_discount(card: Card, ctx: ScoringContext) -> float:
        """Penalty for spending a trump, capped."""
        discount = 0.0
        if card.point_value > HIGH_VALUE_THRESHOLD:
            discount += card.point_value * 0.5
        if ctx.trumps_in_hand <= FEW_TRUMPS:
            discount += 4.0
        if ctx.round_stake < SMALL_STAKE:
            discount += 3.0
        return min(discount, MAX_TRUMP_DISCOUNT)

    def _jitter(self, scores: dict[int, float], profile: DifficultyProfile) -> dict[int, float]:
        spread = profile.randomness * JITTER_SCALE
        return {i: s + float(self.rng.uniform(-spread, spread)) for i, s in scores.items()}

    @staticmethod
    def _best(scores: dict[int, float]) -> int:
        return max(scores, key=lambda i: scores[i])

    # === DECISIONS ===

    def _should_explore(self, ctx: ScoringContext) -> bool:
        return self.difficulty in EXPLORING_DIFFICULTIES and ctx.score_differential < -SCORE_GAP_THRESHOLD

    def choose_leading_card(self) -> int:
        """Pick the best card to open the round.

        Returns:
            Index into the bound seat's hand

        Raises:
            EngineNotInitialized: initialize() was not called
            EmptyHand: the seat holds no cards

        """
        hand = self._hand()
        ctx = self._context()

        if self._should_explore(ctx):
            result = self.explore_personalities()
            decision = Decision(result.hand_index, personality=result.personality, explored=True)
        else:
            profile = profile_for(self.difficulty, ctx.score_differential)
            scores = self._jitter(self.score_leading_cards(), profile)
            decision = Decision(self._best(scores), scores, self.personality)

        self.last_decision = decision
        logger.debug(
            "%s leads %s (%s, scores=%s)",
            self.player_id,
            hand[decision.hand_index],
            self.personality.value,
            decision.scores,
        )
        return decision.hand_index

    def choose_responding_card(self, lead_card: Card) -> int:
        """Pick the best legal answer to the lead.

        Args:
            lead_card: Card that opened the round

        Returns:
            Index into the bound seat's hand

        Raises:
            EngineNotInitialized: initialize() was not called
            EmptyHand: the seat holds no cards

        """
        hand = self._hand()
        legal = legal_cards(hand, lead_card.suit)
        if not legal:
            index = int(self.rng.integers(len(hand)))
            logger.warning(
                "%s found no legal answer to %s, playing random hand index %d",
                self.player_id,
                lead_card,
                index,
            )
            self.last_decision = Decision(index, personality=self.personality, fallback=True)
            return index

        ctx = self._context()
        profile = profile_for(self.difficulty, ctx.score_differential)
        target, at_stake, partner_winning = self._current_winner(lead_card)

        if partner_winning:
            index = self._cheapest_discard(hand, legal, ctx.trump_suit)
            decision = Decision(index, personality=self.personality, supporting=True)
        elif self._should_concede(at_stake, ctx, profile):
            index = self._cheapest_loser(hand, legal, target, lead_card.suit, ctx.trump_suit)
            decision = Decision(index, personality=self.personality, conceded=True)
        elif self._should_explore(ctx):
            result = self.explore_personalities(lead_card)
            decision = Decision(result.hand_index, personality=result.personality, explored=True)
        else:
            scores = self._jitter(self.score_responding_cards(lead_card), profile)
            decision = Decision(self._best(scores), scores, self.personality)

        self.last_decision = decision
        logger.debug(
            "%s answers %s with %s (%s, conceded=%s, supporting=%s)",
            self.player_id,
            lead_card,
            hand[decision.hand_index],
            self.personality.value,
            decision.conceded,
            decision.supporting,
        )
        return decision.hand_index

    def _should_concede(self, at_stake: int, ctx: ScoringContext, profile: DifficultyProfile) -> bool:
        """Roll against the target win rate for a round not worth fighting over."""
        if at_stake >= LOW_VALUE_THRESHOLD or ctx.round_stake > HIGH_STAKE_THRESHOLD:
            return False
        return float(self.rng.random()) >= profile.target_win_rate

    @staticmethod
    def _cheapest_loser(hand: list[Card], legal: list[int], target: Card, lead_suit: Suit, trump_suit: Suit) -> int:
        losers = [i for i in legal if not outranks(hand[i], target, lead_suit, trump_suit)]
        candidates = losers or legal
        return min(candidates, key=lambda i: (hand[i].point_value, hand[i].strength))

    @staticmethod
    def _cheapest_discard(hand: list[Card], legal: list[int], trump_suit: Suit) -> int:
        """Lowest-value legal card, keeping trumps back."""
        return min(legal, key=lambda i: (hand[i].is_trump(trump_suit), hand[i].point_value, hand[i].strength))

    def explore_personalities(self, lead_card: Card | None = None) -> ExplorationResult:
        """Compare what every personality would play in the current situation.

        Leading choices are valued by sampling answers from unseen cards;
        responding choices by the immediate value of the round.

        Args:
            lead_card: Card to answer, None to compare leading choices

        Returns:
            The personality whose choice scored best, with its hand index

        """
        hand = self._hand()
        state = self._state()
        unseen = self._unseen_cards() if lead_card is None else []

        values: dict[Personality, float] = {}
        picks: dict[Personality, int] = {}
        for personality, strategy in PERSONALITY_STRATEGIES.items():
            if lead_card is None:
                index = self._best(self.score_leading_cards(strategy))
                value = sample_lead_outcomes(
                    hand[index],
                    hand,
                    unseen,
                    state.trump_suit,
                    state.round_stake,
                    self.rng,
                    settings.outcome_samples,
                )
            else:
                index = self._best(self.score_responding_cards(lead_card, strategy))
                value = estimate_move_value(lead_card, hand[index], state.trump_suit, state.round_stake)
            values[personality] = value
            picks[personality] = index

        best = max(values, key=lambda p: values[p])
        logger.debug("%s explored personalities: %s -> %s", self.player_id, values, best.value)
        return ExplorationResult(best, picks[best], values)

    def _unseen_cards(self) -> list[Card]:
        """Cards the opponent could be holding."""
        state = self._state()
        seen = set(state.players[self.seat].hand)
        seen.update(state.played_cards())
        seen.update(state.cards_on_table)
        return [c for c in generate_full_deck() if c not in seen and self.memory.may_hold(c.suit)]

    # === MEMORY AND ADAPTATION ===

    def update_memory(self, game_state: GameState) -> None:
        """Learn from every round completed since the last call.

        Args:
            game_state: Latest state, after the caller applied the round

        """
        if self.seat is None:
            msg = f"Bot {self.player_id} received a memory update before initialize()"
            raise EngineNotInitialized(msg)

        super().update_memory(game_state)
        records = game_state.round_history[self._rounds_seen :]
        start = self._rounds_seen
        self._rounds_seen = len(game_state.round_history)

        for offset, record in enumerate(records):
            self._observe_round(record, game_state, start + offset + 1)

        self.memory.known_cards = list(game_state.players[self.seat].hand)

    def _observe_round(self, record: RoundRecord, state: GameState, round_number: int) -> None:
        trump = state.trump_suit
        stake = record.stake_at_time
        lead = record.leader_card
        winner_team = team_for_seat(record.winner_seat) if record.winner_seat is not None else None

        self.memory.played_cards.extend(card for _, card in record.plays)
        opponent_card = record.card_for_seat(self.opponent_seat)
        own_card = record.card_for_seat(self.seat)

        if opponent_card is not None:
            was_leader = record.leader_seat == self.opponent_seat
            opponent_won = winner_team == team_for_seat(self.opponent_seat)
            self.memory.observe(
                ObservedAction(
                    card=opponent_card,
                    round_stake=stake,
                    was_leader=was_leader,
                    trump_played=opponent_card.is_trump(trump),
                    round_number=round_number,
                    lead_suit=None if was_leader else lead.suit,
                    won=opponent_won,
                )
            )

            if not was_leader and opponent_card.suit != lead.suit:
                self.memory.mark_void(lead.suit)

            if was_leader:
                self.memory.deception.record_opponent_lead(is_bluff(opponent_card, stake))
                if own_card is not None:
                    self.memory.record_response(opponent_card, own_card)

            if is_bluff(opponent_card, stake):
                # Signature from the bluffing side's standing
                signature = SituationSignature.of(opponent_card, stake, -state.score_differential(self.seat))
                self.pattern_store.record(signature, opponent_won)

        if own_card is not None and self.difficulty == Difficulty.VERY_HARD:
            self.record_outcome(own_card, stake, winner_team == team_for_seat(self.seat))

    def record_outcome(self, card: Card, stake: int, success: bool) -> MoveCategory:
        """Feed the outcome of one of the engine's own moves into trait evolution.

        Args:
            card: Card the engine played
            stake: Stake of the round it was played in
            success: Whether the engine's team took the round

        Returns:
            Category the move was classified as

        """
        trump = self._state().trump_suit
        category = classify_move(card, stake, trump)
        self.memory.traits.record_outcome(success, category)
        if category == MoveCategory.BLUFF:
            self.memory.deception.record_bait(success)

        if self.memory.response_pattern_strength() > PREDICTABILITY_TRIGGER:
            self.memory.traits.perturb(self.rng, TRAIT_JITTER)
            logger.debug("%s perturbed traits to stay unpredictable", self.player_id)
        return category

    def adapt_personality(self) -> Personality:
        """Re-select the personality after a round (Adaptive difficulty only).

        Returns:
            The personality to use next; unchanged for other difficulties

        """
        state = self._state()
        if self.difficulty != Difficulty.ADAPTIVE:
            logger.debug("%s ignores adapt_personality at %s", self.player_id, self.difficulty.value)
            return self.personality

        metrics = self.memory.metrics
        signals = AdaptationInput(
            score_differential=state.score_differential(self.seat),
            cards_in_hand=len(state.players[self.seat].hand),
            predictability=metrics.predictability,
            plays_aggressively=metrics.plays_aggressively,
            saves_trumps=metrics.saves_trumps,
        )
        self.state_machine.state = self.personality
        self.personality = self.state_machine.step(signals, self.rng, state.current_round)
        return self.personality

    def update_opponent_profile(self, won: bool, score: int) -> OpponentProfile | None:
        """Fold this match into the attached opponent profile.

        Args:
            won: Whether the opponent won the match
            score: Opponent's final score

        Returns:
            The updated profile, None when no profile is attached

        """
        if self.profile is None:
            return None
        self.profile.record_match(self.memory.stats, self.memory.metrics, won, score)
        return self.profile

    def get_stats(self, player_id: str) -> PlayerStats | None:
        """Evaluator statistics for a player, None if unknown or no book is attached."""
        if self.stats_book is None:
            return None
        return self.stats_book.get(player_id)
