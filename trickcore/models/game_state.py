"""Game state shared between the caller, the engine and the evaluator."""

from dataclasses import dataclass, field

import numpy as np

from trickcore.config import settings
from trickcore.constants import DECK_SIZE, SUPPORTED_PLAYER_COUNTS
from trickcore.models.card import Card
from trickcore.models.deck import Deck
from trickcore.models.enums import GamePhase, Suit
from trickcore.models.player import Player


@dataclass(frozen=True)
class RoundRecord:
    """What happened in one completed round.

    Attributes:
        leader_seat: Seat that led the round
        plays: Cards played as (seat, card) pairs in play order
        winner_seat: Seat that took the round, None if it was void
        stake_at_time: Carried-over stake when the round was played

    """

    leader_seat: int
    plays: tuple[tuple[int, Card], ...]
    winner_seat: int | None
    stake_at_time: int = 0

    @property
    def leader_card(self) -> Card:
        """Card that opened the round."""
        return self.plays[0][1]

    @property
    def responder_card(self) -> Card | None:
        """First card played in response, None for a single-card record."""
        return self.plays[1][1] if len(self.plays) > 1 else None

    def card_for_seat(self, seat: int) -> Card | None:
        """Card a seat played in this round, None if it did not play."""
        for played_seat, card in self.plays:
            if played_seat == seat:
                return card
        return None


@dataclass
class GameState:
    """Represents a match in progress.

    The caller owns this value and mutates it between rounds; the engine and
    the evaluator only read it.

    Attributes:
        trump_suit: Trump suit, fixed for the match
        players: Players indexed by seat
        current_player_seat: Seat due to lead the next round
        cards_on_table: Cards played in the round in progress
        round_stake: Points carried over from a void round
        round_history: Completed rounds, oldest first
        current_round: Rounds completed so far
        total_rounds: Rounds in the whole match
        draw_pile: Undealt cards, top of pile at the end

    """

    trump_suit: Suit
    players: list[Player] = field(default_factory=list)
    current_player_seat: int = 0
    cards_on_table: list[Card] = field(default_factory=list)
    round_stake: int = 0
    round_history: list[RoundRecord] = field(default_factory=list)
    current_round: int = 0
    total_rounds: int = 18
    draw_pile: list[Card] = field(default_factory=list)

    @classmethod
    def new_match(
        cls,
        player_count: int = 2,
        rng: np.random.Generator | None = None,
        hand_size: int | None = None,
        total_rounds: int | None = None,
        player_ids: list[str] | None = None,
    ) -> "GameState":
        """Shuffle a full deck, deal hands and pick trump and starting seat.

        Args:
            player_count: Seats at the table (2, 4 or 6)
            rng: Random source for shuffling and the random picks
            hand_size: Cards per hand, defaults to the configured size
            total_rounds: Rounds in the match, defaults to one per card pair
            player_ids: Identifiers for the seats, defaults to player1..N

        Returns:
            A fresh GameState

        """
        if player_count not in SUPPORTED_PLAYER_COUNTS:
            msg = f"Unsupported player count {player_count}, expected one of {SUPPORTED_PLAYER_COUNTS}"
            raise ValueError(msg)
        if player_ids is not None and len(player_ids) != player_count:
            msg = f"Expected {player_count} player ids, got {len(player_ids)}"
            raise ValueError(msg)

        rng = rng if rng is not None else np.random.default_rng(settings.rng_seed)
        hand_size = hand_size if hand_size is not None else settings.hand_size
        if total_rounds is None:
            total_rounds = DECK_SIZE // player_count
        ids = player_ids or [f"player{seat + 1}" for seat in range(player_count)]

        deck = Deck(rng)
        deck.shuffle()
        hands = deck.deal(player_count, hand_size)
        players = [Player(id=ids[seat], seat=seat, hand=hands[seat]) for seat in range(player_count)]

        suits = list(Suit)
        return cls(
            trump_suit=suits[int(rng.integers(len(suits)))],
            players=players,
            current_player_seat=int(rng.integers(player_count)),
            total_rounds=total_rounds,
            draw_pile=list(deck.cards),
        )

    @property
    def player_count(self) -> int:
        return len(self.players)

    @property
    def phase(self) -> GamePhase:
        """Coarse stage of the match."""
        return GamePhase.from_progress(self.current_round, self.total_rounds)

    def get_player(self, player_id: str) -> Player | None:
        """Find a player by ID."""
        return next((p for p in self.players if p.id == player_id), None)

    def team_score(self, team_id: str) -> int:
        """Sum of scores for the seats of a team."""
        return sum(p.score for p in self.players if p.team_id == team_id)

    def score_differential(self, seat: int) -> int:
        """Own team score minus the opposing team score."""
        own_team = self.players[seat].team_id
        own = self.team_score(own_team)
        other = sum(p.score for p in self.players if p.team_id != own_team)
        return own - other

    def played_cards(self) -> list[Card]:
        """Every card played in completed rounds."""
        return [card for record in self.round_history for _, card in record.plays]

    def is_complete(self) -> bool:
        """Check if the match has no rounds left to play."""
        if self.current_round >= self.total_rounds:
            return True
        return all(not p.hand for p in self.players)
