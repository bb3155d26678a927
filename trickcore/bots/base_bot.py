"""Base class for all bot strategies."""

from abc import ABC, abstractmethod

import numpy as np

from trickcore.config import settings
from trickcore.errors import EmptyHand, EngineNotInitialized
from trickcore.models.card import Card
from trickcore.models.enums import Difficulty
from trickcore.models.game_state import GameState


class BaseBot(ABC):
    """Abstract base class for bot strategies.

    A bot is bound to one seat with ``initialize`` and then asked for a hand
    index whenever its seat leads or responds. Bots never mutate the
    GameState they are given.
    """

    def __init__(
        self,
        player_id: str,
        difficulty: Difficulty = Difficulty.MEDIUM,
        rng: np.random.Generator | None = None,
    ) -> None:
        """Initialize the bot.

        Args:
            player_id: ID of the player this bot controls
            difficulty: Bot difficulty level
            rng: Random source, defaults to one seeded from settings

        """
        self.player_id = player_id
        self.difficulty = difficulty
        self.rng = rng if rng is not None else np.random.default_rng(settings.rng_seed)
        self.game_state: GameState | None = None
        self.seat: int | None = None

    @property
    def is_initialized(self) -> bool:
        return self.game_state is not None and self.seat is not None

    def initialize(self, game_state: GameState, seat: int) -> None:
        """Bind the bot to a seat.

        Args:
            game_state: State of the match being played
            seat: Seat this bot plays

        """
        if not 0 <= seat < game_state.player_count:
            msg = f"Seat {seat} out of range for {game_state.player_count} players"
            raise ValueError(msg)
        self.game_state = game_state
        self.seat = seat

    def _state(self) -> GameState:
        if self.game_state is None or self.seat is None:
            msg = f"Bot {self.player_id} was asked for a move before initialize()"
            raise EngineNotInitialized(msg)
        return self.game_state

    def _hand(self) -> list[Card]:
        """Current hand of the bound seat, never empty."""
        state = self._state()
        hand = state.players[self.seat].hand
        if not hand:
            msg = f"Seat {self.seat} has no cards to play"
            raise EmptyHand(msg)
        return hand

    @abstractmethod
    def choose_leading_card(self) -> int:
        """Pick a card to open the round.

        Returns:
            Index into the bound seat's hand

        """

    @abstractmethod
    def choose_responding_card(self, lead_card: Card) -> int:
        """Pick a card to answer the lead.

        Args:
            lead_card: Card that opened the round

        Returns:
            Index into the bound seat's hand

        """

    def update_memory(self, game_state: GameState) -> None:
        """Refresh the bot's view after a completed round."""
        self.game_state = game_state
