"""Card, deck, game state and round models."""

from trickcore.models.card import (
    POINT_VALUES,
    RANK_ORDER,
    Card,
    Ordering,
    best_card,
    compare_rank,
    generate_full_deck,
    legal_cards,
    outranks,
    point_value,
    resolve_pair,
)
from trickcore.models.deck import Deck
from trickcore.models.enums import (
    Difficulty,
    GamePhase,
    MoveCategory,
    Personality,
    QualityBand,
    Rank,
    ResolutionRule,
    Suit,
)
from trickcore.models.game_state import GameState, RoundRecord
from trickcore.models.player import Player, team_for_seat
from trickcore.models.trick import MoveRating, PlayerMove, PlayerStats, RoundResult

__all__ = [
    "POINT_VALUES",
    "RANK_ORDER",
    "Card",
    "Deck",
    "Difficulty",
    "GamePhase",
    "GameState",
    "MoveCategory",
    "MoveRating",
    "Ordering",
    "Personality",
    "Player",
    "PlayerMove",
    "PlayerStats",
    "QualityBand",
    "Rank",
    "ResolutionRule",
    "RoundRecord",
    "RoundResult",
    "Suit",
    "best_card",
    "compare_rank",
    "generate_full_deck",
    "legal_cards",
    "outranks",
    "point_value",
    "resolve_pair",
    "team_for_seat",
]
