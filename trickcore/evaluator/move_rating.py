"""Post-hoc quality rating of individual moves."""

from dataclasses import dataclass, field

from trickcore.constants import (
    HIGH_VALUE_THRESHOLD,
    RATING_DEFAULT,
    RATING_HIGH_VALUE_THRESHOLD,
    RATING_MAX,
    RATING_MIN,
)
from trickcore.models.card import Card, is_top_trump_pair, outranks
from trickcore.models.enums import GamePhase, Rank, Suit
from trickcore.models.trick import PlayerMove

TEAM_PLAYER_COUNTS = (4, 6)


@dataclass(frozen=True)
class RatingContext:
    """Round-level facts every move rating needs.

    Attributes:
        trump_suit: Trump suit for the match
        phase: Stage of the match the round was played in
        player_count: Seats at the table
        winning_team: Team that took the round
        winning_player_id: Player whose card took the round

    """

    trump_suit: Suit
    phase: GamePhase
    player_count: int
    winning_team: str
    winning_player_id: str


@dataclass
class Rating:
    """Quality score with the clauses that produced it."""

    quality: int = RATING_DEFAULT
    clauses: list[str] = field(default_factory=list)

    def set(self, quality: int, clause: str) -> None:
        self.quality = quality
        self.clauses = [clause]

    def adjust(self, delta: int, clause: str) -> None:
        self.quality += delta
        self.clauses.append(clause)

    @property
    def reasoning(self) -> str:
        return " ".join(self.clauses)


def _is_high(card: Card) -> bool:
    return card.point_value > RATING_HIGH_VALUE_THRESHOLD


def _preceding_opponent(index: int, moves: list[PlayerMove]) -> PlayerMove | None:
    team = moves[index].team_id
    for earlier in reversed(moves[:index]):
        if earlier.team_id != team:
            return earlier
    return None


def _next_opponent(index: int, moves: list[PlayerMove]) -> PlayerMove | None:
    team = moves[index].team_id
    return next((m for m in moves[index + 1 :] if m.team_id != team), None)


def rate_leader(index: int, moves: list[PlayerMove], ctx: RatingContext) -> Rating:
    """Rate the card that opened the round."""
    move = moves[index]
    card = move.card
    trump = ctx.trump_suit
    is_trump = card.is_trump(trump)
    rating = Rating()

    if is_trump and _is_high(card):
        if card.is_top_trump(trump):
            if ctx.phase == GamePhase.LATE:
                rating.set(6, "Late game leading with high-value trump can be strategic to secure points.")
            elif ctx.phase == GamePhase.EARLY:
                rating.set(3, "Early game leading with high-value trump is risky and wastes valuable resources.")
            else:
                rating.set(4, "Mid game leading with high-value trump is situational.")
        else:
            rating.set(6, "Leading with high-value trump generally gives control, but uses up trump resources.")
    elif _is_high(card):
        if ctx.phase == GamePhase.LATE:
            rating.set(5, "Late game leading with high-value non-trump can be necessary to secure points.")
        else:
            rating.set(4, "Leading with high-value non-trump card is risky as it might be captured.")
    elif is_trump:
        if ctx.phase == GamePhase.LATE:
            rating.set(6, "Late game leading with low-value trump is strategic to preserve high trumps.")
        else:
            rating.set(7, "Leading with low-value trump can draw out higher trumps without risking much.")
    else:
        rating.set(6, "Leading with low-value non-trump is a reasonable probing move.")

    captured = False
    answer = _next_opponent(index, moves)
    if answer is not None:
        if answer.card.suit == card.suit and answer.card.strength > card.strength:
            rating.adjust(-1, "Move resulted in opponent capturing with higher card.")
            captured = True
        elif answer.card.is_trump(trump) and not is_trump:
            rating.adjust(-1, "Move resulted in opponent capturing with trump.")
            captured = True
        elif _is_high(card) and answer.card.suit != card.suit and not answer.card.is_trump(trump):
            rating.adjust(2, "Very effective as opponent couldn't capture the high-value card.")

    if not captured and card.point_value > HIGH_VALUE_THRESHOLD and move.team_id != ctx.winning_team:
        rating.adjust(-1, "High-value card ended up with the opposing team.")

    return rating


def rate_responder(index: int, previous: PlayerMove, moves: list[PlayerMove], ctx: RatingContext) -> Rating:
    """Rate a card played in answer to an opposing card."""
    card = moves[index].card
    prev = previous.card
    trump = ctx.trump_suit
    is_trump = card.is_trump(trump)
    high = _is_high(card)
    beats = outranks(card, prev, prev.suit, trump)
    rating = Rating()

    if ctx.player_count in TEAM_PLAYER_COUNTS and is_top_trump_pair(prev, card, trump):
        late = ctx.phase == GamePhase.LATE
        if card.rank == Rank.ACE:
            if late:
                rating.set(8, "Late game capturing 7 of trumps with A of trumps is excellent.")
            else:
                rating.set(9, "Excellent play capturing 7 of trumps with A of trumps.")
        elif late:
            rating.set(4, "Late game playing 7 of trumps against A of trumps is less risky.")
        else:
            rating.set(3, "Risky play - 7 of trumps will be captured by A of trumps.")
        return rating

    if ctx.player_count == 2 and is_trump and prev.is_trump(trump):
        if beats:
            rating.set(7, "Good play winning with higher trump card.")
        else:
            rating.set(4, "Lost with lower trump card.")
        return rating

    following = card.suit == prev.suit

    if index == len(moves) - 1:
        if not is_trump and high:
            if beats:
                rating.set(8, "Excellent play - as last player, using high-value non-trump to win while preserving trump cards.")
            else:
                rating.set(3, "Poor play - as last player, wasted high-value card when could have used trump to win.")
        elif not is_trump:
            if beats:
                rating.set(7, "Good play - as last player, winning with low-value card while preserving trump cards.")
            elif following:
                rating.set(6, "Good play - using low card to respond, preserving higher cards.")
            else:
                rating.set(6, "Good play - dumping low card when can't follow suit or trump.")
        elif not beats:
            rating.set(4, "Lost with lower trump card.")
        elif _is_high(prev):
            rating.set(7, "Good play - using trump to capture opponent's high card.")
        else:
            rating.set(5, "Reasonable play - using trump to win, but could have saved it for higher value cards.")
        return rating

    if following:
        if high and _is_high(prev):
            if beats:
                rating.set(7, "Good play - winning with higher card against opponent's high card.")
            else:
                rating.set(5, "Reasonable play - using high card to try to win, but lost to higher card.")
        elif high:
            if beats:
                rating.set(6, "Good play - winning with high card against low card, but could have used lower card.")
            else:
                rating.set(4, "Poor play - wasted high card when could have used lower card to win.")
        elif beats:
            rating.set(7, "Excellent play - winning with lowest possible card.")
        else:
            rating.set(6, "Good play - using low card to respond, preserving higher cards.")
    elif is_trump:
        if not beats:
            rating.set(4, "Lost with lower trump card.")
        elif _is_high(prev):
            rating.set(7, "Good play - using trump to capture opponent's high card.")
        else:
            rating.set(5, "Reasonable play - using trump to win, but could have saved it for higher value cards.")
    elif high:
        rating.set(3, "Poor play - wasting high card when can't follow suit or trump.")
    else:
        rating.set(6, "Good play - dumping low card when can't follow suit or trump.")
    return rating


def rate_move(index: int, moves: list[PlayerMove], ctx: RatingContext) -> tuple[int, str]:
    """Rate one move of a round on a 1-10 scale.

    The first move is rated as the lead; every other move is rated against
    the closest earlier card of the opposing team. Leading or answering with
    the Ace or Seven of trump is then nudged by game phase.

    Args:
        index: Position of the move in play order
        moves: All moves of the round in play order
        ctx: Round-level facts

    Returns:
        Tuple of (quality, reasoning)

    """
    move = moves[index]
    previous = _preceding_opponent(index, moves) if index > 0 else None

    if previous is None:
        rating = rate_leader(index, moves, ctx)
        prefix = ""
    else:
        rating = rate_responder(index, previous, moves, ctx)
        prefix = f"Responding to {previous.card}. "

    if move.card.is_top_trump(ctx.trump_suit):
        if ctx.phase == GamePhase.LATE:
            rating.adjust(1, "Late game trump preservation is valuable.")
        elif ctx.phase == GamePhase.EARLY:
            rating.adjust(-1, "Early game high trump usage is less optimal.")

    quality = max(RATING_MIN, min(RATING_MAX, rating.quality))

    reasoning = f"Player {move.player_id} played {move.card}. "
    if move.player_id == ctx.winning_player_id:
        reasoning += "This move won the round. "
    reasoning += prefix + rating.reasoning
    return quality, reasoning.strip()
