"""Textual round analysis."""

from trickcore.models.enums import QualityBand
from trickcore.models.trick import MoveRating, PlayerMove


def build_round_analysis(
    moves: list[PlayerMove],
    ratings: list[MoveRating],
    winning_team: str,
    winning_player_id: str,
    points_earned: int,
    overall_quality: float,
    band: QualityBand,
    notes: list[str] | None = None,
) -> str:
    """Summarize a round for display.

    Args:
        moves: Moves in play order
        ratings: Rating of each move, same order
        winning_team: Team that took the round
        winning_player_id: Player whose card took the round
        points_earned: Points awarded, stake and bonus included
        overall_quality: Mean move quality
        band: Qualitative band of the mean
        notes: Extra lines such as bonus or fallback explanations

    Returns:
        Multi-line analysis text

    """
    sequence = " → ".join(f"{m.player_id}({m.card})" for m in moves)
    lines = [f"Round Sequence: {sequence}"]

    if ratings:
        best = max(ratings, key=lambda r: r.quality)
        worst = min(ratings, key=lambda r: r.quality)
        lines.append(f"Best Move: {best.player_id} ({best.quality}/10) - {best.reasoning}")
        lines.append(f"Worst Move: {worst.player_id} ({worst.quality}/10) - {worst.reasoning}")

    lines.append(f"Outcome: Team {winning_team} won the round with player {winning_player_id}'s card.")
    lines.extend(notes or [])
    lines.append(f"Points Earned: {points_earned}")
    lines.append(f"Round Quality: {overall_quality:.1f}/10 - {band.value}")
    return "\n".join(lines)
