#!/usr/bin/env python3
"""
CLI script to watch bots play a match.

This script seats heuristic and random bots at a table, plays a complete
match round by round and prints the evaluator's view of every round.
"""

import argparse
import logging
import sys
import time

import numpy as np

from trickcore.bots import BaseBot, HeuristicBot, RandomBot
from trickcore.models.enums import Difficulty, Personality
from trickcore.models.trick import RoundResult
from trickcore.services.match_runner import MatchRunner


class BotGameSimulator:
    """Simulates a match between bot players."""

    def __init__(
        self,
        num_players: int = 2,
        bot_types: list[str] | None = None,
        difficulty: Difficulty = Difficulty.MEDIUM,
        personality: Personality = Personality.ANALYTICAL,
        seed: int | None = None,
    ):
        """
        Initialize simulator.

        Args:
            num_players: Number of players (2, 4 or 6)
            bot_types: Bot type for each seat ("random" or "heuristic")
            difficulty: Difficulty of the heuristic bots
            personality: Starting personality of the heuristic bots
            seed: Seed for the shared random source
        """
        if num_players not in (2, 4, 6):
            raise ValueError("Must have 2, 4 or 6 players")

        self.num_players = num_players
        self.bot_types = bot_types or ["heuristic"] * num_players
        self.difficulty = difficulty
        self.personality = personality
        self.rng = np.random.default_rng(seed)
        self.runner: MatchRunner | None = None

    def setup_game(self) -> None:
        """Set up the match with bot players."""
        print(f"\n{'=' * 60}")
        print(f"Setting up a {self.num_players}-player match")
        print(f"{'=' * 60}\n")

        bots: list[BaseBot] = []
        for i in range(self.num_players):
            player_id = f"bot_{i}"
            bot_type = self.bot_types[i] if i < len(self.bot_types) else "heuristic"
            if bot_type == "random":
                bot: BaseBot = RandomBot(player_id, rng=self.rng)
            else:
                bot = HeuristicBot(player_id, self.personality, self.difficulty, self.rng)
            bots.append(bot)
            print(f"  Seat {i}: {player_id} ({bot_type})")

        self.runner = MatchRunner(bots, rng=self.rng)
        print(f"\n  Trump suit: {self.runner.state.trump_suit.value}")
        print(f"  Rounds: {self.runner.state.total_rounds}")

    def print_round(self, number: int, result: RoundResult) -> None:
        """Print one evaluated round."""
        print(f"\n  Round {number}:")
        print(f"  {'-' * 36}")
        for rating in result.move_ratings:
            print(f"    {rating.player_id}: {rating.card} (quality {rating.quality}/10)")
        print(f"  → Winner: {result.winning_player_id} ({result.winning_team}) for {result.points_earned} points")
        if result.bonus_points:
            print(f"  → Bonus: +{result.bonus_points}")

    def play_game(self) -> None:
        """Play a complete match."""
        start_time = time.time()
        self.setup_game()
        assert self.runner is not None

        number = 0
        while not self.runner.state.is_complete():
            number += 1
            self.print_round(number, self.runner.play_round())

        summary = self.runner.play_match()
        elapsed_time = time.time() - start_time

        print(f"\n{'=' * 60}")
        print("FINAL SCORES")
        print(f"{'=' * 60}\n")
        for team, score in summary.team_scores.items():
            print(f"  {team}: {score} points")
        for player_id, stats in summary.stats.items():
            if stats is not None:
                print(
                    f"  {player_id}: avg rating {stats.avg_rating:.1f}, "
                    f"good {stats.good_move_pct:.0f}%, bad {stats.bad_move_pct:.0f}%, "
                    f"trump usage {stats.trump_usage_rate:.0%}"
                )

        if summary.winning_team:
            print(f"\nWinner: {summary.winning_team}")
        else:
            print("\nThe match is tied")
        print(f"\nGame duration: {elapsed_time:.1f} seconds")
        print(f"{'=' * 60}\n")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Watch bots play a match")
    parser.add_argument(
        "--players",
        type=int,
        default=2,
        help="Number of players (2, 4 or 6)",
    )
    parser.add_argument(
        "--random",
        type=int,
        default=0,
        help="Number of random bots (rest will be heuristic)",
    )
    parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=Difficulty.MEDIUM.value,
        help="Difficulty of the heuristic bots",
    )
    parser.add_argument(
        "--personality",
        choices=[p.value for p in Personality],
        default=Personality.ANALYTICAL.value,
        help="Starting personality of the heuristic bots",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--verbose", action="store_true", help="Show engine debug logs")

    args = parser.parse_args()

    if args.players not in (2, 4, 6):
        print("Error: Must have 2, 4 or 6 players")
        sys.exit(1)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    # Set up bot types
    bot_types = []
    for i in range(args.players):
        if i < args.random:
            bot_types.append("random")
        else:
            bot_types.append("heuristic")

    # Run simulation
    simulator = BotGameSimulator(
        num_players=args.players,
        bot_types=bot_types,
        difficulty=Difficulty(args.difficulty),
        personality=Personality(args.personality),
        seed=args.seed,
    )
    simulator.play_game()


if __name__ == "__main__":
    main()
