"""Bot players for the trick-taking core.

Available bots:
- RandomBot: Plays random legal cards
- HeuristicBot: Personality- and difficulty-driven engine with opponent modeling
"""

from trickcore.bots.base_bot import BaseBot
from trickcore.bots.difficulty import DIFFICULTY_PROFILES, DifficultyProfile, profile_for
from trickcore.bots.heuristic_bot import Decision, ExplorationResult, HeuristicBot, classify_move
from trickcore.bots.personalities import PERSONALITY_STRATEGIES, PersonalityStrategy, ScoringContext
from trickcore.bots.random_bot import RandomBot

__all__ = [
    "DIFFICULTY_PROFILES",
    "PERSONALITY_STRATEGIES",
    "BaseBot",
    "Decision",
    "DifficultyProfile",
    "ExplorationResult",
    "HeuristicBot",
    "PersonalityStrategy",
    "RandomBot",
    "ScoringContext",
    "classify_move",
    "profile_for",
]
