"""AI opponent engine and round evaluator for a trick-taking card game."""

__version__ = "0.1.0"
