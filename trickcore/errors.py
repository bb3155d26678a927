"""Exceptions raised by the engine and the evaluator."""


class TrickCoreError(Exception):
    """Base class for all core errors."""


class EngineNotInitialized(TrickCoreError):
    """A move was requested before the engine was bound to a seat."""


class EmptyHand(TrickCoreError):
    """A move was requested for a seat holding no cards."""


class MalformedMoveSet(TrickCoreError):
    """The evaluator received moves that do not fit the configured player count."""
