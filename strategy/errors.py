"""Exceptions raised by the autoplay strategy.

Path searches that fail are *not* errors, they return
:data:`strategy.paths.INFEASIBLE`.  Everything below signals a bug or a
desynchronised session and is not meant to be recovered from mid-game.
"""


class StrategyError(Exception):
    """Base class for strategy faults."""


class InvalidLocationAccess(StrategyError):
    """A field was requested from a location variant that does not carry it."""


class UnroutableMove(StrategyError):
    """No primitive handles the (source, destination) pair of a move."""


class KnowledgeDesync(StrategyError):
    """Remembered stock contents no longer match the physical stock."""


class StaleMove(StrategyError):
    """A planned tableau step no longer matches the live state."""


class SessionError(StrategyError):
    """A session was used out of order."""
