"""Expose the autoplay strategy for easy import."""
from .session import StrategySession

__all__ = [
    "StrategySession",
    "StockPileKnowledge",
    "calculate_obvious_move",
    "compute_foundation_path",
    "compute_join_path",
    "execute_path",
    "perform_move",
    "Move",
    "WastePile",
    "Tableau",
    "Foundation",
    "PathStep",
    "PathResult",
    "INFEASIBLE",
    "StrategyError",
    "InvalidLocationAccess",
    "UnroutableMove",
    "KnowledgeDesync",
    "StaleMove",
    "SessionError",
]

from .errors import (
    StrategyError,
    InvalidLocationAccess,
    UnroutableMove,
    KnowledgeDesync,
    StaleMove,
    SessionError,
)
from .executor import execute_path, perform_move
from .knowledge import StockPileKnowledge
from .locations import Foundation, Move, PathStep, Tableau, WastePile
from .obvious import calculate_obvious_move
from .paths import INFEASIBLE, PathResult, compute_foundation_path, compute_join_path
