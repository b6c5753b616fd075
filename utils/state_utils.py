"""Utility helpers for analyzing JSON game states."""
from __future__ import annotations

from typing import Dict, Set, Tuple

SUITS = ["H", "D", "C", "S"]


def _normalize_card(card: str) -> Tuple[str, str]:
    """Return (rank, suit) tuple with suit uppercased."""
    card = str(card)
    rank, suit = card[:-1], card[-1]
    return rank.upper(), suit.upper()


def get_hidden_cards(state: Dict) -> Set[Tuple[str, str]]:
    """Return the set of face-down cards in the tableau."""
    hidden: Set[Tuple[str, str]] = set()
    for col in state.get("tableau", []):
        cards = col.get("cards", [])
        down = int(col.get("face_down", 0))
        for c in cards[:down]:
            hidden.add(_normalize_card(c))
    return hidden


def count_empty_columns(state: Dict) -> int:
    """Count tableau columns that are completely empty."""
    return sum(
        1
        for col in state.get("tableau", [])
        if not col.get("cards") and int(col.get("face_down", 0)) == 0
    )


def extract_foundations(state: Dict) -> Dict[str, int]:
    """Return the number of cards in each foundation."""
    res: Dict[str, int] = {}
    for i, stack in enumerate(state.get("foundations", [])):
        suit = SUITS[i] if i < len(SUITS) else str(i)
        res[suit] = len(stack) if isinstance(stack, list) else int(stack or 0)
    return res
