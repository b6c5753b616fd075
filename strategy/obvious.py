"""Zero-lookahead move selection.

Obvious moves are moves that strictly lead the game to a better state.  They
are tried in a fixed priority order and only look at visible cards:

0. promote an Ace,
1. promote a Two onto its Ace,
2. move an exposed run so that a face-down card can be turned over.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

import logging

from klondike_core import ACE, DEUCE, KING, Card, GameState

from .locations import Foundation, Move, Tableau, WastePile

logger = logging.getLogger(__name__)


def possible_to_play_deuce(state: GameState, card: Card) -> bool:
    """Return ``True`` if ``card`` is a Two whose foundation holds only the Ace."""
    top = state.foundation[card.suit]
    ok = top is not None and top.rank == ACE and card.rank == DEUCE
    if ok:
        logger.debug("Possible to promote %s to foundation", card)
    return ok


def _joins(src: Card, dest: Optional[Card]) -> bool:
    if dest is None:
        return src.rank == KING
    return src.rank == dest.rank - 1 and src.color != dest.color


def _top_position(state: GameState, column: int) -> int:
    return max(len(state.tableau[column].cards) - 1, 0)


def _promote_ace(state: GameState) -> Optional[Move]:
    waste = state.waste_pile_top
    if waste is not None and waste.rank == ACE:
        return Move(WastePile(), Foundation(int(waste.suit)))

    for i, column in enumerate(state.tableau):
        card = column.top
        if card is not None and card.rank == ACE:
            return Move(Tableau(i, len(column.cards) - 1), Foundation(int(card.suit)))
    return None


def _promote_deuce(state: GameState) -> Optional[Move]:
    waste = state.waste_pile_top
    if waste is not None and possible_to_play_deuce(state, waste):
        return Move(WastePile(), Foundation(int(waste.suit)))

    for i, column in enumerate(state.tableau):
        card = column.top
        if card is not None and possible_to_play_deuce(state, card):
            return Move(Tableau(i, len(column.cards) - 1), Foundation(int(card.suit)))
    return None


def _free_down_card(state: GameState) -> Optional[Move]:
    candidates: List[Tuple[int, int, int]] = []
    for i, column in enumerate(state.tableau):
        if column.num_hidden == 0 or not column.cards:
            continue
        bottom = column.cards[0]
        for j, other in enumerate(state.tableau):
            if i != j and _joins(bottom, other.top):
                candidates.append((column.num_hidden, i, j))

    if not candidates:
        return None

    # max() keeps the first of equal keys, i.e. scan order breaks ties
    _, src, dest = max(candidates, key=lambda c: c[0])
    dest_top = state.tableau[dest].top
    logger.info(
        "Moving visible tableau from %d(%s) -> %d(%s) to release more hidden cards",
        src,
        state.tableau[src].top,
        dest,
        dest_top if dest_top is not None else "<NONE>",
    )
    return Move(Tableau(src, 0), Tableau(dest, _top_position(state, dest)))


def calculate_obvious_move(state: GameState) -> Optional[Move]:
    """Return the highest priority obvious move, or ``None``."""
    for rule in (_promote_ace, _promote_deuce, _free_down_card):
        move = rule(state)
        if move is not None:
            return move
    return None
