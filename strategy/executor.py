"""Apply moves and planned paths to a live game state."""
from __future__ import annotations

from typing import Callable, Dict, Sequence, Tuple

import logging

from klondike_core import (
    Card,
    GameState,
    TableauPosition,
    draw_from_stock,
    move_column_to_column,
    move_tableau_to_foundation,
    move_waste_to_foundation,
    move_waste_to_tableau,
    reset_stock,
)

from .errors import KnowledgeDesync, StaleMove, UnroutableMove
from .knowledge import StockPileKnowledge
from .locations import LocationTag, Move, PathStep

logger = logging.getLogger(__name__)


def _waste_to_tableau(state: GameState, move: Move) -> GameState:
    return move_waste_to_tableau(state, move.dest.index)


def _waste_to_foundation(state: GameState, move: Move) -> GameState:
    return move_waste_to_foundation(state, move.dest.index)


def _tableau_to_foundation(state: GameState, move: Move) -> GameState:
    return move_tableau_to_foundation(state, move.src.index, move.dest.index)


def _tableau_to_tableau(state: GameState, move: Move) -> GameState:
    column = move.src.index
    position = TableauPosition(
        column=column,
        num_hidden=state.tableau[column].num_hidden,
        position=move.src.sub_index,
    )
    return move_column_to_column(state, position, move.dest.index)


_ROUTES: Dict[Tuple[LocationTag, LocationTag], Callable[[GameState, Move], GameState]] = {
    (LocationTag.WASTE_PILE, LocationTag.TABLEAU): _waste_to_tableau,
    (LocationTag.WASTE_PILE, LocationTag.FOUNDATION): _waste_to_foundation,
    (LocationTag.TABLEAU, LocationTag.FOUNDATION): _tableau_to_foundation,
    (LocationTag.TABLEAU, LocationTag.TABLEAU): _tableau_to_tableau,
}


def perform_move(state: GameState, move: Move) -> GameState:
    """Dispatch ``move`` to the matching primitive."""
    route = _ROUTES.get((move.src.tag, move.dest.tag))
    if route is None:
        raise UnroutableMove(f"No primitive moves {move}")
    return route(state, move)


def surface_card(state: GameState, knowledge: StockPileKnowledge, card: Card) -> GameState:
    """Cycle the stock until ``card`` is on top of the waste pile."""
    if card not in knowledge:
        raise KnowledgeDesync(f"{card} is not known to be in the stock")

    resets = 0
    while state.waste_pile_top != card:
        if state.stock_pile_size == 0:
            # a second reset means a full cycle went by without the card
            if resets == 1 or not state.waste:
                raise KnowledgeDesync(f"{card} did not surface from the stock")
            state = reset_stock(state)
            resets += 1
        else:
            state = draw_from_stock(state)
    return state


def _carried_along(state: GameState, move: Move, card: Card) -> bool:
    """``True`` if ``card`` already sits on the destination column."""
    if move.dest.tag is not LocationTag.TABLEAU:
        return False
    return card in state.tableau[move.dest.index].cards


def _apply_step(state: GameState, knowledge: StockPileKnowledge, step: PathStep) -> GameState:
    move, card = step
    if move.src.tag is LocationTag.WASTE_PILE:
        state = surface_card(state, knowledge, card)
        knowledge.consume(card)
        return perform_move(state, move)

    cards = state.tableau[move.src.index].cards
    position = move.src.sub_index
    if position < len(cards) and cards[position] == card:
        return perform_move(state, move)
    if _carried_along(state, move, card):
        logger.info("  %s already moved along with its run", card)
        return state
    raise StaleMove(f"Expected {card} at {move.src}")


def execute_path(
    state: GameState,
    knowledge: StockPileKnowledge,
    path: Sequence[PathStep],
    final_move: Move,
) -> GameState:
    """Play every step of ``path`` and then ``final_move``."""
    for i, step in enumerate(path):
        logger.info("  Step %d: %s", i, step)
        state = _apply_step(state, knowledge, step)

    logger.info("  Final: %s", final_move)
    state = perform_move(state, final_move)
    logger.info("Completed a successful cycle")
    return state
