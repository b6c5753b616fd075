"""Per-game strategy session: initial sweep, turn stepping and peeking."""
from __future__ import annotations

from typing import Iterator, Optional, Tuple

import logging

from klondike_core import KING, GameState, draw_from_stock, reset_stock

from .errors import SessionError
from .executor import execute_path, perform_move
from .knowledge import StockPileKnowledge
from .locations import Foundation, LocationTag, Move, Tableau
from .obvious import calculate_obvious_move
from .paths import compute_foundation_path, compute_join_path

logger = logging.getLogger(__name__)


class StrategySession:
    """Autoplay strategy bound to a single game.

    The session owns the :class:`StockPileKnowledge` of its game, so several
    games can be played side by side with one session each.  Call
    :meth:`initialize` once with the dealt state, then :meth:`step` until it
    reports that no move was made.
    """

    def __init__(self, knowledge: Optional[StockPileKnowledge] = None) -> None:
        self.knowledge = knowledge if knowledge is not None else StockPileKnowledge()
        self.initialized = False

    # -- initial sweep -------------------------------------------------------

    def initialize(self, initial_state: GameState) -> GameState:
        """Draw through the whole stock once to learn its order.

        Obvious moves are played as soon as they appear so that cards taken
        off the waste pile are never remembered.  The stock is reset at the
        end, which puts the game back at its starting draw position.
        """

        if self.initialized:
            raise SessionError("Session already initialized")
        self.initialized = True

        state = initial_state
        draws = state.stock_pile_size
        for _ in range(draws):
            state = draw_from_stock(state)
            self.knowledge.record(state.waste_pile_top)
            state = self._drain_obvious_moves(state)

        if logger.isEnabledFor(logging.DEBUG):
            for i, card in enumerate(self.knowledge):
                logger.debug("%d = %s", i, card)
        logger.info("Stock pile explored, %d cards remembered", len(self.knowledge))

        if draws:
            state = reset_stock(state)
        return state

    def _drain_obvious_moves(self, state: GameState) -> GameState:
        move = calculate_obvious_move(state)
        while move is not None:
            state = self._play(state, move)
            move = calculate_obvious_move(state)
        return state

    def _play(self, state: GameState, move: Move) -> GameState:
        if move.src.tag is LocationTag.WASTE_PILE:
            self.knowledge.consume(state.waste_pile_top)
        logger.info("Playing %s", move)
        return perform_move(state, move)

    # -- turns ---------------------------------------------------------------

    def step(self, state: GameState) -> Tuple[GameState, bool]:
        """Play one turn. Returns the new state and whether anything moved."""
        if not self.initialized:
            raise SessionError("initialize() must be called before step()")

        move = calculate_obvious_move(state)
        if move is not None:
            return self._play(state, move), True

        return self.enroute_to_obvious_by_peeking(state)

    # -- peeking -------------------------------------------------------------

    def _join_candidates(self, state: GameState) -> Iterator[Tuple[int, int]]:
        columns = state.tableau
        # (a) runs sitting on hidden cards
        for src in reversed(range(len(columns))):
            if columns[src].num_hidden == 0 or not columns[src].cards:
                continue
            for dest in range(len(columns)):
                if dest != src:
                    yield src, dest

        # (b) whole columns, except runs already headed by a King
        for src in reversed(range(len(columns))):
            column = columns[src]
            if column.num_hidden != 0 or not column.cards or column.cards[0].rank == KING:
                continue
            for dest in range(len(columns)):
                if dest != src:
                    yield src, dest

    def _promotion_candidates(self, state: GameState) -> Iterator[Tuple[int, int]]:
        """Yield ``(column, position)`` pairs worth promoting, best first.

        Only the exposed top card of a column can be lifted onto a foundation,
        so the fallback tier plans for that card rather than the bottom of
        the run. For single-card columns the two are the same card.
        """
        # (c) single cards, promoting them may empty the column
        for src, column in enumerate(state.tableau):
            if len(column.cards) == 1:
                yield src, 0

        # (d) anything that grows a foundation
        for src, column in enumerate(state.tableau):
            if column.cards:
                yield src, len(column.cards) - 1

    def enroute_to_obvious_by_peeking(self, state: GameState) -> Tuple[GameState, bool]:
        """Use the remembered stock to unlock a move the visible cards cannot."""
        for src, dest in self._join_candidates(state):
            logger.debug("Searching for %d -> %d!", src, dest)
            path = compute_join_path(state, self.knowledge, src, dest)
            if path:
                logger.info("Path %d -> %d exists! Executing path...", src, dest)
                dest_top = max(len(state.tableau[dest].cards) - 1, 0)
                return (
                    execute_path(
                        state, self.knowledge, path.steps, Move(Tableau(src, 0), Tableau(dest, dest_top))
                    ),
                    True,
                )

        logger.debug("Attempting lazy promotion!")
        for src, position in self._promotion_candidates(state):
            path = compute_foundation_path(state, self.knowledge, src, position)
            if path:
                card = state.tableau[src].cards[position]
                logger.info("Promoting %s from tableau %d by peeking", card, src)
                final = Move(Tableau(src, position), Foundation(int(card.suit)))
                return execute_path(state, self.knowledge, path.steps, final), True

        logger.info("No move found")
        return state, False
