"""Multi-step plans that rely on the remembered stock contents.

Both finders work on a snapshot of the state: cards picked from the tableau
are only marked as used locally, nothing is moved until the plan is handed to
:func:`strategy.executor.execute_path`.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Callable, List, Optional, Set, Tuple

import logging

from klondike_core import KING, Card, GameState

from .knowledge import StockPileKnowledge
from .locations import Foundation, Location, LocationTag, Move, PathStep, Tableau, WastePile

logger = logging.getLogger(__name__)


class SearchState(Enum):
    SEARCHING = "searching"
    FOUND = "found"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class PathResult:
    """Outcome of a path search. Falsy when no path exists."""

    steps: Tuple[PathStep, ...] = ()
    feasible: bool = True

    def __bool__(self) -> bool:
        return self.feasible

    @property
    def waste_steps(self) -> int:
        """Number of steps that take a card off the waste pile."""
        return sum(1 for s in self.steps if s.move.src.tag is LocationTag.WASTE_PILE)


INFEASIBLE = PathResult(feasible=False)


class _TableauTops:
    """Exposed column tops, consumed one by one within a single search."""

    def __init__(self, state: GameState, excluded: Tuple[int, ...]) -> None:
        self._state = state
        self._left = [len(col.cards) for col in state.tableau]
        self._excluded: Set[int] = set(excluded)

    def take(self, wanted: Callable[[Card], bool]) -> Optional[Tuple[Location, Card]]:
        for i, left in enumerate(self._left):
            if i in self._excluded or left <= 0:
                continue
            card = self._state.tableau[i].cards[left - 1]
            if wanted(card):
                self._left[i] -= 1
                logger.debug("---> Found %s in tableau %d", card, i)
                return Tableau(i, left - 1), card
        return None


def _search(
    knowledge: StockPileKnowledge,
    tops: _TableauTops,
    wanted: Callable[[Card], bool],
) -> Tuple[SearchState, Optional[Tuple[Location, Card]]]:
    """Find a card matching ``wanted``, stock knowledge first, then the tableau."""
    status: SearchState = SearchState.SEARCHING
    hit: Optional[Tuple[Location, Card]] = None

    card = knowledge.find(wanted)
    if card is not None:
        logger.debug("---> Found %s in deck", card)
        status, hit = SearchState.FOUND, (WastePile(), card)

    if status is SearchState.SEARCHING:
        hit = tops.take(wanted)
        status = SearchState.EXHAUSTED if hit is None else SearchState.FOUND

    return status, hit


def _same_suit_rank(suit: int, rank: int, card: Card) -> bool:
    return card.suit == suit and card.rank == rank


def _continues(frontier: Card, card: Card) -> bool:
    return card.rank == frontier.rank + 1 and card.color != frontier.color


def compute_foundation_path(
    state: GameState,
    knowledge: StockPileKnowledge,
    src: int,
    position: int = 0,
) -> PathResult:
    """Plan the promotions needed before ``tableau[src].cards[position]`` can be promoted.

    Every missing rank of the card's suit, from the current foundation top up
    to the card itself, must be found either in the remembered stock or on
    top of another column.  The Ace must already be on its foundation.
    """

    card = state.tableau[src].cards[position]
    foundation_top = state.foundation[card.suit]
    if foundation_top is None or foundation_top.rank >= card.rank:
        return INFEASIBLE

    target = Foundation(int(card.suit))
    tops = _TableauTops(state, excluded=(src,))
    steps: List[PathStep] = []

    for looking_for in range(foundation_top.rank + 1, card.rank):
        status, hit = _search(
            knowledge, tops, partial(_same_suit_rank, card.suit, looking_for)
        )
        if status is SearchState.EXHAUSTED:
            return INFEASIBLE
        location, node = hit
        steps.append(PathStep(Move(location, target), node))

    return PathResult(tuple(steps))


def direct_placement_possible(src: Card, dest: Optional[Card]) -> bool:
    """Cheap check that a run starting with ``src`` could ever sit on ``dest``.

    With alternating colors, ranks an even distance apart share a color and
    ranks an odd distance apart do not.
    """

    if dest is None:
        return True
    diff = dest.rank - src.rank
    if diff <= 0:
        return False
    same_color = src.color == dest.color
    return same_color if diff % 2 == 0 else not same_color


def compute_join_path(
    state: GameState,
    knowledge: StockPileKnowledge,
    src: int,
    dest: int,
) -> PathResult:
    """Plan the cards needed to bridge the run of ``src`` onto column ``dest``.

    The bridge is discovered upwards from the run's bottom card and played
    downwards: the card that lands on ``dest`` first comes first in the
    returned steps.
    """

    source = state.tableau[src]
    if not source.cards:
        return INFEASIBLE
    src_card = source.cards[0]
    dest_card = state.tableau[dest].top

    if not direct_placement_possible(src_card, dest_card):
        logger.debug("%s can never join %s, skipping search", src_card, dest_card)
        return INFEASIBLE

    limit = dest_card.rank - 1 if dest_card is not None else KING
    tops = _TableauTops(state, excluded=(src, dest))
    found: List[Tuple[Location, Card]] = []

    frontier = src_card
    while frontier.rank < limit:
        logger.debug("=> Looking for continuation for %s", frontier)
        status, hit = _search(knowledge, tops, partial(_continues, frontier))
        if status is SearchState.EXHAUSTED:
            return INFEASIBLE
        found.append(hit)
        frontier = hit[1]

    found.reverse()
    landing = len(state.tableau[dest].cards)
    return PathResult(
        tuple(
            PathStep(Move(location, Tableau(dest, landing + k)), card)
            for k, (location, card) in enumerate(found)
        )
    )
