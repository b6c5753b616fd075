"""Memory of the stock pile contents gathered during the initial sweep."""
from __future__ import annotations

from typing import Callable, Iterator, List, Optional

import logging

from klondike_core import Card

from .errors import KnowledgeDesync

logger = logging.getLogger(__name__)


class StockPileKnowledge:
    """Ordered record of the stock cards that have not been played yet.

    The order is the order in which the cards surface when the stock is
    drawn from the top after a reset.  A card is removed as soon as a move
    takes it off the waste pile, so the record always matches the cards that
    are still circulating through stock and waste.
    """

    def __init__(self) -> None:
        self._cards: List[Card] = []

    def record(self, card: Card) -> None:
        """Append a newly surfaced card."""
        if card in self._cards:
            raise KnowledgeDesync(f"{card} is already known to be in the stock")
        self._cards.append(card)

    def consume(self, card: Card) -> None:
        """Forget ``card`` once it has been moved off the waste pile."""
        try:
            self._cards.remove(card)
        except ValueError as exc:
            raise KnowledgeDesync(f"{card} was never seen in the stock") from exc
        logger.debug("Consumed %s from stock knowledge, %d left", card, len(self._cards))

    def find(self, predicate: Callable[[Card], bool]) -> Optional[Card]:
        """Return the first remembered card satisfying ``predicate``."""
        for card in self._cards:
            if predicate(card):
                return card
        return None

    def __contains__(self, card: object) -> bool:
        return card in self._cards

    def __iter__(self) -> Iterator[Card]:
        return iter(list(self._cards))

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"StockPileKnowledge([{', '.join(str(c) for c in self._cards)}])"
