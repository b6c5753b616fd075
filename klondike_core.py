"""Pure-Python Klondike engine used by the autoplay strategy.

The module owns the card model, the immutable :class:`GameState` value and
the primitive transitions (draw, reset, and the four card moves).  Every
transition validates its input, raises :class:`IllegalMove` when the move is
not allowed and returns a brand new state; nothing is mutated in place.

States can be exchanged as JSON using the same layout as the analysis helpers
in :mod:`utils.state_utils`::

    {"tableau": [{"cards": ["KS", "7H"], "face_down": 1}, ...],
     "foundations": [["AH", "2H"], [], [], []],
     "waste": ["9C"], "stock": ["QD", ...]}
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Dict, List, Optional, Tuple

import json

import numpy as np


NUM_COLUMNS = 7
NUM_FOUNDATIONS = 4

ACE = 1
DEUCE = 2
KING = 13

RANK_LABELS = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")
SUIT_LETTERS = ("H", "D", "C", "S")


class IllegalMove(ValueError):
    """Raised when a primitive is applied to a state that does not allow it."""


class Color(Enum):
    RED = "red"
    BLACK = "black"


class Suit(IntEnum):
    """Card suits, valued by their foundation index."""

    HEARTS = 0
    DIAMONDS = 1
    CLUBS = 2
    SPADES = 3

    @property
    def letter(self) -> str:
        return SUIT_LETTERS[self.value]

    @property
    def color(self) -> Color:
        return Color.RED if self in (Suit.HEARTS, Suit.DIAMONDS) else Color.BLACK


@dataclass(frozen=True)
class Card:
    """Immutable playing card. ``rank`` runs from 1 (Ace) to 13 (King)."""

    suit: Suit
    rank: int

    def __post_init__(self) -> None:
        if not ACE <= self.rank <= KING:
            raise IllegalMove(f"Invalid rank: {self.rank}")
        object.__setattr__(self, "suit", Suit(self.suit))

    @property
    def color(self) -> Color:
        return self.suit.color

    @property
    def index(self) -> int:
        """Stable index in ``0..51``."""
        return (self.rank - 1) * 4 + int(self.suit)

    @classmethod
    def parse(cls, text: str) -> "Card":
        """Build a card from its text form, e.g. ``"10D"`` or ``"qs"``."""
        text = str(text).strip()
        rank_label, letter = text[:-1].upper(), text[-1:].upper()
        if rank_label not in RANK_LABELS or letter not in SUIT_LETTERS:
            raise IllegalMove(f"Invalid card: {text!r}")
        return cls(Suit(SUIT_LETTERS.index(letter)), RANK_LABELS.index(rank_label) + 1)

    def __str__(self) -> str:
        return f"{RANK_LABELS[self.rank - 1]}{self.suit.letter}"


def full_deck() -> List[Card]:
    """Return the 52 cards ordered by :attr:`Card.index`."""
    return [Card(Suit(i % 4), i // 4 + 1) for i in range(52)]


def can_stack(card: Card, onto: Optional[Card]) -> bool:
    """Return ``True`` if ``card`` may be placed on a column topped by ``onto``."""
    if onto is None:
        return card.rank == KING
    return card.rank == onto.rank - 1 and card.color != onto.color


def can_promote(card: Card, foundation_top: Optional[Card]) -> bool:
    """Return ``True`` if ``card`` may go on a foundation topped by ``foundation_top``."""
    if foundation_top is None:
        return card.rank == ACE
    return card.suit == foundation_top.suit and card.rank == foundation_top.rank + 1


@dataclass(frozen=True)
class TableauColumn:
    """A tableau column: face-down cards followed by the exposed run.

    ``cards[0]`` is the bottom of the exposed run and ``cards[-1]`` the top.
    """

    hidden: Tuple[Card, ...] = ()
    cards: Tuple[Card, ...] = ()

    @property
    def num_hidden(self) -> int:
        return len(self.hidden)

    @property
    def top(self) -> Optional[Card]:
        return self.cards[-1] if self.cards else None

    @property
    def is_empty(self) -> bool:
        return not self.cards and not self.hidden

    def _remove_from(self, position: int) -> "TableauColumn":
        """Drop exposed cards from ``position`` on, flipping a hidden card if needed."""
        cards = self.cards[:position]
        hidden = self.hidden
        if not cards and hidden:
            cards = (hidden[-1],)
            hidden = hidden[:-1]
        return TableauColumn(hidden, cards)

    def _append(self, run: Tuple[Card, ...]) -> "TableauColumn":
        return TableauColumn(self.hidden, self.cards + tuple(run))


@dataclass(frozen=True)
class TableauPosition:
    """Address of an exposed run start, as consumed by :func:`move_column_to_column`."""

    column: int
    num_hidden: int
    position: int


@dataclass(frozen=True)
class GameState:
    """Immutable Klondike state.

    ``waste[-1]`` is the playable waste card and ``stock[0]`` the next card
    to be drawn.
    """

    tableau: Tuple[TableauColumn, ...]
    foundation: Tuple[Optional[Card], ...] = (None,) * NUM_FOUNDATIONS
    waste: Tuple[Card, ...] = ()
    stock: Tuple[Card, ...] = ()

    @property
    def waste_pile_top(self) -> Optional[Card]:
        return self.waste[-1] if self.waste else None

    @property
    def stock_pile_size(self) -> int:
        return len(self.stock)

    def copy_with(self, **changes) -> "GameState":
        """Create a new state with the given fields replaced."""
        return replace(self, **changes)

    def _with_column(self, index: int, column: TableauColumn) -> "GameState":
        tableau = list(self.tableau)
        tableau[index] = column
        return self.copy_with(tableau=tuple(tableau))

    def _with_foundation(self, index: int, card: Card) -> "GameState":
        foundation = list(self.foundation)
        foundation[index] = card
        return self.copy_with(foundation=tuple(foundation))


def new_game(seed: Optional[int] = None) -> GameState:
    """Deal a shuffled deck.

    Column ``i`` receives ``i`` face-down cards and one exposed card; the 24
    remaining cards form the stock.
    """

    rng = np.random.default_rng(seed)
    deck = full_deck()
    order = [deck[int(i)] for i in rng.permutation(len(deck))]

    tableau = []
    pos = 0
    for col in range(NUM_COLUMNS):
        hidden = tuple(order[pos:pos + col])
        pos += col
        tableau.append(TableauColumn(hidden, (order[pos],)))
        pos += 1
    return GameState(tableau=tuple(tableau), stock=tuple(order[pos:]))


# --- Primitive transitions ------------------------------------------------


def _check_column(index: int) -> None:
    if not 0 <= index < NUM_COLUMNS:
        raise IllegalMove(f"Invalid tableau column: {index}")


def _check_foundation(card: Card, dest: int) -> None:
    if dest != int(card.suit):
        raise IllegalMove(f"{card} does not belong on foundation {dest}")


def draw_from_stock(state: GameState) -> GameState:
    """Turn the next stock card onto the waste pile."""

    if not state.stock:
        raise IllegalMove("Stock pile is empty")
    return state.copy_with(stock=state.stock[1:], waste=state.waste + state.stock[:1])


def reset_stock(state: GameState) -> GameState:
    """Recycle the waste pile into the stock, preserving draw order."""

    if state.stock:
        raise IllegalMove("Stock pile is not exhausted")
    return state.copy_with(stock=state.waste, waste=())


def move_waste_to_tableau(state: GameState, dest: int) -> GameState:
    _check_column(dest)
    card = state.waste_pile_top
    if card is None:
        raise IllegalMove("Waste pile is empty")
    column = state.tableau[dest]
    if not can_stack(card, column.top):
        raise IllegalMove(f"Cannot place {card} on tableau {dest}")
    state = state.copy_with(waste=state.waste[:-1])
    return state._with_column(dest, column._append((card,)))


def move_waste_to_foundation(state: GameState, dest: int) -> GameState:
    card = state.waste_pile_top
    if card is None:
        raise IllegalMove("Waste pile is empty")
    _check_foundation(card, dest)
    if not can_promote(card, state.foundation[dest]):
        raise IllegalMove(f"Cannot promote {card} to foundation {dest}")
    state = state.copy_with(waste=state.waste[:-1])
    return state._with_foundation(dest, card)


def move_tableau_to_foundation(state: GameState, src: int, dest: int) -> GameState:
    """Promote the exposed top card of column ``src``."""

    _check_column(src)
    column = state.tableau[src]
    card = column.top
    if card is None:
        raise IllegalMove(f"Tableau {src} is empty")
    _check_foundation(card, dest)
    if not can_promote(card, state.foundation[dest]):
        raise IllegalMove(f"Cannot promote {card} to foundation {dest}")
    state = state._with_column(src, column._remove_from(len(column.cards) - 1))
    return state._with_foundation(dest, card)


def move_column_to_column(state: GameState, position: TableauPosition, dest: int) -> GameState:
    """Move the exposed run starting at ``position`` onto column ``dest``."""

    _check_column(position.column)
    _check_column(dest)
    if position.column == dest:
        raise IllegalMove("Source and destination columns are the same")
    column = state.tableau[position.column]
    if position.num_hidden != column.num_hidden:
        raise IllegalMove(
            f"Tableau {position.column} has {column.num_hidden} hidden cards, "
            f"not {position.num_hidden}"
        )
    if not 0 <= position.position < len(column.cards):
        raise IllegalMove(f"No exposed card at {position}")
    run = column.cards[position.position:]
    target = state.tableau[dest]
    if not can_stack(run[0], target.top):
        raise IllegalMove(f"Cannot place {run[0]} on tableau {dest}")
    state = state._with_column(position.column, column._remove_from(position.position))
    return state._with_column(dest, target._append(run))


def is_won(state: GameState) -> bool:
    """Return ``True`` once every foundation holds its King."""

    return all(card is not None and card.rank == KING for card in state.foundation)


# --- JSON codec -------------------------------------------------------------


def state_to_dict(state: GameState) -> Dict:
    return {
        "tableau": [
            {
                "cards": [str(c) for c in col.hidden + col.cards],
                "face_down": col.num_hidden,
            }
            for col in state.tableau
        ],
        "foundations": [
            [str(Card(top.suit, rank)) for rank in range(ACE, top.rank + 1)] if top else []
            for top in state.foundation
        ],
        "waste": [str(c) for c in state.waste],
        "stock": [str(c) for c in state.stock],
    }


def state_to_json(state: GameState) -> str:
    """Encode ``state`` as a JSON string."""

    return json.dumps(state_to_dict(state))


def state_from_dict(data: Dict) -> GameState:
    tableau = []
    for col in data.get("tableau", []):
        cards = [Card.parse(c) for c in col.get("cards", [])]
        down = int(col.get("face_down", 0))
        tableau.append(TableauColumn(tuple(cards[:down]), tuple(cards[down:])))
    while len(tableau) < NUM_COLUMNS:
        tableau.append(TableauColumn())

    foundation: List[Optional[Card]] = [None] * NUM_FOUNDATIONS
    for i, stack in enumerate(data.get("foundations", [])[:NUM_FOUNDATIONS]):
        if stack:
            foundation[i] = Card.parse(stack[-1])

    return GameState(
        tableau=tuple(tableau),
        foundation=tuple(foundation),
        waste=tuple(Card.parse(c) for c in data.get("waste", [])),
        stock=tuple(Card.parse(c) for c in data.get("stock", [])),
    )


def state_from_json(text: str) -> GameState:
    """Decode a state produced by :func:`state_to_json`."""

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError("Invalid JSON state") from exc
    if not isinstance(data, dict):
        raise ValueError("State should be a JSON object")
    return state_from_dict(data)


__all__ = [
    "ACE",
    "DEUCE",
    "KING",
    "Card",
    "Color",
    "GameState",
    "IllegalMove",
    "Suit",
    "TableauColumn",
    "TableauPosition",
    "can_promote",
    "can_stack",
    "draw_from_stock",
    "full_deck",
    "is_won",
    "move_column_to_column",
    "move_tableau_to_foundation",
    "move_waste_to_foundation",
    "move_waste_to_tableau",
    "new_game",
    "reset_stock",
    "state_from_dict",
    "state_from_json",
    "state_to_dict",
    "state_to_json",
]
