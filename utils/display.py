"""Plain-text rendering of game states."""
from __future__ import annotations

from typing import List, Optional

from colored import attr, fg, stylize

from klondike_core import Card, Color, GameState, NUM_FOUNDATIONS, SUIT_LETTERS

HIDDEN = "##"
EMPTY = "--"


def render_card(card: Optional[Card], use_color: bool = True) -> str:
    """Return a 3-character label for ``card``, red suits highlighted."""
    if card is None:
        return f"{EMPTY:>3}"
    label = f"{str(card):>3}"
    if use_color and card.color is Color.RED:
        return stylize(label, fg("red") + attr("bold"))
    return label


def render_state(state: GameState, use_color: bool = True) -> str:
    """Render ``state`` as a multi-line string.

    The first line shows stock size, waste top and foundations, followed by
    one row per tableau depth with hidden cards printed as ``##``.
    """
    foundations = " ".join(
        f"{SUIT_LETTERS[i]}:{render_card(state.foundation[i], use_color)}"
        for i in range(NUM_FOUNDATIONS)
    )
    lines: List[str] = [
        f"stock={state.stock_pile_size:<2} waste={render_card(state.waste_pile_top, use_color)}"
        f"  {foundations}"
    ]

    columns = [
        [f"{HIDDEN:>3}"] * col.num_hidden + [render_card(c, use_color) for c in col.cards]
        for col in state.tableau
    ]
    depth = max((len(c) for c in columns), default=0)
    for row in range(depth):
        cells = [col[row] if row < len(col) else "   " for col in columns]
        lines.append(" ".join(cells).rstrip())
    return "\n".join(lines)
