import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from klondike_core import Card
from strategy.errors import InvalidLocationAccess
from strategy.locations import Foundation, LocationTag, Move, PathStep, Tableau, WastePile


def test_tags():
    assert WastePile().tag is LocationTag.WASTE_PILE
    assert Tableau(2, 0).tag is LocationTag.TABLEAU
    assert Foundation(1).tag is LocationTag.FOUNDATION


def test_tableau_carries_both_indices():
    loc = Tableau(3, 2)
    assert loc.index == 3
    assert loc.sub_index == 2
    assert str(loc) == "Tableau deck 3 sub-index 2"


def test_foundation_has_no_sub_index():
    loc = Foundation(1)
    assert loc.index == 1
    assert str(loc) == "Foundation 1"
    with pytest.raises(InvalidLocationAccess):
        loc.sub_index


def test_waste_pile_has_no_indices():
    loc = WastePile()
    assert str(loc) == "waste_pile"
    with pytest.raises(InvalidLocationAccess):
        loc.index
    with pytest.raises(InvalidLocationAccess):
        loc.sub_index


def test_moves_are_values():
    move = Move(WastePile(), Foundation(0))
    assert move == Move(WastePile(), Foundation(0))
    assert move != Move(WastePile(), Tableau(0, 0))
    assert str(move) == "from waste_pile to Foundation 0"
    step = PathStep(move, Card.parse("2H"))
    assert str(step) == "from waste_pile to Foundation 0 2H"
