import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from strategy.locations import Foundation, Move, Tableau, WastePile
from strategy.obvious import calculate_obvious_move
from builders import make_state


def test_waste_ace_is_promoted():
    state = make_state(columns=[((), ["AS"])], waste=["AH"])
    assert calculate_obvious_move(state) == Move(WastePile(), Foundation(0))


def test_tableau_ace_scanned_left_to_right():
    state = make_state(columns=[((), ["5C"]), (["9D"], ["AD"]), ((), ["AS"])])
    assert calculate_obvious_move(state) == Move(Tableau(1, 0), Foundation(1))


def test_ace_beats_deuce_and_liberation():
    state = make_state(
        columns=[
            (["3C", "4C"], ["QH"]),
            ((), ["KS"]),
            ((), ["7D", "AS"]),
        ],
        foundations=[["AH"]],
        waste=["2H"],
    )
    assert calculate_obvious_move(state) == Move(Tableau(2, 1), Foundation(3))


def test_waste_deuce_before_tableau_deuce():
    state = make_state(
        columns=[((), ["2D"])],
        foundations=[["AH"], ["AD"]],
        waste=["2H"],
    )
    assert calculate_obvious_move(state) == Move(WastePile(), Foundation(0))


def test_deuce_needs_its_ace():
    state = make_state(columns=[((), ["2D"]), ((), ["2C"])], foundations=[[], [], ["AC"]])
    assert calculate_obvious_move(state) == Move(Tableau(1, 0), Foundation(2))


def test_deuce_beats_liberation():
    state = make_state(
        columns=[(["3C", "4C"], ["QH"]), ((), ["KS"]), ((), ["2H"])],
        foundations=[["AH"]],
    )
    assert calculate_obvious_move(state) == Move(Tableau(2, 0), Foundation(0))


def test_liberation_prefers_most_hidden_cards():
    state = make_state(
        columns=[
            (["2C", "3C", "4C"], ["9H"]),
            (["2S", "3S", "4S", "5S", "6S"], ["9D"]),
            ((), ["10S"]),
        ]
    )
    assert calculate_obvious_move(state) == Move(Tableau(1, 0), Tableau(2, 0))


def test_liberation_tie_goes_to_first_candidate():
    state = make_state(
        columns=[
            (["2C", "3C"], ["9H"]),
            (["2S", "3S"], ["9D"]),
            ((), ["10S"]),
        ]
    )
    assert calculate_obvious_move(state) == Move(Tableau(0, 0), Tableau(2, 0))


def test_liberation_moves_whole_run_onto_top():
    state = make_state(
        columns=[
            (["2C"], ["8H", "7S"]),
            ((), ["10D", "9S"]),
            ((), ["9H"]),
        ]
    )
    # 8H may not go on 9H (same color) but fits on 9S at position 1 of column 1
    assert calculate_obvious_move(state) == Move(Tableau(0, 0), Tableau(1, 1))


def test_king_to_empty_column():
    state = make_state(columns=[(["2C", "3C"], ["KH", "QS"]), ((), [])])
    assert calculate_obvious_move(state) == Move(Tableau(0, 0), Tableau(1, 0))


def test_columns_without_hidden_cards_are_not_liberated():
    state = make_state(columns=[((), ["9H"]), ((), ["10S"])])
    assert calculate_obvious_move(state) is None


def test_no_move():
    state = make_state(columns=[(["2C"], ["9H"]), ((), ["10H"])], waste=["5S"])
    assert calculate_obvious_move(state) is None
