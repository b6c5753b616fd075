import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from klondike_core import Card
from strategy.errors import KnowledgeDesync
from strategy.knowledge import StockPileKnowledge


def _knowledge(*cards):
    knowledge = StockPileKnowledge()
    for c in cards:
        knowledge.record(Card.parse(c))
    return knowledge


def test_record_keeps_stock_order():
    knowledge = _knowledge("5C", "9D", "KS")
    assert [str(c) for c in knowledge] == ["5C", "9D", "KS"]
    assert len(knowledge) == 3
    assert Card.parse("9D") in knowledge


def test_consume_removes_card():
    knowledge = _knowledge("5C", "9D", "KS")
    knowledge.consume(Card.parse("9D"))
    assert [str(c) for c in knowledge] == ["5C", "KS"]
    assert Card.parse("9D") not in knowledge


def test_unknown_card_is_a_desync():
    knowledge = _knowledge("5C")
    with pytest.raises(KnowledgeDesync):
        knowledge.consume(Card.parse("6C"))
    assert [str(c) for c in knowledge] == ["5C"]


def test_duplicate_record_is_a_desync():
    knowledge = _knowledge("5C")
    with pytest.raises(KnowledgeDesync):
        knowledge.record(Card.parse("5C"))


def test_find_returns_first_match_in_stock_order():
    knowledge = _knowledge("5C", "7H", "7D")
    assert str(knowledge.find(lambda c: c.rank == 7)) == "7H"
    assert knowledge.find(lambda c: c.rank == 1) is None
