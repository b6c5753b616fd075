import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import csv
import json

import pytest

import autoplay
from klondike_core import IllegalMove, new_game
from strategy import StrategySession
from builders import make_state


def test_play_game_stops_when_stuck():
    state = make_state(columns=[((), ["KH"]), ((), ["5S"])], foundations=[[], [], [], ["AS"]])
    final, record = autoplay.play_game(state, max_turns=10)
    assert final == state
    assert record.stuck
    assert record.turns == 0
    assert not record.won
    assert record.foundation_cards == 1


def test_play_game_wins_trivial_deal():
    state = make_state(
        columns=[((), ["KH"]), ((), ["KD"]), ((), ["KC"]), ((), ["KS"])],
        foundations=[["QH"], ["QD"], ["QC"], ["QS"]],
    )
    final, record = autoplay.play_game(state, max_turns=10)
    assert record.won
    assert record.turns == 4
    assert record.foundation_cards == 52
    assert record.empty_columns == 7


def test_play_game_respects_turn_limit():
    final, record = autoplay.play_game(new_game(0), max_turns=1)
    assert record.turns <= 1


def test_play_game_uses_given_session():
    session = StrategySession()
    autoplay.play_game(new_game(4), max_turns=5, session=session)
    assert session.initialized


def test_run_games_and_stats():
    records = autoplay.run_games(3, seed=10, max_turns=200)
    assert [r.seed for r in records] == [10, 11, 12]
    stats = autoplay.compute_stats(records)
    assert stats["games"] == 3
    assert 0.0 <= stats["win_rate"] <= 100.0
    assert stats["errors"] == 0
    assert stats["avg_foundation_cards"] >= 0.0


def test_compute_stats_empty():
    assert autoplay.compute_stats([])["games"] == 0


def test_export_results(tmp_path):
    records = autoplay.run_games(2, seed=0, max_turns=50)
    stats = autoplay.compute_stats(records)

    json_path = tmp_path / "out" / "results.json"
    autoplay.export_results(stats, records, str(json_path))
    data = json.loads(json_path.read_text(encoding="utf-8"))
    assert data["stats"]["games"] == 2
    assert len(data["games"]) == 2

    csv_path = tmp_path / "results.csv"
    autoplay.export_results(stats, records, str(csv_path))
    with open(csv_path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [row["seed"] for row in rows] == ["0", "1"]

    with pytest.raises(ValueError):
        autoplay.export_results(stats, records, str(tmp_path / "results.txt"))


def test_main_reads_config_and_flags(tmp_path, capsys):
    config = tmp_path / "config.yaml"
    config.write_text(
        "autoplay:\n  games: 5\n  seed: 3\n  max_turns: 100\nlogging:\n  level: ERROR\n",
        encoding="utf-8",
    )
    output = tmp_path / "results.json"
    stats = autoplay.main(["--config", str(config), "--games", "2", "--output", str(output)])
    assert stats["games"] == 2
    assert output.exists()
    printed = json.loads(capsys.readouterr().out)
    assert printed["games"] == 2


def test_main_missing_custom_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        autoplay.main(["--config", str(tmp_path / "missing.yaml")])


def test_run_games_records_engine_errors(monkeypatch):
    play_game = autoplay.play_game

    def failing_on_second_seed(state, max_turns, seed=None):
        if seed == 21:
            raise IllegalMove("bad move")
        return play_game(state, max_turns, seed=seed)

    monkeypatch.setattr(autoplay, "play_game", failing_on_second_seed)
    records = autoplay.run_games(2, seed=20, max_turns=50)
    assert [r.seed for r in records] == [20, 21]
    assert records[1].error == "bad move"
    assert not records[1].won
    assert autoplay.compute_stats(records)["errors"] >= 1
