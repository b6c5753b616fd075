"""Play Klondike deals with the peeking autoplay strategy.

Example::

    python autoplay.py --games 200 --seed 7 --output results/autoplay.json
"""
from __future__ import annotations

import argparse
import csv
import json
import logging
import os
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np
from tqdm import trange

from klondike_core import GameState, IllegalMove, is_won, new_game, state_to_dict
from strategy import StrategyError, StrategySession
from utils.config import DotDict, get_config_value, load_config
from utils.display import render_state
from utils.state_utils import count_empty_columns, extract_foundations, get_hidden_cards

logger = logging.getLogger(__name__)

DEFAULT_MAX_TURNS = 1000


@dataclass
class GameRecord:
    """Summary of one autoplayed deal."""

    seed: Optional[int]
    turns: int
    won: bool
    stuck: bool
    foundation_cards: int
    hidden_left: int
    empty_columns: int
    error: Optional[str] = None


def summarize(state: GameState, seed: Optional[int], turns: int, stuck: bool) -> GameRecord:
    data = state_to_dict(state)
    return GameRecord(
        seed=seed,
        turns=turns,
        won=is_won(state),
        stuck=stuck,
        foundation_cards=sum(extract_foundations(data).values()),
        hidden_left=len(get_hidden_cards(data)),
        empty_columns=count_empty_columns(data),
    )


def play_game(
    state: GameState,
    max_turns: int = DEFAULT_MAX_TURNS,
    session: Optional[StrategySession] = None,
    seed: Optional[int] = None,
) -> Tuple[GameState, GameRecord]:
    """Run the sweep and then step until stuck, won or out of turns."""
    session = session or StrategySession()
    state = session.initialize(state)

    turns = 0
    stuck = False
    while turns < max_turns and not is_won(state):
        state, moved = session.step(state)
        if not moved:
            stuck = True
            break
        turns += 1

    if turns >= max_turns and not is_won(state):
        logger.warning("Turn limit %d reached for seed %s", max_turns, seed)
    return state, summarize(state, seed, turns, stuck)


def run_games(
    games: int,
    seed: Optional[int] = None,
    max_turns: int = DEFAULT_MAX_TURNS,
    show: bool = False,
) -> List[GameRecord]:
    """Play ``games`` deals with consecutive seeds starting at ``seed``."""
    records: List[GameRecord] = []
    for i in trange(games, desc="games"):
        game_seed = None if seed is None else seed + i
        try:
            state, record = play_game(new_game(game_seed), max_turns, seed=game_seed)
        except (StrategyError, IllegalMove) as exc:
            logger.exception("Strategy failed on seed %s", game_seed)
            records.append(GameRecord(game_seed, 0, False, True, 0, 0, 0, error=str(exc)))
            continue
        if show:
            print(render_state(state))
            print()
        records.append(record)
    return records


def compute_stats(records: List[GameRecord]) -> Dict[str, float]:
    """Aggregate win rate and progress statistics."""
    if not records:
        return {"games": 0, "wins": 0, "win_rate": 0.0, "errors": 0}
    turns = np.array([r.turns for r in records], dtype=np.int64)
    foundation = np.array([r.foundation_cards for r in records], dtype=np.float64)
    hidden = np.array([r.hidden_left for r in records], dtype=np.float64)
    wins = int(sum(r.won for r in records))
    return {
        "games": len(records),
        "wins": wins,
        "win_rate": 100.0 * wins / len(records),
        "errors": int(sum(r.error is not None for r in records)),
        "avg_turns": float(turns.mean()),
        "median_turns": float(np.median(turns)),
        "avg_foundation_cards": float(foundation.mean()),
        "avg_hidden_left": float(hidden.mean()),
    }


def export_results(stats: Dict[str, float], records: List[GameRecord], path: str) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    if path.lower().endswith(".json"):
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"stats": stats, "games": [asdict(r) for r in records]}, f, indent=2)
    elif path.lower().endswith(".csv"):
        fields = list(GameRecord.__dataclass_fields__)
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=fields)
            writer.writeheader()
            for r in records:
                writer.writerow(asdict(r))
    else:
        raise ValueError("Unsupported output format")


def _load_config(path: str) -> DotDict:
    try:
        return load_config(path)
    except FileNotFoundError:
        if path != "config.yaml":
            raise
        logging.warning("No config.yaml found, using defaults")
        return DotDict({})


def main(argv: Optional[List[str]] = None) -> Dict[str, float]:
    parser = argparse.ArgumentParser(description="Autoplay Klondike deals by peeking at the stock")
    parser.add_argument("--config", type=str, default="config.yaml", help="YAML configuration file")
    parser.add_argument("--games", type=int, default=None, help="Number of deals to play")
    parser.add_argument("--seed", type=int, default=None, help="Seed of the first deal")
    parser.add_argument("--max-turns", dest="max_turns", type=int, default=None, help="Turn limit per deal")
    parser.add_argument("--output", type=str, default=None, help="Output JSON or CSV path")
    parser.add_argument("--show", action="store_true", help="Print every final state")
    parser.add_argument(
        "--log",
        "--log-level",
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Logging level",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(format="%(asctime)s | %(levelname)s | %(message)s")
    config = _load_config(args.config)

    level = args.log_level or get_config_value(config, "logging.level", "WARNING")
    logging.getLogger().setLevel(getattr(logging, str(level).upper()))

    games = args.games if args.games is not None else int(get_config_value(config, "autoplay.games", 1))
    seed = args.seed if args.seed is not None else get_config_value(config, "autoplay.seed", None)
    max_turns = (
        args.max_turns
        if args.max_turns is not None
        else int(get_config_value(config, "autoplay.max_turns", DEFAULT_MAX_TURNS))
    )
    output = args.output or get_config_value(config, "autoplay.output", None)

    records = run_games(games, seed, max_turns, show=args.show)
    stats = compute_stats(records)
    if output:
        export_results(stats, records, output)
    print(json.dumps(stats, indent=2))
    return stats


if __name__ == "__main__":
    main()
