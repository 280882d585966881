"""Headless cascade tuning explorer.

Plays random accepted swaps on a seeded board for one level and reports how
the score accumulates, so level targets can be tuned against real cascades:

- every move tries the adjacent swaps in random order and plays the first one
  the engine accepts;
- the run stops after ``--moves`` moves or when no swap is accepted.

The summary is printed to stdout as JSON. ``--plot`` additionally shows a
histogram of points per move.

Run with: ``python cascade_tuning_tool.py --level 3 --moves 40 --seed 7``
"""
from __future__ import annotations

import argparse
import json
from pathlib import Path
import random
import sys
from typing import List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

# Ensure src/ is on the import path so the tool runs from a plain checkout.
SRC_PATH = Path(__file__).parent / "src"
if SRC_PATH.exists() and str(SRC_PATH) not in sys.path:
    sys.path.append(str(SRC_PATH))

from tilecrush.components.board import Board  # type: ignore
from tilecrush.components.level_config import LevelConfig  # type: ignore
from tilecrush.engine import create_board, perform_swap  # type: ignore
from tilecrush.engine.moves import MoveOutcome  # type: ignore
from tilecrush.factories.levels import generate_level_config  # type: ignore

Swap = Tuple[Tuple[int, int], Tuple[int, int]]


def candidate_swaps(board: Board) -> List[Swap]:
    swaps: List[Swap] = []
    for row in range(board.size):
        for col in range(board.size):
            if col + 1 < board.size:
                swaps.append(((row, col), (row, col + 1)))
            if row + 1 < board.size:
                swaps.append(((row, col), (row + 1, col)))
    return swaps


def play_random_moves(config: LevelConfig, moves: int, rng: random.Random) -> List[MoveOutcome]:
    board = create_board(config.kinds, rng=rng)
    outcomes: List[MoveOutcome] = []
    for _ in range(moves):
        swaps = candidate_swaps(board)
        rng.shuffle(swaps)
        played: Optional[MoveOutcome] = None
        for src, dst in swaps:
            outcome = perform_swap(board, src, dst, config.kinds, rng=rng)
            if outcome.accepted:
                played = outcome
                break
        if played is None:
            break
        outcomes.append(played)
        board = played.board
    return outcomes


def summarize(config: LevelConfig, outcomes: Sequence[MoveOutcome]) -> dict:
    points = [outcome.points for outcome in outcomes]
    total = sum(points)
    return {
        "level": config.level_number,
        "kinds": [kind.value for kind in config.kinds],
        "moves": len(outcomes),
        "total_score": total,
        "mean_points_per_move": (total / len(points)) if points else 0.0,
        "longest_cascade": max((outcome.depth for outcome in outcomes), default=0),
        "target_score": config.target_score,
        "target_reached": total >= config.target_score,
    }


def plot_scores(config: LevelConfig, outcomes: Sequence[MoveOutcome]) -> None:
    points = np.array([outcome.points for outcome in outcomes], dtype=float)
    if points.size == 0:
        return
    plt.figure(figsize=(7, 4))
    plt.hist(points, bins=min(20, max(1, int(points.size))), color="firebrick", alpha=0.8)
    plt.axvline(points.mean(), color="gray", linestyle="--", label=f"Mean ({points.mean():.0f})")
    plt.xlabel("Points per move")
    plt.ylabel("Moves")
    plt.title(f"Level {config.level_number}: points per random move")
    plt.legend()
    plt.grid(True)
    plt.show()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Simulate random moves to tune level targets.")
    parser.add_argument("--level", type=int, default=1, help="level number to simulate")
    parser.add_argument("--moves", type=int, default=30, help="maximum number of moves to play")
    parser.add_argument("--seed", type=int, default=None, help="seed for a reproducible run")
    parser.add_argument("--plot", action="store_true", help="show a histogram of points per move")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = generate_level_config(args.level)
    rng = random.Random(args.seed)
    outcomes = play_random_moves(config, args.moves, rng)
    print(json.dumps(summarize(config, outcomes), indent=2))
    if args.plot:
        plot_scores(config, outcomes)
    return 0


if __name__ == "__main__":
    sys.exit(main())
