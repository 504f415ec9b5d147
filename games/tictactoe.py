"""
Tic-tac-toe against a random opponent.

The learner plays crosses on squares 0-8; the opponent answers on a random
free square. Playing an occupied square makes the board invalid. Once a board
is won, lost, drawn or invalid the only action is -1, which clears it.

Rewards: +1 for a win, -1 for a loss or an invalid move, -0.1 for a draw and
0 while the game goes on.

Run as a script to train a table and score the greedy player.
"""

import argparse
from typing import List, NamedTuple, Optional, Tuple

import numpy as np

from td_lib.game.base import Game
from td_lib.memory.base import Memory
from td_lib.policy.greedy import Greedy
from td_lib.policy.stochastic import EpsilonGreedy
from td_lib.brain.temporal import Brain
from td_lib.config.settings import Settings
from td_lib.tasks.pipeline import Pipeline
from td_lib.walk.walk import offline
from td_lib.logging import setup_logger

EMPTY = 0
CROSS = 1
NOUGHT = -1

RESET = -1

LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

class BoardState(NamedTuple):
    tiles: Tuple[int, ...]
    invalid: bool
    winner: int


def find_winner(tiles: Tuple[int, ...]) -> int:
    """Return CROSS or NOUGHT if either owns a full line, EMPTY otherwise."""
    for a, b, c in LINES:
        total = tiles[a] + tiles[b] + tiles[c]
        if total == 3 * CROSS:
            return CROSS
        if total == 3 * NOUGHT:
            return NOUGHT
    return EMPTY


class Board(Game[BoardState, int]):
    """
    Board whose state is the tiles plus the invalid and winner flags.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.clear()

    def clear(self) -> None:
        self.tiles = [EMPTY] * 9
        self.invalid = False
        self.winner = EMPTY
        self.last_reset = False

    def full(self) -> bool:
        return EMPTY not in self.tiles

    def finished(self) -> bool:
        return self.invalid or self.winner != EMPTY or self.full()

    def actions(self) -> List[int]:
        if self.finished():
            return [RESET]
        return list(range(9))

    def state(self) -> BoardState:
        return BoardState(tuple(self.tiles), self.invalid, self.winner)

    def act(self, action: int) -> None:
        if action == RESET:
            self.clear()
            self.last_reset = True
            return

        self.last_reset = False
        if self.tiles[action] != EMPTY:
            self.invalid = True
            return

        self.tiles[action] = CROSS
        self.winner = find_winner(tuple(self.tiles))
        if self.winner != EMPTY or self.full():
            return

        free = [i for i, tile in enumerate(self.tiles) if tile == EMPTY]
        self.tiles[free[int(self.rng.integers(len(free)))]] = NOUGHT
        self.winner = find_winner(tuple(self.tiles))

    def reward(self) -> float:
        if self.last_reset:
            return 0.0
        if self.invalid:
            return -1.0
        if self.winner == CROSS:
            return 1.0
        if self.winner == NOUGHT:
            return -1.0
        if self.full():
            return -0.1
        return 0.0

    def __repr__(self) -> str:
        symbols = {EMPTY: '.', CROSS: 'X', NOUGHT: 'O'}
        rows = ["".join(symbols[t] for t in self.tiles[i:i + 3]) for i in (0, 3, 6)]
        return f"Board({'/'.join(rows)}, invalid={self.invalid})"


def score(memory: Memory[BoardState, int], games: int = 100, seed: int = 0) -> dict:
    """
    Play finished games greedily and count the outcomes.

    Args:
        memory: Trained store
        games: Number of games to play
        seed: Seed of the opponent's generator

    Returns:
        Counts of victories, draws, defeats and invalid boards
    """
    counts = {"victories": 0, "draws": 0, "defeats": 0, "invalids": 0}
    played = 0

    for sample in offline(Board(np.random.default_rng(seed)), Greedy(), memory):
        if sample.action != RESET:
            continue

        finished = sample.state
        if finished.invalid:
            counts["invalids"] += 1
        elif finished.winner == CROSS:
            counts["victories"] += 1
        elif finished.winner == NOUGHT:
            counts["defeats"] += 1
        else:
            counts["draws"] += 1

        played += 1
        if played == games:
            break

    return counts


def main():
    defaults = Settings.from_env()

    parser = argparse.ArgumentParser(description='Learn tic-tac-toe against a random opponent')
    parser.add_argument('--duration', type=float, default=60.0, help='Seconds to train for')
    parser.add_argument('--alpha', type=float, default=0.99, help='Learning rate')
    parser.add_argument('--gamma', type=float, default=0.99, help='Discount factor')
    parser.add_argument('--epsilon', type=float, default=0.01, help='Exploration probability')
    parser.add_argument('--games', type=int, default=100, help='Games to score')
    parser.add_argument('--seed', type=int, default=defaults.rng_seed or 0, help='Seed of the generators')
    parser.add_argument('--debug', action='store_true', default=defaults.debug, help='Write JSON logs to ./logs')
    args = parser.parse_args()

    if args.debug:
        setup_logger(debug=True, log_level=defaults.log_level)

    pipeline = Pipeline(
        game_factory=lambda: Board(np.random.default_rng(args.seed)),
        policy_factory=lambda: EpsilonGreedy(args.epsilon, np.random.default_rng(args.seed + 1)),
        brain=Brain(args.alpha, args.gamma)
    )
    memory = pipeline.run_for(args.duration, progress=True).snapshot()

    counts = score(memory, args.games, args.seed)
    total = sum(counts.values())
    print()
    print(f"{total} TOTAL")
    for outcome, count in counts.items():
        print(f"{count / total:.1%} {outcome}")


if __name__ == '__main__':
    main()
