"""
Maze game.

A 3x3 grid walked from the top-left corner. Stepping on the love tile pays
+1, on a death tile -1, anything else costs -0.1. From a love or death tile
every move sends the walker back to the start.

Run as a script to train a table and print the greedy path it learned.
"""

import argparse
from enum import Enum
from itertools import islice
from typing import List, Sequence, Tuple

import numpy as np

from td_lib.game.base import Game
from td_lib.memory.base import Memory
from td_lib.policy.greedy import Greedy
from td_lib.policy.stochastic import Random
from td_lib.brain.temporal import Brain
from td_lib.config.settings import Settings
from td_lib.tasks.pipeline import Pipeline
from td_lib.walk.walk import offline
from td_lib.logging import setup_logger

Position = Tuple[int, int]

class Move(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class Tile(Enum):
    LOVE = "love"
    DEATH = "death"
    EMPTY = "empty"


DEFAULT_TILES = (
    (Tile.EMPTY, Tile.DEATH, Tile.LOVE),
    (Tile.EMPTY, Tile.DEATH, Tile.EMPTY),
    (Tile.EMPTY, Tile.EMPTY, Tile.EMPTY),
)

# Greedy path through DEFAULT_TILES once training has converged
OPTIMAL_PATH = [(1, 0), (2, 0), (2, 1), (2, 2), (1, 2), (0, 2)]

_OFFSETS = {
    Move.LEFT: (0, -1),
    Move.RIGHT: (0, 1),
    Move.UP: (-1, 0),
    Move.DOWN: (1, 0),
}

_REWARDS = {
    Tile.LOVE: 1.0,
    Tile.DEATH: -1.0,
    Tile.EMPTY: -0.1,
}

class Maze(Game[Position, Move]):
    """
    Grid walk whose state is the walker's position.
    """

    def __init__(self, tiles: Sequence[Sequence[Tile]] = DEFAULT_TILES, start: Position = (0, 0)):
        self.tiles = tiles
        self.start = start
        self.current = start

    def current_tile(self) -> Tile:
        row, col = self.current
        return self.tiles[row][col]

    def actions(self) -> List[Move]:
        return list(Move)

    def state(self) -> Position:
        return self.current

    def act(self, action: Move) -> None:
        if self.current_tile() != Tile.EMPTY:
            self.current = self.start
            return

        dr, dc = _OFFSETS[action]
        row, col = self.current[0] + dr, self.current[1] + dc
        if 0 <= row < len(self.tiles) and 0 <= col < len(self.tiles[0]):
            self.current = (row, col)

    def reward(self) -> float:
        return _REWARDS[self.current_tile()]

    def __repr__(self) -> str:
        return f"Maze(current={self.current})"


def greedy_path(memory: Memory[Position, Move], steps: int = len(OPTIMAL_PATH)) -> List[Position]:
    """
    Follow the greedy policy from the start for a number of steps.

    Args:
        memory: Trained store
        steps: Number of moves to take

    Returns:
        Positions visited after each move
    """
    return [sample.next_state for sample in islice(offline(Maze(), Greedy(), memory), steps)]


def train_maze(duration: float, α: float = 0.5, γ: float = 0.5,
               seed: int = 0, progress: bool = False) -> Memory[Position, Move]:
    """
    Learn the maze with random play and greedy targets.

    Args:
        duration: Seconds to train for
        α: Learning rate
        γ: Discount factor
        seed: Seed of the play policy's generator
        progress: Whether to show a progress bar

    Returns:
        Snapshot of the trained store
    """
    pipeline = Pipeline(
        game_factory=Maze,
        policy_factory=lambda: Random(np.random.default_rng(seed)),
        brain=Brain(α, γ)
    )
    return pipeline.run_for(duration, progress=progress).snapshot()


def main():
    defaults = Settings.from_env()

    parser = argparse.ArgumentParser(description='Learn a path through the maze')
    parser.add_argument('--duration', type=float, default=defaults.duration, help='Seconds to train for')
    parser.add_argument('--alpha', type=float, default=defaults.alpha, help='Learning rate')
    parser.add_argument('--gamma', type=float, default=defaults.gamma, help='Discount factor')
    parser.add_argument('--seed', type=int, default=defaults.rng_seed or 0, help='Seed of the play policy')
    parser.add_argument('--debug', action='store_true', default=defaults.debug, help='Write JSON logs to ./logs')
    args = parser.parse_args()

    if args.debug:
        setup_logger(debug=True, log_level=defaults.log_level)

    memory = train_maze(args.duration, args.alpha, args.gamma, args.seed, progress=True)
    path = greedy_path(memory)

    print("Greedy path")
    print("-----------")
    for position in path:
        print(f"  {position}")
    print(f"Optimal: {path == OPTIMAL_PATH}")


if __name__ == '__main__':
    main()
