#!/usr/bin/env python3
"""
Visualize the values learned for the maze game.
"""
import argparse
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from games.maze import Maze, Move, DEFAULT_TILES, train_maze, greedy_path

def value_grid(frame: pd.DataFrame, rows: int, cols: int) -> np.ndarray:
    """Best action value per position, NaN where nothing was learned.

    Args:
        frame: Output of Table.to_frame()
        rows: Number of grid rows
        cols: Number of grid columns

    Returns:
        np.ndarray: rows x cols array of values
    """
    grid = np.full((rows, cols), np.nan)
    if frame.empty:
        return grid
    best = frame.groupby('state')['value'].max()
    for (row, col), value in best.items():
        grid[row, col] = value
    return grid

def plot_values(frame, path, save_path=None):
    """Plot the value grid with the greedy path on top.

    Args:
        frame: Output of Table.to_frame()
        path: Positions visited by the greedy walk
        save_path: Path to save the plot (optional)
    """
    rows, cols = len(DEFAULT_TILES), len(DEFAULT_TILES[0])
    grid = value_grid(frame, rows, cols)

    plt.figure(figsize=(6, 6))
    plt.imshow(grid, cmap='RdYlGn')
    plt.colorbar(label='max Q')

    for row in range(rows):
        for col in range(cols):
            label = DEFAULT_TILES[row][col].value
            plt.text(col, row, f"{label}\n{grid[row, col]:.3f}", ha='center', va='center', fontsize=9)

    start = Maze().start
    xs = [start[1]] + [p[1] for p in path]
    ys = [start[0]] + [p[0] for p in path]
    plt.plot(xs, ys, color='black', linewidth=2, marker='o')

    plt.title('Learned maze values and greedy path', fontsize=14)
    plt.xticks(range(cols))
    plt.yticks(range(rows))

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')
        print(f"Plot saved to {save_path}")

    plt.show()

def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Train the maze game and plot the learned values'
    )
    parser.add_argument('--duration', type=float, default=2.0, help='Seconds to train for')
    parser.add_argument('--seed', type=int, default=0, help='Seed of the play policy')
    parser.add_argument('--save', help='Path to save the plot (optional)')
    return parser.parse_args()

def main():
    args = parse_args()

    memory = train_maze(args.duration, seed=args.seed, progress=True)
    frame = memory.to_frame()
    path = greedy_path(memory)

    print(f"Pairs learned: {len(frame)} of {9 * len(Move)}")
    print(f"Greedy path: {path}")

    plot_values(frame, path, args.save)

if __name__ == "__main__":
    main()
