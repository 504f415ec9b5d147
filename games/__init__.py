"""
Example games for the TD library.

Each module implements td_lib.game.Game and can be run as a script to train
and evaluate a table, e.g. `python -m games.maze --duration 2`.
"""

from games.maze import Maze, Move, Tile
from games.market import Market, Trade
from games.tictactoe import Board, BoardState

__all__ = ['Maze', 'Move', 'Tile', 'Market', 'Trade', 'Board', 'BoardState']
