"""
Game module for the TD library.

This module provides the environment contract and the transition record
produced each time an environment is advanced.
"""

from td_lib.game.base import Game
from td_lib.game.sample import Sample

__all__ = [
    'Game',
    'Sample'
]
