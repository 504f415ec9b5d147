"""
Brain module for the TD library.

This module provides the learning rule contract and the temporal-difference
update used by the training task.
"""

from td_lib.brain.base import LearningRule
from td_lib.brain.temporal import Brain

__all__ = [
    'LearningRule',
    'Brain'
]
