"""
Walk module for the TD library.

This module provides the single-transition step and the offline and online
walks built from it.
"""

from td_lib.walk.step import step, action_values, advance
from td_lib.walk.walk import Walk, OnlineWalk, offline, online

__all__ = [
    'step',
    'action_values',
    'advance',
    'Walk',
    'OnlineWalk',
    'offline',
    'online'
]
