"""
Memory module for the TD library.

This module provides the value store contract, the tabular store and the
lock-guarded wrapper used to share a store between threads.
"""

from td_lib.memory.base import Memory
from td_lib.memory.table import Table
from td_lib.memory.shared import SharedMemory

__all__ = [
    'Memory',
    'Table',
    'SharedMemory'
]
