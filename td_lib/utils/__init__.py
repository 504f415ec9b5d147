"""
Utility classes for the TD library.

This module provides the synchronisation primitive used to share a value
store between the playing and training threads.
"""

from td_lib.utils.rwlock import RWLock, LockPoisoned

__all__ = [
    'RWLock',
    'LockPoisoned'
]
