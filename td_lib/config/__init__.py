"""
Configuration module for the TD library.
"""

from td_lib.config.settings import Settings, POLICIES

__all__ = [
    'Settings',
    'POLICIES'
]
