"""
Policy module for the TD library.

This module provides the action-selection contract and its greedy, uniform
and ε-greedy implementations.
"""

from td_lib.policy.base import Policy, ActionValues
from td_lib.policy.greedy import Greedy
from td_lib.policy.stochastic import Random, EpsilonGreedy

__all__ = [
    'Policy',
    'ActionValues',
    'Greedy',
    'Random',
    'EpsilonGreedy'
]
