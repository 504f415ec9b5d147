"""
Temporal-Difference Learning Library.

This library provides a tabular TD learning engine decoupled from any
particular environment: plug in a game, a policy and a value store, and run
experience generation and value updates on concurrent threads.
"""

__version__ = '0.1.0'

# Import submodules to make them available through the package
from td_lib import game
from td_lib import policy
from td_lib import memory
from td_lib import brain
from td_lib import walk
from td_lib import tasks
from td_lib import utils
from td_lib import config

from td_lib.game import Game, Sample
from td_lib.policy import Policy, Greedy, Random, EpsilonGreedy
from td_lib.memory import Memory, Table, SharedMemory
from td_lib.brain import LearningRule, Brain

__all__ = [
    'game',
    'policy',
    'memory',
    'brain',
    'walk',
    'tasks',
    'utils',
    'config',
    'Game',
    'Sample',
    'Policy',
    'Greedy',
    'Random',
    'EpsilonGreedy',
    'Memory',
    'Table',
    'SharedMemory',
    'LearningRule',
    'Brain'
]
