"""
Randomised action selection.

Both policies here draw from a numpy Generator, so passing a seeded generator
reproduces the same sequence of choices.
"""

from typing import Optional, TypeVar

import numpy as np

from td_lib.policy.base import Policy, ActionValues
from td_lib.policy.greedy import Greedy

A = TypeVar('A')

class Random(Policy[A]):
    """
    Picks uniformly among the given actions, ignoring their values.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        """
        Initialize a uniform policy.

        Args:
            rng: Random generator to draw from (a fresh one if omitted)
        """
        self.rng = rng if rng is not None else np.random.default_rng()

    def choose(self, action_values: ActionValues) -> Optional[A]:
        if not action_values:
            return None
        return action_values[int(self.rng.integers(len(action_values)))][0]

    def __repr__(self) -> str:
        return "Random()"


class EpsilonGreedy(Policy[A]):
    """
    Explores with probability ε, exploits otherwise.

    Each call draws one uniform number; below ε the choice is made like
    Random, otherwise like Greedy.
    """

    def __init__(self, ε: float, rng: Optional[np.random.Generator] = None):
        """
        Initialize an ε-greedy policy.

        Args:
            ε: Exploration probability
            rng: Random generator to draw from (a fresh one if omitted)
        """
        self.ε = ε
        self.rng = rng if rng is not None else np.random.default_rng()
        self._explore = Random(self.rng)
        self._exploit = Greedy()

    def choose(self, action_values: ActionValues) -> Optional[A]:
        if not action_values:
            return None
        if self.rng.random() < self.ε:
            return self._explore.choose(action_values)
        return self._exploit.choose(action_values)

    def __repr__(self) -> str:
        return f"EpsilonGreedy(ε={self.ε})"
