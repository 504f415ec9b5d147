"""
Greedy action selection.
"""

from typing import Optional, TypeVar

import numpy as np

from td_lib.policy.base import Policy, ActionValues

A = TypeVar('A')

class Greedy(Policy[A]):
    """
    Always picks the highest-valued action.

    Ties go to the first action reaching the maximum, in input order.
    """

    def choose(self, action_values: ActionValues) -> Optional[A]:
        if not action_values:
            return None
        values = np.fromiter((value for _, value in action_values),
                             dtype=float, count=len(action_values))
        return action_values[int(np.argmax(values))][0]

    def __repr__(self) -> str:
        return "Greedy()"
