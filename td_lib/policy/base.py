"""
Policy contract.

A policy turns value estimates into a choice: given the legal actions of a
state paired with their estimated values, it selects one of them.
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Optional, Sequence, Tuple

# Type variable for actions
A = TypeVar('A')

ActionValues = Sequence[Tuple[A, float]]

class Policy(ABC, Generic[A]):
    """
    Base class for action-selection rules.

    choose returns None if and only if it is given no action values;
    otherwise it returns one of the actions it was given.
    """

    @abstractmethod
    def choose(self, action_values: ActionValues) -> Optional[A]:
        """
        Select an action.

        Args:
            action_values: Sequence of (action, estimated value) pairs

        Returns:
            One of the given actions, or None if the sequence is empty
        """
        pass

    def __call__(self, action_values: ActionValues) -> Optional[A]:
        """
        Convenience method to call choose.

        Args:
            action_values: Sequence of (action, estimated value) pairs

        Returns:
            The chosen action, or None
        """
        return self.choose(action_values)
