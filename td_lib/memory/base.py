"""
Value store contract.

A memory maps (state, action) pairs to scalar value estimates.
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic

# Type variables for state and action
S = TypeVar('S')
A = TypeVar('A')

class Memory(ABC, Generic[S, A]):
    """
    Base class for value stores.

    get on a pair that was never written returns the store's seed value;
    set overwrites unconditionally.
    """

    @abstractmethod
    def get(self, state: S, action: A) -> float:
        """
        Return the value estimate for a state-action pair.

        Args:
            state: The state
            action: The action

        Returns:
            The stored value, or the seed if the pair was never written
        """
        pass

    @abstractmethod
    def set(self, state: S, action: A, value: float) -> None:
        """
        Store a value estimate for a state-action pair.

        Args:
            state: The state
            action: The action
            value: The new estimate
        """
        pass
