"""
Game contract.

This module defines the interface every environment must implement to be
driven by the TD engine.
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Sequence

# Type variables for state and action
S = TypeVar('S')
A = TypeVar('A')

class Game(ABC, Generic[S, A]):
    """
    Base class for environments.

    A game exposes the actions that are legal in its current configuration,
    a hashable snapshot of that configuration, a mutating act operation and
    the reward earned by the last transition.

    An empty action sequence marks a terminal configuration: the caller must
    stop acting. Illegal moves are the game's own business; it may reset,
    apply a penalty reward or flag itself invalid instead of raising.
    """

    @abstractmethod
    def actions(self) -> Sequence[A]:
        """
        Return the actions that are legal in the current state.

        Returns:
            Sequence of actions, empty if the state is terminal
        """
        pass

    @abstractmethod
    def state(self) -> S:
        """
        Return a hashable snapshot of the current state.

        Returns:
            The current state
        """
        pass

    @abstractmethod
    def act(self, action: A) -> None:
        """
        Apply an action drawn from the last actions() result.

        Args:
            action: The action to apply
        """
        pass

    @abstractmethod
    def reward(self) -> float:
        """
        Return the reward for the transition performed by the last act call.

        Returns:
            The reward
        """
        pass
