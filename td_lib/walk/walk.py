"""
Lazy sequences of steps.

A walk pulls one step per iteration from the same game, policy and memory
until a step yields nothing; from then on it stays exhausted. Offline walks
read a plain store, online walks read a SharedMemory and take its read lock
for the value lookups of each step.
"""

from typing import Iterator, Optional, TypeVar

from td_lib.game.base import Game
from td_lib.game.sample import Sample
from td_lib.memory.base import Memory
from td_lib.memory.shared import SharedMemory
from td_lib.policy.base import Policy
from td_lib.utils.rwlock import LockPoisoned
from td_lib.walk.step import step, action_values, advance

S = TypeVar('S')
A = TypeVar('A')

class Walk(Iterator[Sample]):
    """
    Iterator over the transitions of a game driven by a policy.

    The walk mutates the game it was given. It is not restartable: build a
    new walk (and usually a new game) to start over.
    """

    def __init__(self, game: Game[S, A], policy: Policy[A], memory: Memory[S, A]):
        """
        Initialize a walk.

        Args:
            game: The game to advance
            policy: Rule used to pick each action
            memory: Store the action values are read from
        """
        self.game = game
        self.policy = policy
        self.memory = memory
        self.done = False

    def _step(self) -> Optional[Sample]:
        return step(self.game, self.policy, self.memory)

    def __iter__(self) -> 'Walk':
        return self

    def __next__(self) -> Sample:
        if self.done:
            raise StopIteration
        sample = self._step()
        if sample is None:
            self.done = True
            raise StopIteration
        return sample


class OnlineWalk(Walk):
    """
    Walk over a store that other threads may be writing.

    Only the value lookups run under the read lock; choosing and acting
    happen after it is released. A poisoned lock ends the walk.
    """

    memory: SharedMemory

    def __init__(self, game: Game[S, A], policy: Policy[A], memory: SharedMemory[S, A]):
        super().__init__(game, policy, memory)
        self.poisoned = False

    def _step(self) -> Optional[Sample]:
        try:
            with self.memory.read() as memory:
                state, values = action_values(self.game, memory)
        except LockPoisoned:
            self.poisoned = True
            return None
        return advance(self.game, self.policy, state, values)


def offline(game: Game[S, A], policy: Policy[A], memory: Memory[S, A]) -> Walk:
    """
    Walk a game against a store nobody else is writing.

    Args:
        game: The game to advance
        policy: Rule used to pick each action
        memory: Store the action values are read from

    Returns:
        Iterator of transitions
    """
    return Walk(game, policy, memory)


def online(game: Game[S, A], policy: Policy[A], memory: SharedMemory[S, A]) -> OnlineWalk:
    """
    Walk a game against a store shared with a training thread.

    Args:
        game: The game to advance
        policy: Rule used to pick each action
        memory: Shared store, read-locked once per step

    Returns:
        Iterator of transitions
    """
    return OnlineWalk(game, policy, memory)
