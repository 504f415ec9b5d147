"""
Transition records produced by stepping a game.
"""

from typing import Any, NamedTuple


class Sample(NamedTuple):
    """
    One recorded transition: the state before, the action taken, the state
    after and the reward observed.

    Samples are plain tuples, so they compare equal to
    (state, action, next_state, reward) and are safe to pass between threads.
    """

    state: Any
    action: Any
    next_state: Any
    reward: float
