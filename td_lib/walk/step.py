"""
Single-transition stepping.

A step reads the current state, values every legal action through a memory,
lets the policy choose, applies the choice and records the transition. Every
higher-level loop in the library is built from repeated steps.
"""

from typing import List, Optional, Tuple, TypeVar

from td_lib.game.base import Game
from td_lib.game.sample import Sample
from td_lib.memory.base import Memory
from td_lib.policy.base import Policy

S = TypeVar('S')
A = TypeVar('A')

def action_values(game: Game[S, A], memory: Memory[S, A]) -> Tuple[S, List[Tuple[A, float]]]:
    """
    Value every legal action of the game's current state.

    Args:
        game: The game to inspect
        memory: Store to read the estimates from

    Returns:
        The current state and its (action, value) pairs
    """
    state = game.state()
    return state, [(action, memory.get(state, action)) for action in game.actions()]


def advance(
    game: Game[S, A],
    policy: Policy[A],
    state: S,
    values: List[Tuple[A, float]]
) -> Optional[Sample]:
    """
    Choose among valued actions and apply the choice.

    Args:
        game: The game to act on, currently in state
        policy: Rule used to pick the action
        state: The game's current state
        values: (action, value) pairs for state

    Returns:
        The recorded transition, or None if the policy had nothing to choose
    """
    action = policy.choose(values)
    if action is None:
        return None
    game.act(action)
    return Sample(state, action, game.state(), game.reward())


def step(game: Game[S, A], policy: Policy[A], memory: Memory[S, A]) -> Optional[Sample]:
    """
    Perform exactly one transition of the game.

    Args:
        game: The game to advance
        policy: Rule used to pick the action
        memory: Store the action values are read from (never written)

    Returns:
        The recorded transition, or None if the state is terminal
    """
    state, values = action_values(game, memory)
    return advance(game, policy, state, values)
