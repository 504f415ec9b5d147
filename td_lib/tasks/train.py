"""
Value estimation.

The train task consumes samples from the channel and folds each one into the
shared store with a learning rule.
"""

from typing import Optional, TypeVar

from td_lib.brain.base import LearningRule
from td_lib.game.base import Game
from td_lib.game.sample import Sample
from td_lib.memory.base import Memory
from td_lib.memory.shared import SharedMemory
from td_lib.policy.base import Policy
from td_lib.tasks.channel import Channel, ChannelClosed
from td_lib.utils.rwlock import LockPoisoned
from td_lib.logging import get_logger

S = TypeVar('S')
A = TypeVar('A')

def update(
    game: Game[S, A],
    policy: Policy[A],
    memory: Memory[S, A],
    sample: Sample,
    brain: LearningRule
) -> float:
    """
    Fold one sample into a store.

    The candidate next actions are those the template game offers in its
    own current state, not those legal in sample.next_state. The target is
    exact only for games whose action set does not depend on the state,
    such as the maze and the market; for others (tic-tac-toe) it is an
    approximation. The policy picks the next action among the candidates
    by value; if it picks nothing the next state counts as terminal and its
    value as 0.

    Args:
        game: Template game supplying the candidate next actions
        policy: Rule used to pick the next action
        memory: Store to read and write
        sample: The transition to learn from
        brain: Rule computing the new estimate

    Returns:
        The value written for (sample.state, sample.action)
    """
    state0, action0, state1, reward = sample

    values = [(action, memory.get(state1, action)) for action in game.actions()]
    action1 = policy.choose(values)

    value0 = memory.get(state0, action0)
    value1 = memory.get(state1, action1) if action1 is not None else 0.0

    learned = brain.learn(value0, value1, reward)
    memory.set(state0, action0, learned)
    return learned


def train(
    game: Game[S, A],
    policy: Policy[A],
    memory: SharedMemory[S, A],
    channel: Channel,
    brain: LearningRule,
    max_updates: Optional[int] = None
) -> int:
    """
    Receive samples and update the shared store until the channel closes.

    Each update holds the store's write lock. The loop ends when the channel
    is closed and drained, the lock is poisoned or max_updates have been
    written. Unless it stopped at max_updates it closes the channel on the
    way out, so producers blocked on it finish too.

    Args:
        game: Template game supplying the candidate next actions
        policy: Rule used to pick the best next action
        memory: Shared store to update
        channel: Channel the samples arrive on
        brain: Rule computing each new estimate
        max_updates: Optional number of updates after which to return

    Returns:
        Number of updates written
    """
    logger = get_logger()
    logger.info({"event": "train_started", "brain": repr(brain), "policy": repr(policy)})

    updates = 0
    reason = "error"

    try:
        while max_updates is None or updates < max_updates:
            try:
                sample = channel.receive()
            except ChannelClosed:
                reason = "channel_closed"
                break

            try:
                with memory.write() as table:
                    update(game, policy, table, sample, brain)
            except LockPoisoned:
                reason = "lock_poisoned"
                break

            updates += 1
        else:
            reason = "max_updates"
    finally:
        if reason != "max_updates":
            channel.close()

    logger.info({"event": "train_finished", "reason": reason, "updates": updates})
    return updates
