"""
Experience generation.

The play task walks a game online against the shared store and forwards
every transition to the training task.
"""

import threading
from typing import Optional, TypeVar

from td_lib.game.base import Game
from td_lib.memory.shared import SharedMemory
from td_lib.policy.base import Policy
from td_lib.tasks.channel import Channel, ChannelClosed
from td_lib.walk.walk import online
from td_lib.logging import get_logger, log_sample

S = TypeVar('S')
A = TypeVar('A')

def play(
    game: Game[S, A],
    policy: Policy[A],
    memory: SharedMemory[S, A],
    channel: Channel,
    stop: Optional[threading.Event] = None,
    max_samples: Optional[int] = None
) -> int:
    """
    Step the game repeatedly and send each sample over the channel.

    The loop ends when the game runs out of actions, the channel is closed,
    the store's lock is poisoned, the stop event is set or max_samples have
    been sent. None of these is an error.

    Args:
        game: The game to play, owned by this task
        policy: Rule used to pick actions, owned by this task
        memory: Shared store read once per step
        channel: Channel the samples are sent to
        stop: Optional event that asks the loop to finish
        max_samples: Optional number of samples after which to finish

    Returns:
        Number of samples sent
    """
    logger = get_logger()
    logger.info({"event": "play_started", "game": type(game).__name__, "policy": repr(policy)})

    sent = 0
    reason = "terminal"
    walk = online(game, policy, memory)

    for sample in walk:
        try:
            channel.send(sample)
        except ChannelClosed:
            reason = "channel_closed"
            break

        sent += 1
        log_sample(sample, sent)

        if stop is not None and stop.is_set():
            reason = "stopped"
            break
        if max_samples is not None and sent >= max_samples:
            reason = "max_samples"
            break
    else:
        if walk.poisoned:
            reason = "lock_poisoned"

    logger.info({"event": "play_finished", "reason": reason, "samples": sent})
    return sent
