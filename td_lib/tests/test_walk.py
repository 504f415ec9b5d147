"""
Tests for the walk module.
"""

import unittest
from enum import Enum
from itertools import islice

from td_lib.game import Game, Sample
from td_lib.memory import Table, SharedMemory
from td_lib.policy import Greedy
from td_lib.walk import step, offline, online


class Operation(Enum):
    INC = 1
    DEC = -1


class Climber(Game[int, Operation]):
    """Counts up from 0 and stops at 2, rewarding the value reached."""

    def __init__(self):
        self.value = 0

    def actions(self):
        return [Operation.INC] if self.value < 2 else []

    def state(self):
        return self.value

    def act(self, action):
        self.value += action.value

    def reward(self):
        return float(self.value)


class Walker(Game[int, Operation]):
    """Moves either way from 0 and stops at -2 or 2, rewarding the value reached."""

    def __init__(self):
        self.value = 0

    def actions(self):
        if -2 < self.value < 2:
            return [Operation.DEC, Operation.INC]
        return []

    def state(self):
        return self.value

    def act(self, action):
        self.value += action.value

    def reward(self):
        return float(self.value)


class Looper(Game[int, Operation]):
    """Never terminates."""

    def __init__(self):
        self.value = 0

    def actions(self):
        return [Operation.INC]

    def state(self):
        return self.value

    def act(self, action):
        self.value += 1

    def reward(self):
        return 0.0


class TestStep(unittest.TestCase):
    """Test cases for single steps."""

    def test_steps_until_terminal(self):
        """Test that each step records one transition and the terminal state yields None."""
        game = Climber()
        policy = Greedy()
        memory = Table()

        self.assertEqual(step(game, policy, memory), (0, Operation.INC, 1, 1.0))
        self.assertEqual(step(game, policy, memory), (1, Operation.INC, 2, 2.0))
        self.assertIsNone(step(game, policy, memory))
        self.assertIsNone(step(game, policy, memory))
        self.assertEqual(game.value, 2)

    def test_sample_fields(self):
        """Test that samples are named tuples."""
        sample = step(Climber(), Greedy(), Table())

        self.assertIsInstance(sample, Sample)
        self.assertEqual(sample.state, 0)
        self.assertEqual(sample.action, Operation.INC)
        self.assertEqual(sample.next_state, 1)
        self.assertEqual(sample.reward, 1.0)

    def test_step_follows_values(self):
        """Test that the values in memory steer the choice."""
        memory = Table()
        memory.set(0, Operation.INC, 0.5)

        self.assertEqual(step(Walker(), Greedy(), memory).action, Operation.INC)

        memory.set(0, Operation.DEC, 0.7)

        self.assertEqual(step(Walker(), Greedy(), memory).action, Operation.DEC)

    def test_step_never_writes(self):
        """Test that stepping leaves the memory untouched."""
        memory = Table()
        step(Walker(), Greedy(), memory)

        self.assertEqual(len(memory), 0)


class TestOffline(unittest.TestCase):
    """Test cases for offline walks."""

    def test_walk_until_terminal(self):
        """Test that the walk yields every transition and then stops for good."""
        walk = offline(Climber(), Greedy(), Table())

        self.assertEqual(list(walk), [(0, Operation.INC, 1, 1.0), (1, Operation.INC, 2, 2.0)])
        self.assertTrue(walk.done)
        self.assertEqual(list(walk), [])

    def test_walk_is_lazy(self):
        """Test that an endless game can be walked a bounded number of steps."""
        game = Looper()
        samples = list(islice(offline(game, Greedy(), Table()), 5))

        self.assertEqual(len(samples), 5)
        self.assertEqual(game.value, 5)


class TestOnline(unittest.TestCase):
    """Test cases for online walks."""

    def test_walk_sees_writes(self):
        """Test that a new walk follows values written since the last one."""
        memory = SharedMemory(Table())

        self.assertEqual(list(online(Walker(), Greedy(), memory)), [
            (0, Operation.DEC, -1, -1.0),
            (-1, Operation.DEC, -2, -2.0),
        ])

        memory.set(0, Operation.INC, 1.0)
        memory.set(1, Operation.INC, 1.0)

        self.assertEqual(list(online(Walker(), Greedy(), memory)), [
            (0, Operation.INC, 1, 1.0),
            (1, Operation.INC, 2, 2.0),
        ])

    def test_lock_released_between_steps(self):
        """Test that writes can happen while a walk is in progress."""
        memory = SharedMemory(Table())
        walk = online(Walker(), Greedy(), memory)

        self.assertEqual(next(walk), (0, Operation.DEC, -1, -1.0))

        memory.set(-1, Operation.INC, 1.0)

        self.assertEqual(next(walk), (-1, Operation.INC, 0, 0.0))

    def test_poisoned_lock_ends_walk(self):
        """Test that a poisoned store ends the walk without raising."""
        memory = SharedMemory(Table())

        with self.assertRaises(ValueError):
            with memory.write():
                raise ValueError("writer failed")

        walk = online(Looper(), Greedy(), memory)

        self.assertEqual(list(walk), [])
        self.assertTrue(walk.poisoned)


if __name__ == '__main__':
    unittest.main()
