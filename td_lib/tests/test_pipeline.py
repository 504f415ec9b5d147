"""
End-to-end tests: learning the maze and running pipelines.
"""

import time
import unittest

import numpy as np

from games.maze import Maze, OPTIMAL_PATH, greedy_path
from td_lib.brain import Brain
from td_lib.config import Settings
from td_lib.game import Game
from td_lib.memory import Table, SharedMemory
from td_lib.policy import Greedy, Random, EpsilonGreedy, Policy
from td_lib.tasks import Channel, Pipeline, play, train


class Exploding(Policy):
    """Fails on every choice."""

    def choose(self, action_values):
        raise RuntimeError("policy failed")


class TestMaze(unittest.TestCase):
    """Test cases for learning the maze."""

    def test_replayed_experience_finds_optimal_path(self):
        """Test Q-learning on a fixed batch of random experience."""
        memory = SharedMemory(Table())
        channel = Channel()

        sent = play(Maze(), Random(np.random.default_rng(0)), memory, channel, max_samples=20000)
        channel.close()
        updates = train(Maze(), Greedy(), memory, channel, Brain(0.5, 0.5))

        self.assertEqual(sent, 20000)
        self.assertEqual(updates, 20000)
        self.assertEqual(greedy_path(memory.snapshot()), OPTIMAL_PATH)

    def test_concurrent_run_finds_optimal_path(self):
        """Test playing and training concurrently for a bounded time."""
        pipeline = Pipeline(
            game_factory=Maze,
            policy_factory=lambda: Random(np.random.default_rng(1)),
            brain=Brain(0.5, 0.5)
        )

        memory = pipeline.run_for(3.0)

        self.assertFalse(pipeline.running)
        self.assertGreater(pipeline.samples_played, 0)
        self.assertEqual(pipeline.samples_played, pipeline.updates_trained)

        with memory.read() as table:
            self.assertEqual(greedy_path(table), OPTIMAL_PATH)


class Climber(Game):
    """Counts up from 0 and stops at 3."""

    def __init__(self):
        self.value = 0

    def actions(self):
        return ["inc"] if self.value < 3 else []

    def state(self):
        return self.value

    def act(self, action):
        self.value += 1

    def reward(self):
        return 1.0


class TestPipeline(unittest.TestCase):
    """Test cases for Pipeline."""

    def test_returns_early_when_games_end(self):
        """Test that a run over terminating games does not wait out its duration."""
        pipeline = Pipeline(Climber, Greedy, Brain(1.0, 0.0), producers=3)

        started = time.monotonic()
        memory = pipeline.run_for(30.0)

        self.assertLess(time.monotonic() - started, 10.0)
        self.assertEqual(pipeline.samples_played, 9)
        self.assertEqual(pipeline.updates_trained, 9)
        self.assertEqual(memory.get(0, "inc"), 1.0)
        self.assertEqual(memory.get(2, "inc"), 1.0)

    def test_start_twice(self):
        """Test that a pipeline cannot be started twice."""
        pipeline = Pipeline(Climber, Greedy, Brain(1.0, 0.0))
        pipeline.start()
        try:
            with self.assertRaises(RuntimeError):
                pipeline.start()
        finally:
            pipeline.stop()

    def test_worker_error_is_raised_from_stop(self):
        """Test that a failing train thread surfaces from stop and ends the players."""
        pipeline = Pipeline(Maze, Random, Brain(0.5, 0.5), train_policy=Exploding())

        with self.assertRaises(RuntimeError):
            pipeline.run_for(5.0)

        self.assertTrue(pipeline.memory.poisoned)
        self.assertFalse(pipeline.running)

    def test_from_settings(self):
        """Test building a pipeline from settings."""
        settings = Settings(alpha=0.25, gamma=0.75, epsilon=0.2, seed=0.5,
                            capacity=None, producers=2, policy="egreedy", rng_seed=3)

        pipeline = Pipeline.from_settings(settings, Maze)

        self.assertEqual(pipeline.brain, Brain(0.25, 0.75))
        self.assertIsNone(pipeline.channel.capacity)
        self.assertEqual(pipeline.producers, 2)
        self.assertEqual(pipeline.memory.get((0, 0), "anything"), 0.5)

        first, second = pipeline.policy_factory(), pipeline.policy_factory()
        self.assertIsInstance(first, EpsilonGreedy)
        self.assertEqual(first.ε, 0.2)
        self.assertNotEqual(first.rng.random(), second.rng.random())

        pipeline.run_for(0.2)
        self.assertEqual(pipeline.samples_played, pipeline.updates_trained)


if __name__ == '__main__':
    unittest.main()
