"""
Concurrent play/train runs.

A pipeline wires one or more play threads and one train thread together
through a channel and a shared table, and stops them on request.
"""

import time
import threading
from typing import Callable, List, Optional, TypeVar

import numpy as np
from tqdm import tqdm

from td_lib.brain.base import LearningRule
from td_lib.config.settings import Settings
from td_lib.game.base import Game
from td_lib.memory.base import Memory
from td_lib.memory.shared import SharedMemory
from td_lib.memory.table import Table
from td_lib.policy.base import Policy
from td_lib.policy.greedy import Greedy
from td_lib.tasks.channel import Channel
from td_lib.tasks.play import play
from td_lib.tasks.train import train
from td_lib.logging import get_logger, log_phase, log_progress, log_table_summary

S = TypeVar('S')
A = TypeVar('A')

class Pipeline:
    """
    Play and train threads sharing one value store.

    Every play thread gets its own game and policy from the factories; the
    train thread gets its own template game. Stopping is cooperative: the
    play threads see a stop event, then the channel is closed so the train
    thread drains what was sent and returns.
    """

    def __init__(
        self,
        game_factory: Callable[[], Game[S, A]],
        policy_factory: Callable[[], Policy[A]],
        brain: LearningRule,
        train_policy: Optional[Policy[A]] = None,
        memory: Optional[Memory[S, A]] = None,
        capacity: Optional[int] = 1024,
        producers: int = 1
    ):
        """
        Initialize a pipeline.

        Args:
            game_factory: Builds a fresh game for each thread
            policy_factory: Builds the play policy of each play thread
            brain: Learning rule used by the train thread
            train_policy: Rule picking the best next action (Greedy if omitted)
            memory: Store to train (an empty Table if omitted)
            capacity: Channel capacity, None for unbounded
            producers: Number of play threads
        """
        self.game_factory = game_factory
        self.policy_factory = policy_factory
        self.brain = brain
        self.train_policy = train_policy if train_policy is not None else Greedy()
        self.memory = SharedMemory(memory if memory is not None else Table())
        self.channel = Channel(capacity)
        self.producers = producers

        self.samples_played = 0
        self.updates_trained = 0

        self._stop = threading.Event()
        self._players: List[threading.Thread] = []
        self._trainer: Optional[threading.Thread] = None
        self._errors: List[BaseException] = []
        self._counts_lock = threading.Lock()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        game_factory: Callable[[], Game[S, A]]
    ) -> 'Pipeline':
        """
        Build a pipeline from run settings.

        Each play thread gets an independent random generator spawned from
        settings.rng_seed.

        Args:
            settings: Run settings
            game_factory: Builds a fresh game for each thread

        Returns:
            Pipeline instance
        """
        seeds = np.random.SeedSequence(settings.rng_seed)

        def policy_factory() -> Policy:
            return settings.play_policy(np.random.default_rng(seeds.spawn(1)[0]))

        return cls(
            game_factory=game_factory,
            policy_factory=policy_factory,
            brain=settings.brain(),
            memory=Table(settings.seed),
            capacity=settings.capacity,
            producers=settings.producers
        )

    def _play(self, game: Game[S, A], policy: Policy[A]) -> None:
        try:
            sent = play(game, policy, self.memory, self.channel, stop=self._stop)
            with self._counts_lock:
                self.samples_played += sent
        except Exception as e:
            get_logger().error({"event": "play_failed", "error": repr(e)})
            self._errors.append(e)

    def _train(self, game: Game[S, A]) -> None:
        try:
            self.updates_trained = train(game, self.train_policy, self.memory,
                                         self.channel, self.brain)
        except Exception as e:
            get_logger().error({"event": "train_failed", "error": repr(e)})
            self._errors.append(e)
            self.channel.close()

    @property
    def running(self) -> bool:
        return any(t.is_alive() for t in self._players) or (
            self._trainer is not None and self._trainer.is_alive())

    def start(self) -> None:
        """
        Start the train thread and the play threads.

        Raises:
            RuntimeError: If the pipeline was already started
        """
        if self._trainer is not None:
            raise RuntimeError("Pipeline already started")

        log_phase("pipeline_start", {
            "brain": repr(self.brain),
            "producers": self.producers,
            "capacity": self.channel.capacity
        })

        self._trainer = threading.Thread(target=self._train, args=(self.game_factory(),),
                                         name="train", daemon=True)
        self._trainer.start()

        for i in range(self.producers):
            player = threading.Thread(target=self._play,
                                      args=(self.game_factory(), self.policy_factory()),
                                      name=f"play-{i}", daemon=True)
            self._players.append(player)
            player.start()

    def stop(self, timeout: Optional[float] = None) -> SharedMemory[S, A]:
        """
        Stop the play threads, let the train thread drain, and join both.

        Args:
            timeout: Optional seconds to wait for each thread

        Returns:
            The trained shared store

        Raises:
            Exception: The first exception raised by a worker thread
        """
        self._stop.set()
        for player in self._players:
            player.join(timeout)

        self.channel.close()
        if self._trainer is not None:
            self._trainer.join(timeout)

        if not self.memory.poisoned:
            with self.memory.read() as memory:
                if isinstance(memory, Table):
                    log_table_summary(memory.items())

        log_phase("pipeline_stop", {
            "samples": self.samples_played,
            "updates": self.updates_trained
        })

        if self._errors:
            raise self._errors[0]
        return self.memory

    def run_for(self, duration: float, progress: bool = False) -> SharedMemory[S, A]:
        """
        Run the pipeline for a bounded time.

        Returns early if every play thread finishes on its own.

        Args:
            duration: Seconds to let the threads run
            progress: Whether to show a tqdm progress bar

        Returns:
            The trained shared store
        """
        self.start()
        started = time.monotonic()
        tick = min(0.1, duration) if duration > 0 else 0.0

        with tqdm(total=duration, unit="s", disable=not progress,
                  bar_format="{l_bar}{bar}| {n:.1f}/{total:.1f}s") as bar:
            while any(player.is_alive() for player in self._players):
                elapsed = time.monotonic() - started
                if elapsed >= duration:
                    break
                self._stop.wait(min(tick, duration - elapsed))
                bar.n = min(time.monotonic() - started, duration)
                bar.refresh()

        log_progress(time.monotonic() - started, duration,
                     {"channel_pending": len(self.channel)})
        return self.stop()
