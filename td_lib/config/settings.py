"""
Run settings.

Hyper-parameters and pipeline options read from the environment (and a .env
file, if present). Values are parsed but not range-checked.
"""

import os
from dataclasses import dataclass
from typing import Optional

import numpy as np
from dotenv import load_dotenv, find_dotenv

from td_lib.brain.temporal import Brain
from td_lib.policy.base import Policy
from td_lib.policy.greedy import Greedy
from td_lib.policy.stochastic import Random, EpsilonGreedy

POLICIES = ["random", "greedy", "egreedy"]

def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_capacity(value: str) -> Optional[int]:
    if value.strip().lower() in ("", "none", "unbounded"):
        return None
    return int(value)


@dataclass(frozen=True)
class Settings:
    """
    Options for a training run.
    """

    alpha: float = 0.5
    """Learning rate"""

    gamma: float = 0.5
    """Discount factor"""

    epsilon: float = 0.1
    """Exploration probability of the egreedy play policy"""

    seed: float = 0.0
    """Value returned by the table for unseen pairs"""

    capacity: Optional[int] = 1024
    """Channel capacity, None for unbounded"""

    producers: int = 1
    """Number of play threads"""

    duration: float = 1.0
    """Seconds a bounded run lasts"""

    policy: str = "random"
    """Play policy: random, greedy or egreedy"""

    rng_seed: Optional[int] = None
    """Seed for the play policies' random generators"""

    debug: bool = False
    log_level: str = "info"

    @classmethod
    def from_env(cls, prefix: str = "TD_", dotenv_path: Optional[str] = None) -> 'Settings':
        """
        Load settings from environment variables.

        Reads PREFIX_ALPHA, PREFIX_GAMMA, PREFIX_EPSILON, PREFIX_SEED,
        PREFIX_CAPACITY, PREFIX_PRODUCERS, PREFIX_DURATION, PREFIX_POLICY,
        PREFIX_RNG_SEED, PREFIX_DEBUG and PREFIX_LOG_LEVEL, after loading a
        .env file if there is one. Missing variables keep their defaults.

        Args:
            prefix: Prefix of the variable names
            dotenv_path: .env file to load (searched for from the working directory if omitted)

        Returns:
            Settings instance

        Raises:
            ValueError: If a variable cannot be parsed or names an unknown policy
        """
        load_dotenv(dotenv_path or find_dotenv(usecwd=True))
        defaults = cls()

        def read(name: str, parse, default):
            raw = os.getenv(f"{prefix}{name}")
            return default if raw is None else parse(raw)

        settings = cls(
            alpha=read("ALPHA", float, defaults.alpha),
            gamma=read("GAMMA", float, defaults.gamma),
            epsilon=read("EPSILON", float, defaults.epsilon),
            seed=read("SEED", float, defaults.seed),
            capacity=read("CAPACITY", _parse_capacity, defaults.capacity),
            producers=read("PRODUCERS", int, defaults.producers),
            duration=read("DURATION", float, defaults.duration),
            policy=read("POLICY", lambda v: v.strip().lower(), defaults.policy),
            rng_seed=read("RNG_SEED", int, defaults.rng_seed),
            debug=read("DEBUG", _parse_bool, defaults.debug),
            log_level=read("LOG_LEVEL", str, defaults.log_level),
        )

        if settings.policy not in POLICIES:
            raise ValueError(f"Unknown policy {settings.policy!r}, expected one of {POLICIES}")

        return settings

    def brain(self) -> Brain:
        """Return the learning rule these settings describe."""
        return Brain(self.alpha, self.gamma)

    def play_policy(self, rng: Optional[np.random.Generator] = None) -> Policy:
        """
        Build a fresh play policy.

        Args:
            rng: Generator for randomised policies (seeded from rng_seed if omitted)

        Returns:
            Policy instance
        """
        if rng is None:
            rng = np.random.default_rng(self.rng_seed)

        if self.policy == "greedy":
            return Greedy()
        if self.policy == "egreedy":
            return EpsilonGreedy(self.epsilon, rng)
        if self.policy == "random":
            return Random(rng)
        raise ValueError(f"Unknown policy {self.policy!r}, expected one of {POLICIES}")
