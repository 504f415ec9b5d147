"""
Market game.

Trade between bitcoin and ether over a fixed series of ETH/BTC prices. The
trader starts with one bitcoin; each step it either moves everything into
ether (buy) or back into bitcoin (sell), then the price advances. The reward
is +0.1 if the bitcoin-denominated total grew, -0.1 if it shrank, 0 otherwise.
Acting on the final price starts the series over.

Run as a script to train a table and replay the greedy strategy.
"""

import argparse
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np

from td_lib.game.base import Game
from td_lib.memory.base import Memory
from td_lib.policy.greedy import Greedy
from td_lib.policy.stochastic import Random
from td_lib.brain.temporal import Brain
from td_lib.config.settings import Settings
from td_lib.tasks.pipeline import Pipeline
from td_lib.walk.step import step
from td_lib.logging import setup_logger

class Trade(Enum):
    BUY = "buy"
    SELL = "sell"


# Daily ETH/BTC closes
DEFAULT_PRICES = (
    0.00216521, 0.00217692, 0.00215034, 0.0022437, 0.00218069,
    0.0022, 0.002215, 0.00204944, 0.00217001, 0.00219001,
    0.00223245, 0.00236753, 0.0026499, 0.00259849, 0.0027922,
    0.00334997, 0.00314864, 0.00347951, 0.00368471, 0.003615,
    0.00367934, 0.00379887, 0.00393986, 0.00503, 0.00529243,
    0.00637467,
)

class Market(Game[Tuple[int, bool], Trade]):
    """
    Price-series trader whose state is (step, holds bitcoin).
    """

    def __init__(self, prices: Sequence[float] = DEFAULT_PRICES):
        self.prices = np.asarray(prices, dtype=float)
        self.reset()

    def reset(self) -> None:
        self.step = 0
        self.ether = 0.0
        self.bitcoin = 1.0
        self.last = 1.0
        self.price = float(self.prices[0])

    def bitcoin_total(self) -> float:
        return self.bitcoin + self.ether * self.price

    def is_final(self) -> bool:
        return self.step + 1 == len(self.prices)

    def actions(self) -> List[Trade]:
        return [Trade.BUY, Trade.SELL]

    def state(self) -> Tuple[int, bool]:
        return self.step, self.bitcoin > 0

    def act(self, action: Trade) -> None:
        if self.is_final():
            self.reset()
            return

        self.last = self.bitcoin_total()

        if action == Trade.SELL:
            self.bitcoin += self.ether * self.price
            self.ether = 0.0
        elif action == Trade.BUY:
            self.ether += self.bitcoin / self.price
            self.bitcoin = 0.0

        self.step += 1
        self.price = float(self.prices[self.step])

    def reward(self) -> float:
        total = self.bitcoin_total()
        if self.last < total:
            return 0.1
        if self.last > total:
            return -0.1
        return 0.0

    def __repr__(self) -> str:
        return f"Market(step={self.step}, total={self.bitcoin_total():.6f})"


def replay(memory: Memory[Tuple[int, bool], Trade],
           prices: Optional[Sequence[float]] = None) -> Tuple[List[Trade], float]:
    """
    Trade greedily through the series once.

    Args:
        memory: Trained store
        prices: Price series (the default series if omitted)

    Returns:
        The trades made and the final bitcoin-denominated total
    """
    market = Market(prices) if prices is not None else Market()
    policy = Greedy()
    trades = []

    while not market.is_final():
        sample = step(market, policy, memory)
        trades.append(sample.action)

    return trades, market.bitcoin_total()


def main():
    defaults = Settings.from_env()

    parser = argparse.ArgumentParser(description='Learn when to hold ether')
    parser.add_argument('--duration', type=float, default=defaults.duration, help='Seconds to train for')
    parser.add_argument('--alpha', type=float, default=1.0, help='Learning rate')
    parser.add_argument('--gamma', type=float, default=0.0, help='Discount factor')
    parser.add_argument('--seed', type=int, default=defaults.rng_seed or 0, help='Seed of the play policy')
    parser.add_argument('--debug', action='store_true', default=defaults.debug, help='Write JSON logs to ./logs')
    args = parser.parse_args()

    if args.debug:
        setup_logger(debug=True, log_level=defaults.log_level)

    pipeline = Pipeline(
        game_factory=Market,
        policy_factory=lambda: Random(np.random.default_rng(args.seed)),
        brain=Brain(args.alpha, args.gamma)
    )
    memory = pipeline.run_for(args.duration, progress=True).snapshot()

    trades, total = replay(memory)
    print("Greedy trades")
    print("-------------")
    print(" ".join(trade.value for trade in trades))
    print(f"Final total: {total:.6f} BTC")
    print(f"Profit: {total - 1.0:+.6f} BTC")


if __name__ == '__main__':
    main()
