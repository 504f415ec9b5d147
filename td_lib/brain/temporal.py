"""
Temporal-difference learning rule.
"""

from dataclasses import dataclass

from td_lib.brain.base import LearningRule

@dataclass(frozen=True)
class Brain(LearningRule):
    """
    One-step TD update.

    Moves the current estimate towards reward + γ * next_value by a fraction
    α of the difference. Neither parameter is range-checked.
    """

    α: float
    """Learning rate"""

    γ: float
    """Discount factor"""

    def learn(self, current_value: float, next_value: float, reward: float) -> float:
        return current_value + self.α * (reward + self.γ * next_value - current_value)

    def __repr__(self) -> str:
        return f"Brain(α={self.α}, γ={self.γ})"
