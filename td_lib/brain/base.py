"""
Learning rule contract.
"""

from abc import ABC, abstractmethod

class LearningRule(ABC):
    """
    Base class for value update rules.

    A learning rule computes a new estimate for a state-action pair from its
    current estimate, the estimate of the best next pair and the observed
    reward. It must be a pure function of its arguments.
    """

    @abstractmethod
    def learn(self, current_value: float, next_value: float, reward: float) -> float:
        """
        Compute an updated value estimate.

        Args:
            current_value: Current estimate of the visited pair
            next_value: Estimate of the best pair in the next state
            reward: Reward observed for the transition

        Returns:
            The updated estimate
        """
        pass
