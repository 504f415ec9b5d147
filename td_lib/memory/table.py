"""
Tabular value store.
"""

from typing import Dict, Iterator, Tuple, TypeVar

import pandas as pd

from td_lib.memory.base import Memory

S = TypeVar('S')
A = TypeVar('A')

class Table(Memory[S, A]):
    """
    Value store backed by nested dictionaries.

    Values are kept as state -> action -> value; the inner dictionary for a
    state is created on its first write. Nothing is ever evicted.
    """

    def __init__(self, seed: float = 0.0):
        """
        Initialize an empty table.

        Args:
            seed: Value returned for pairs that were never written
        """
        self.seed = seed
        self._values: Dict[S, Dict[A, float]] = {}

    def get(self, state: S, action: A) -> float:
        return self._values.get(state, {}).get(action, self.seed)

    def set(self, state: S, action: A, value: float) -> None:
        self._values.setdefault(state, {})[action] = value

    def __len__(self) -> int:
        return sum(len(values) for values in self._values.values())

    def __contains__(self, key: Tuple[S, A]) -> bool:
        state, action = key
        return action in self._values.get(state, {})

    def states(self) -> Iterator[S]:
        """Iterate over the states with at least one stored value."""
        return iter(list(self._values))

    def actions(self, state: S) -> Iterator[A]:
        """Iterate over the actions stored for a state."""
        return iter(list(self._values.get(state, {})))

    def items(self) -> Iterator[Tuple[Tuple[S, A], float]]:
        """Iterate over ((state, action), value) for every stored pair."""
        for state, values in list(self._values.items()):
            for action, value in list(values.items()):
                yield (state, action), value

    def copy(self) -> 'Table[S, A]':
        """
        Return an independent table holding the same values.

        States and actions are shared, they are expected to be immutable.
        """
        table = Table(self.seed)
        table._values = {state: dict(values) for state, values in self._values.items()}
        return table

    def to_frame(self) -> pd.DataFrame:
        """
        Tabulate the stored values for inspection.

        Returns:
            DataFrame with one row per stored pair and columns
            'state', 'action' and 'value'
        """
        rows = [
            {'state': state, 'action': action, 'value': value}
            for (state, action), value in self.items()
        ]
        return pd.DataFrame(rows, columns=['state', 'action', 'value'])

    def __repr__(self) -> str:
        return f"Table(seed={self.seed}, pairs={len(self)})"
