from dataclasses import dataclass, field
from typing import Dict, Iterable, Tuple


@dataclass(slots=True)
class FruitTally:
    """Counts cleared fruit tiles per fruit type for the current level attempt.

    counts: mapping of fruit type -> tiles cleared (player moves and cascades).
    Level objectives are ``(fruit_type, count)`` pairs checked against it.
    """
    counts: Dict[int, int] = field(default_factory=dict)

    def add(self, fruit_type: int, amount: int = 1):
        if amount <= 0:
            return
        self.counts[fruit_type] = self.counts.get(fruit_type, 0) + amount

    def add_all(self, cleared: Dict[int, int]) -> None:
        for fruit_type, amount in cleared.items():
            self.add(fruit_type, amount)

    def missing(self, objectives: Iterable[Tuple[int, int]]) -> Dict[int, int]:
        """Return outstanding counts per fruit type; empty when every objective is met."""
        return {
            fruit_type: count - self.counts.get(fruit_type, 0)
            for fruit_type, count in objectives
            if self.counts.get(fruit_type, 0) < count
        }

    def meets(self, objectives: Iterable[Tuple[int, int]]) -> bool:
        return not self.missing(objectives)

    def clear(self) -> None:
        self.counts.clear()
