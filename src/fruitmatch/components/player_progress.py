from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class HighScoreEntry:
    level_id: int
    score: int
    stars: int
    moves_used: int


@dataclass(slots=True)
class PlayerProgress:
    """Unlocked levels and the in-memory high-score table.

    Persisting the table is left to the caller; it only reads ``high_scores``.
    """

    unlocked_level: int = 1
    high_scores: List[HighScoreEntry] = field(default_factory=list)
    capacity: int = 100

    def is_unlocked(self, level_id: int) -> bool:
        return 1 <= level_id <= self.unlocked_level

    def unlock_after(self, level_id: int, last_level: int) -> bool:
        """Unlock the level after level_id when it is the frontier; True if it changed."""
        if level_id != self.unlocked_level or level_id >= last_level:
            return False
        self.unlocked_level = level_id + 1
        return True

    def record(self, entry: HighScoreEntry) -> int:
        """Insert entry keeping the table sorted by score; return its rank or -1 if dropped."""
        self.high_scores.append(entry)
        self.high_scores.sort(key=lambda item: item.score, reverse=True)
        del self.high_scores[self.capacity:]
        for rank, existing in enumerate(self.high_scores):
            if existing is entry:
                return rank
        return -1

    def best_for(self, level_id: int) -> HighScoreEntry | None:
        for entry in self.high_scores:
            if entry.level_id == level_id:
                return entry
        return None
