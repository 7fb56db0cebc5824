"""Game state resource describing the active high-level mode."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class GameMode(Enum):
    """High-level session modes that gate which inputs systems accept."""
    IDLE = auto()
    PLAYING = auto()
    LEVEL_COMPLETE = auto()
    LEVEL_FAILED = auto()


@dataclass
class GameState:
    """Singleton component storing the currently active game mode."""
    mode: GameMode = GameMode.IDLE
    level_id: Optional[int] = None
