from dataclasses import dataclass


@dataclass(slots=True)
class SessionState:
    """Per-attempt bookkeeping owned by the session, not the engine.

    Moves are charged once per committed move; cascades are free.
    combo_count is the value handed to the next resolution.
    """

    level_id: int = 0
    score: int = 0
    moves_remaining: int = 0
    moves_used: int = 0
    combo_count: int = 0
    elapsed: float = 0.0
    stars: int = 0
    shuffles: int = 0
    cascade_active: bool = False
    cascade_depth: int = 0

    def reset(self, level_id: int, move_limit: int) -> None:
        self.level_id = level_id
        self.score = 0
        self.moves_remaining = move_limit
        self.moves_used = 0
        self.combo_count = 0
        self.elapsed = 0.0
        self.stars = 0
        self.shuffles = 0
        self.cascade_active = False
        self.cascade_depth = 0
