from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems nobody else references alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT & SELECTION
# ============================================================================
EVENT_TILE_CLICK = "tile_click"                    # payload: row, col
EVENT_TILE_RELEASE = "tile_release"                # payload: (none)
EVENT_TILE_SELECTED = "tile_selected"              # payload: row, col, chain=[(r,c),...]
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: row, col, chain=[(r,c),...]
EVENT_SELECTION_REJECTED = "selection_rejected"    # payload: row, col, chain=[(r,c),...]
EVENT_SELECTION_CLEARED = "selection_cleared"      # payload: reason=str, chain=[(r,c),...]
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"      # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(r,c), dst=(r,c)


# ============================================================================
# MOVES & RESOLUTION
# ============================================================================
EVENT_MOVE_COMMITTED = "move_committed"            # payload: kind="chain"|"swap", chain=[(r,c),...] | src, dst
EVENT_MATCH_CLEARED = "match_cleared"              # payload: depth=int, positions=[(r,c),...], types=[(r,c,type)], points=int
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: depth=int, moves=[{'from','to','fruit_type'}]
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: depth=int, new_tiles=[(r,c),...]
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, positions=[(r,c),...]
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, points=int, cascaded=bool
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int, combo=int
EVENT_MOVES_CHANGED = "moves_changed"              # payload: moves_remaining=int, moves_used=int, reason=str


# ============================================================================
# HINTS & SHUFFLES
# ============================================================================
EVENT_HINT_REQUEST = "hint_request"                # payload: (none)
EVENT_HINT_FOUND = "hint_found"                    # payload: kind="swap"|"chain", positions=[(r,c),...]
EVENT_HINT_UNAVAILABLE = "hint_unavailable"        # payload: (none)
EVENT_SHUFFLE_REQUEST = "shuffle_request"          # payload: reason="player"|"stalemate"
EVENT_BOARD_SHUFFLED = "board_shuffled"            # payload: reason=str, penalty=int, board
EVENT_NO_MOVES_AVAILABLE = "no_moves_available"    # payload: (none)


# ============================================================================
# LEVEL FLOW
# ============================================================================
EVENT_LEVEL_START_REQUEST = "level_start_request"      # payload: level_id=int
EVENT_LEVEL_RESTART_REQUEST = "level_restart_request"  # payload: (none)
EVENT_NEXT_LEVEL_REQUEST = "next_level_request"        # payload: (none)
EVENT_LEVEL_LOCKED = "level_locked"                    # payload: level_id=int, unlocked_level=int
EVENT_LEVEL_STARTED = "level_started"                  # payload: level_id=int, rows, cols, move_limit, target_score, board
EVENT_LEVEL_COMPLETED = "level_completed"              # payload: level_id, score, moves_used, stars, rank, unlocked_level
EVENT_LEVEL_FAILED = "level_failed"                    # payload: level_id, score, reason="moves"|"time"|"no_moves"
EVENT_GAME_MODE_CHANGED = "game_mode_changed"          # payload: previous_mode, new_mode
