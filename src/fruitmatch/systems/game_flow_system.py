"""Level completion, failure and stalemate handling."""
from __future__ import annotations

import logging

from esper import World

from fruitmatch.components.game_state import GameMode
from fruitmatch.components.player_progress import HighScoreEntry
from fruitmatch.events.bus import (
    EVENT_CASCADE_COMPLETE,
    EVENT_LEVEL_COMPLETED,
    EVENT_LEVEL_FAILED,
    EVENT_NO_MOVES_AVAILABLE,
    EVENT_SHUFFLE_REQUEST,
    EVENT_TICK,
    EventBus,
)
from fruitmatch.systems.session_utils import (
    INPUT_SWAP,
    get_board,
    get_config,
    get_current_level,
    get_or_create_session_state,
    get_progress,
    get_tally,
    has_move,
)
from fruitmatch.utils.game_state import get_game_state, is_playing, set_game_mode

log = logging.getLogger("fruitmatch.session")

FAIL_MOVES = "moves"
FAIL_TIME = "time"
FAIL_NO_MOVES = "no_moves"


class GameFlowSystem:
    """Decides how a level attempt ends once each move has settled.

    After every resolution the level completes when the score reaches the
    target and every objective is met; otherwise it fails when no moves
    remain. A board left without any move is shuffled for free, or fails the
    level when auto-shuffling is switched off. Ticks advance the level clock
    for timed levels.
    """

    def __init__(self, world: World, event_bus: EventBus, input_mode: str = INPUT_SWAP) -> None:
        self.world = world
        self.event_bus = event_bus
        self.input_mode = input_mode
        self.event_bus.subscribe(EVENT_CASCADE_COMPLETE, self._on_cascade_complete)
        self.event_bus.subscribe(EVENT_TICK, self._on_tick)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_cascade_complete(self, sender, **payload) -> None:
        if not is_playing(self.world):
            return
        self.evaluate()

    def _on_tick(self, sender, **payload) -> None:
        if not is_playing(self.world):
            return
        state = get_or_create_session_state(self.world)
        if state.cascade_active:
            return
        state.elapsed += float(payload.get("dt", 0.0))
        level = get_current_level(self.world)
        if level.time_limit is not None and state.elapsed >= level.time_limit:
            self._fail(FAIL_TIME)

    # ------------------------------------------------------------------
    # Outcome checks
    # ------------------------------------------------------------------

    def evaluate(self) -> None:
        state = get_or_create_session_state(self.world)
        level = get_current_level(self.world)
        if state.score >= level.target_score and get_tally(self.world).meets(level.objective_pairs):
            self._complete()
            return
        if state.moves_remaining <= 0:
            self._fail(FAIL_MOVES)
            return
        board = get_board(self.world)
        if board is None or has_move(board, self.input_mode):
            return
        self.event_bus.emit(EVENT_NO_MOVES_AVAILABLE)
        if get_config(self.world).session.auto_shuffle_on_stalemate:
            self.event_bus.emit(EVENT_SHUFFLE_REQUEST, reason="stalemate")
        else:
            self._fail(FAIL_NO_MOVES)

    def _complete(self) -> None:
        config = get_config(self.world)
        state = get_or_create_session_state(self.world)
        level = config.get_level(state.level_id)
        state.stars = config.scoring.star_rating(state.score, level.target_score, state.moves_used, level.move_limit)
        progress = get_progress(self.world)
        rank = progress.record(
            HighScoreEntry(level_id=level.id, score=state.score, stars=state.stars, moves_used=state.moves_used)
        )
        progress.unlock_after(level.id, config.last_level_id)
        set_game_mode(self.world, self.event_bus, GameMode.LEVEL_COMPLETE)
        log.info("level %d completed: score %d, %d star(s)", level.id, state.score, state.stars)
        self.event_bus.emit(
            EVENT_LEVEL_COMPLETED,
            level_id=level.id,
            score=state.score,
            moves_used=state.moves_used,
            stars=state.stars,
            rank=rank,
            unlocked_level=progress.unlocked_level,
        )

    def _fail(self, reason: str) -> None:
        state = get_or_create_session_state(self.world)
        set_game_mode(self.world, self.event_bus, GameMode.LEVEL_FAILED)
        log.info("level %d failed (%s) with score %d", state.level_id, reason, state.score)
        self.event_bus.emit(EVENT_LEVEL_FAILED, level_id=get_game_state(self.world).level_id, score=state.score, reason=reason)
