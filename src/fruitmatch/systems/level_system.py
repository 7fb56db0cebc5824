"""Level setup: start, restart and advance, each on a freshly generated board."""
from __future__ import annotations

import logging

from esper import World

from fruitmatch.components.game_state import GameMode
from fruitmatch.engine.generator import generate
from fruitmatch.events.bus import (
    EVENT_LEVEL_LOCKED,
    EVENT_LEVEL_RESTART_REQUEST,
    EVENT_LEVEL_START_REQUEST,
    EVENT_LEVEL_STARTED,
    EVENT_NEXT_LEVEL_REQUEST,
    EVENT_SELECTION_CLEARED,
    EventBus,
)
from fruitmatch.systems.session_utils import (
    get_board,
    get_config,
    get_or_create_session_state,
    get_progress,
    get_rng,
    get_selection,
    get_tally,
    set_board,
)
from fruitmatch.utils.game_state import get_game_state, set_game_mode

log = logging.getLogger("fruitmatch.session")


class LevelSystem:
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_LEVEL_START_REQUEST, self.on_level_start_request)
        self.event_bus.subscribe(EVENT_LEVEL_RESTART_REQUEST, self.on_level_restart_request)
        self.event_bus.subscribe(EVENT_NEXT_LEVEL_REQUEST, self.on_next_level_request)

    def on_level_start_request(self, sender, **payload):
        level_id = payload.get("level_id")
        self.start_level(int(level_id) if level_id is not None else 1)

    def on_level_restart_request(self, sender, **payload):
        level_id = get_game_state(self.world).level_id
        if level_id is None:
            return
        self.start_level(level_id)

    def on_next_level_request(self, sender, **payload):
        state = get_game_state(self.world)
        if state.level_id is None or state.mode != GameMode.LEVEL_COMPLETE:
            return
        next_id = state.level_id + 1
        if not get_config(self.world).has_level(next_id):
            log.info("level %d is the last level", state.level_id)
            return
        self.start_level(next_id)

    def start_level(self, level_id: int) -> bool:
        """Generate the level's board and reset the session. False if the level is locked."""
        config = get_config(self.world)
        level = config.get_level(level_id)
        progress = get_progress(self.world)
        if not progress.is_unlocked(level.id):
            self.event_bus.emit(EVENT_LEVEL_LOCKED, level_id=level.id, unlocked_level=progress.unlocked_level)
            return False

        board = generate(
            level.rows,
            level.cols,
            level.fruit_type_count,
            level.obstacle_positions,
            obstacle_health=level.obstacle_health,
            rng=get_rng(self.world),
            max_attempts=config.engine.generation_attempts,
        )
        set_board(self.world, board)

        get_or_create_session_state(self.world).reset(level.id, level.move_limit)
        get_tally(self.world).clear()
        selection = get_selection(self.world)
        if selection.chain or selection.pending_swap is not None:
            selection.clear()
            self.event_bus.emit(EVENT_SELECTION_CLEARED, reason="level_start", chain=[])

        get_game_state(self.world).level_id = level.id
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        log.info("level %d started (%dx%d, %d fruit types)", level.id, level.rows, level.cols, level.fruit_type_count)
        self.event_bus.emit(
            EVENT_LEVEL_STARTED,
            level_id=level.id,
            rows=level.rows,
            cols=level.cols,
            move_limit=level.move_limit,
            target_score=level.target_score,
            board=get_board(self.world),
        )
        return True
