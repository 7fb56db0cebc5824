import logging
from collections import Counter
from typing import Callable, Iterator, Optional

from esper import World

from fruitmatch.engine.resolution import (
    PHASE_CLEAR,
    PHASE_GRAVITY,
    PHASE_REFILL,
    ResolutionStep,
    iter_resolve,
    iter_resolve_swap,
)
from fruitmatch.events.bus import (
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_GRAVITY_APPLIED,
    EVENT_LEVEL_STARTED,
    EVENT_MATCH_CLEARED,
    EVENT_MOVE_COMMITTED,
    EVENT_MOVES_CHANGED,
    EVENT_REFILL_COMPLETED,
    EVENT_SCORE_CHANGED,
    EVENT_TILE_SWAP_INVALID,
    EventBus,
)
from fruitmatch.systems.session_utils import get_board, get_config, get_or_create_session_state, get_rng, get_tally
from fruitmatch.utils.combo import ComboTracker

log = logging.getLogger("fruitmatch.session")


class MatchResolutionSystem:
    """Charges a committed move, runs it through the engine and replays every stage as events."""

    def __init__(self, world: World, event_bus: EventBus, *, clock: Optional[Callable[[], float]] = None):
        self.world = world
        self.event_bus = event_bus
        config = get_config(world)
        self.combo = ComboTracker(window=config.session.combo_window_seconds, clock=clock)
        self.event_bus.subscribe(EVENT_MOVE_COMMITTED, self.on_move_committed)
        self.event_bus.subscribe(EVENT_TILE_SWAP_INVALID, self.on_swap_invalid)
        self.event_bus.subscribe(EVENT_LEVEL_STARTED, self.on_level_started)

    def on_level_started(self, sender, **kwargs):
        self.combo.reset()

    def on_swap_invalid(self, sender, **kwargs):
        # A move without a match ends the combo.
        state = get_or_create_session_state(self.world)
        state.combo_count = 0
        self.combo.reset()

    def on_move_committed(self, sender, **kwargs):
        board = get_board(self.world)
        if board is None:
            return
        state = get_or_create_session_state(self.world)
        config = get_config(self.world)
        combo_in = self.combo.combo_for_move(state.combo_count)
        options = dict(rng=get_rng(self.world), rules=config.scoring, max_depth=config.engine.max_cascade_depth)

        kind = kwargs.get('kind')
        if kind == "chain":
            steps = iter_resolve(board, kwargs['chain'], combo_in, **options)
        elif kind == "swap":
            steps = iter_resolve_swap(board, kwargs['src'], kwargs['dst'], combo_in, **options)
        else:
            raise ValueError(f"unknown move kind '{kind}'")

        state.moves_remaining = max(0, state.moves_remaining - 1)
        state.moves_used += 1
        self.event_bus.emit(
            EVENT_MOVES_CHANGED,
            moves_remaining=state.moves_remaining,
            moves_used=state.moves_used,
            reason="move",
        )

        state.cascade_active = True
        state.cascade_depth = 0
        try:
            points, passes = self._replay(steps)
        finally:
            state.cascade_active = False

        state.combo_count = combo_in + 1
        self.combo.record_match()
        state.score += points
        log.debug("%s move scored %d over %d pass(es), combo now %d", kind, points, passes, state.combo_count)
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=state.score, delta=points, combo=state.combo_count)
        self.event_bus.emit(
            EVENT_CASCADE_COMPLETE,
            depth=state.cascade_depth,
            points=points,
            cascaded=passes > 1,
        )

    def _replay(self, steps: Iterator[ResolutionStep]):
        state = get_or_create_session_state(self.world)
        tally = get_tally(self.world)
        points = 0
        passes = 0
        for step in steps:
            state.cascade_depth = step.depth
            if step.phase == PHASE_CLEAR:
                passes += 1
                points += step.points
                tally.add_all(Counter(fruit_type for _, _, fruit_type in step.cleared))
                self.event_bus.emit(EVENT_CASCADE_STEP, depth=step.depth, positions=step.positions)
                self.event_bus.emit(
                    EVENT_MATCH_CLEARED,
                    depth=step.depth,
                    positions=step.positions,
                    types=step.cleared,
                    points=step.points,
                )
            elif step.phase == PHASE_GRAVITY:
                fall_payload = [
                    {'from': move.source, 'to': move.target, 'fruit_type': move.fruit_type}
                    for move in step.moves
                ]
                self.event_bus.emit(EVENT_GRAVITY_APPLIED, depth=step.depth, moves=fall_payload)
            elif step.phase == PHASE_REFILL:
                self.event_bus.emit(EVENT_REFILL_COMPLETED, depth=step.depth, new_tiles=step.positions)
        return points, passes
