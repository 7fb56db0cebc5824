from __future__ import annotations

import random
from typing import List, Optional

from esper import World

from fruitmatch.components.board import Position
from fruitmatch.engine.hints import find_all_swaps, find_chain_hint
from fruitmatch.events.bus import (
    EVENT_LEVEL_STARTED,
    EVENT_SHUFFLE_REQUEST,
    EVENT_TICK,
    EVENT_TILE_CLICK,
    EVENT_TILE_RELEASE,
    EventBus,
)
from fruitmatch.systems.session_utils import INPUT_CHAIN, INPUT_SWAP, get_board, get_or_create_session_state
from fruitmatch.utils.game_state import is_playing


class AutoPlaySystem:
    """Plays the current level on its own, one move per decision delay.

    In swap mode it picks a random match-producing swap; in chain mode it
    traces the chain the hint search finds. Moves go through the same click
    events a player would send.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        input_mode: str = INPUT_SWAP,
        *,
        rng: Optional[random.Random] = None,
        decision_delay: float = 0.0,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.input_mode = input_mode
        self.random = rng or random.Random()
        self.decision_delay = max(0.0, decision_delay)
        self.delay_remaining: float = self.decision_delay
        self.moves_dispatched = 0
        event_bus.subscribe(EVENT_TICK, self.on_tick)
        event_bus.subscribe(EVENT_LEVEL_STARTED, self.on_level_started)

    def on_level_started(self, sender, **payload) -> None:
        self.delay_remaining = self.decision_delay

    def on_tick(self, sender, **payload) -> None:
        if not is_playing(self.world):
            return
        if get_or_create_session_state(self.world).cascade_active:
            return
        dt = float(payload.get("dt", 0.0))
        if self.delay_remaining > 0.0:
            self.delay_remaining = max(0.0, self.delay_remaining - dt)
            if self.delay_remaining > 0.0:
                return
        self.delay_remaining = self.decision_delay
        path = self._choose_action()
        if path is None:
            self.event_bus.emit(EVENT_SHUFFLE_REQUEST, reason="player")
            return
        self.moves_dispatched += 1
        for row, col in path:
            self.event_bus.emit(EVENT_TILE_CLICK, row=row, col=col)
        if self.input_mode == INPUT_CHAIN:
            self.event_bus.emit(EVENT_TILE_RELEASE)

    def _choose_action(self) -> Optional[List[Position]]:
        board = get_board(self.world)
        if board is None:
            return None
        if self.input_mode == INPUT_CHAIN:
            return find_chain_hint(board)
        swaps = find_all_swaps(board)
        if not swaps:
            return None
        src, dst = self.random.choice(swaps)
        return [src, dst]
