"""Headless game session: one world, one event bus, every system wired up."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from esper import World

from fruitmatch.components.board import Board, Position
from fruitmatch.components.game_state import GameMode
from fruitmatch.components.session_state import SessionState
from fruitmatch.config.config_loader import GameConfig, get_config
from fruitmatch.events.bus import (
    EVENT_HINT_REQUEST,
    EVENT_LEVEL_RESTART_REQUEST,
    EVENT_LEVEL_START_REQUEST,
    EVENT_NEXT_LEVEL_REQUEST,
    EVENT_SHUFFLE_REQUEST,
    EVENT_TICK,
    EVENT_TILE_CLICK,
    EVENT_TILE_RELEASE,
    EVENT_TILE_SWAP_REQUEST,
    EventBus,
)
from fruitmatch.systems.auto_play_system import AutoPlaySystem
from fruitmatch.systems.game_flow_system import GameFlowSystem
from fruitmatch.systems.hint_system import HintSystem
from fruitmatch.systems.level_system import LevelSystem
from fruitmatch.systems.match_resolution import MatchResolutionSystem
from fruitmatch.systems.selection_system import SelectionSystem
from fruitmatch.systems.session_utils import INPUT_CHAIN, INPUT_SWAP, get_board, get_or_create_session_state
from fruitmatch.systems.shuffle_system import ShuffleSystem
from fruitmatch.systems.swap_system import SwapSystem
from fruitmatch.utils.game_state import get_game_state
from fruitmatch.world import create_world


@dataclass
class Game:
    world: World
    event_bus: EventBus
    input_mode: str
    systems: List[object] = field(default_factory=list)

    @property
    def board(self) -> Optional[Board]:
        return get_board(self.world)

    @property
    def session(self) -> SessionState:
        return get_or_create_session_state(self.world)

    @property
    def mode(self) -> GameMode:
        return get_game_state(self.world).mode

    def start_level(self, level_id: int) -> None:
        self.event_bus.emit(EVENT_LEVEL_START_REQUEST, level_id=level_id)

    def restart_level(self) -> None:
        self.event_bus.emit(EVENT_LEVEL_RESTART_REQUEST)

    def next_level(self) -> None:
        self.event_bus.emit(EVENT_NEXT_LEVEL_REQUEST)

    def tick(self, dt: float) -> None:
        self.event_bus.emit(EVENT_TICK, dt=dt)

    def click(self, row: int, col: int) -> None:
        self.event_bus.emit(EVENT_TILE_CLICK, row=row, col=col)

    def release(self) -> None:
        self.event_bus.emit(EVENT_TILE_RELEASE)

    def select_chain(self, chain: Sequence[Position]) -> None:
        for row, col in chain:
            self.click(row, col)
        self.release()

    def swap(self, src: Position, dst: Position) -> None:
        self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=dst)

    def request_hint(self) -> None:
        self.event_bus.emit(EVENT_HINT_REQUEST)

    def request_shuffle(self) -> None:
        self.event_bus.emit(EVENT_SHUFFLE_REQUEST, reason="player")


def create_game(
    config: Optional[GameConfig] = None,
    *,
    input_mode: Optional[str] = None,
    commit_policy: Optional[str] = None,
    rng: Optional[random.Random] = None,
    clock: Optional[Callable[[], float]] = None,
    auto_play: bool = False,
    unlocked_level: int = 1,
) -> Game:
    """Build a world and wire every session system onto a fresh event bus.

    input_mode and commit_policy default to the configured session values.
    clock feeds the combo window; None uses the wall clock.
    """
    config = config or get_config()
    input_mode = input_mode or config.session.input_mode
    if input_mode not in (INPUT_CHAIN, INPUT_SWAP):
        raise ValueError(f"unknown input mode '{input_mode}'")
    rng = rng or random.Random()
    event_bus = EventBus()
    world = create_world(config=config, rng=rng, unlocked_level=unlocked_level)

    systems: List[object] = [LevelSystem(world, event_bus)]
    if input_mode == INPUT_CHAIN:
        systems.append(SelectionSystem(world, event_bus, commit_policy or config.session.commit_policy))
    else:
        systems.append(SwapSystem(world, event_bus))
    systems.extend([
        MatchResolutionSystem(world, event_bus, clock=clock),
        HintSystem(world, event_bus, input_mode),
        ShuffleSystem(world, event_bus, input_mode),
        GameFlowSystem(world, event_bus, input_mode),
    ])
    if auto_play:
        systems.append(AutoPlaySystem(world, event_bus, input_mode, rng=random.Random(rng.random())))
    return Game(world=world, event_bus=event_bus, input_mode=input_mode, systems=systems)
