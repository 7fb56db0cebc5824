from __future__ import annotations

import random
from dataclasses import replace
from typing import Iterable, Optional, Sequence, Union

from fruitmatch.components.board import Board
from fruitmatch.config.config_loader import GameConfig, LevelConfig, load_config
from fruitmatch.events.bus import EVENT_TICK, EventBus

Layout = Sequence[Sequence[Union[int, str, None]]]

# Checked-in fixture boards. Each is free of pre-formed matches unless noted.

# Column 2 holds the three-tile chain (0,2),(1,2),(2,2) of fruit type 2.
CHAIN_BOARD = [
    [1, 3, 2, 1, 3, 1],
    [3, 1, 2, 3, 1, 3],
    [1, 3, 2, 1, 3, 1],
    [3, 1, 3, 3, 1, 3],
    [1, 3, 1, 1, 3, 1],
    [3, 1, 3, 3, 1, 3],
]
# Refill values for CHAIN_BOARD that leave the board without matches.
CHAIN_BOARD_REFILL = [1, 3, 1]

# Swapping (0,2) and (1,2) completes row 0; swapping (2,2) and (2,3) matches nothing.
SWAP_BOARD = [
    [1, 1, 2, 3, 1],
    [2, 3, 1, 2, 3],
    [3, 2, 3, 1, 2],
    [1, 3, 2, 3, 1],
    [2, 1, 3, 2, 3],
]


def stalemate_layout(rows: int = 5, cols: int = 5) -> list:
    """Diagonal three-colour stripes: no match and no match-producing swap."""
    return [[1 + (r + c) % 3 for c in range(cols)] for r in range(rows)]


def board_from_rows(layout: Layout, fruit_type_count: Optional[int] = None) -> Board:
    return Board.from_rows(layout, fruit_type_count)


class ScriptedRandom(random.Random):
    """random.Random whose randint draws come from a script until it runs out."""

    def __init__(self, values: Iterable[int] = (), seed: int = 0):
        super().__init__(seed)
        self.values = list(values)

    def randint(self, a, b):
        if self.values:
            value = self.values.pop(0)
            assert a <= value <= b, f"scripted value {value} outside {a}..{b}"
            return value
        return super().randint(a, b)


def drive_ticks(bus: EventBus, count: int = 30, dt: float = 0.1) -> None:
    for _ in range(count):
        bus.emit(EVENT_TICK, dt=dt)


def make_level(level_id: int = 1, **overrides) -> LevelConfig:
    values = dict(
        id=level_id,
        rows=6,
        cols=6,
        move_limit=10,
        target_score=10_000,
        fruit_type_count=3,
    )
    values.update(overrides)
    return LevelConfig(**values)


def make_config(levels: Sequence[LevelConfig] = (), **session_overrides) -> GameConfig:
    """Default config with its level catalogue and session knobs replaced."""
    base = load_config()
    return replace(
        base,
        levels=tuple(levels) or (make_level(1), make_level(2)),
        session=replace(base.session, **session_overrides),
    )


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def record(bus: EventBus, *names: str) -> list:
    """Collect (event name, payload) pairs for every listed event."""
    events: list = []
    for name in names:
        bus.subscribe(name, lambda sender, _name=name, **payload: events.append((_name, payload)))
    return events


def payloads(events: list, name: str) -> list:
    return [payload for event, payload in events if event == name]
