"""Lookups for the singleton components every session system shares."""
from __future__ import annotations

import random
from typing import Optional, Type, TypeVar

from esper import World

from fruitmatch.components.board import Board
from fruitmatch.components.fruit_tally import FruitTally
from fruitmatch.components.player_progress import PlayerProgress
from fruitmatch.components.selection import Selection
from fruitmatch.components.session_state import SessionState
from fruitmatch.config.config_loader import GameConfig, LevelConfig
from fruitmatch.config import config_loader
from fruitmatch.engine.hints import find_chain_hint, has_available_move

T = TypeVar("T")

INPUT_CHAIN = "chain"
INPUT_SWAP = "swap"


def _get_or_create(world: World, component_type: Type[T]) -> T:
    existing = list(world.get_component(component_type))
    if existing:
        return existing[0][1]
    component = component_type()
    world.create_entity(component)
    return component


def get_or_create_session_state(world: World) -> SessionState:
    """Return the shared SessionState component, creating it if absent."""
    return _get_or_create(world, SessionState)


def get_selection(world: World) -> Selection:
    return _get_or_create(world, Selection)


def get_tally(world: World) -> FruitTally:
    return _get_or_create(world, FruitTally)


def get_progress(world: World) -> PlayerProgress:
    return _get_or_create(world, PlayerProgress)


def get_board(world: World) -> Optional[Board]:
    for _, board in world.get_component(Board):
        return board
    return None


def set_board(world: World, board: Board) -> None:
    """Install board on the board entity, replacing the previous one wholesale."""
    for entity, _ in world.get_component(Board):
        world.add_component(entity, board)
        return
    world.create_entity(board)


def get_config(world: World) -> GameConfig:
    config = getattr(world, "config", None)
    if config is None:
        config = config_loader.get_config()
        setattr(world, "config", config)
    return config


def get_current_level(world: World) -> LevelConfig:
    state = get_or_create_session_state(world)
    return get_config(world).get_level(state.level_id)


def get_rng(world: World) -> random.Random:
    rng = getattr(world, "random", None)
    if rng is None:
        rng = random.Random()
        setattr(world, "random", rng)
    return rng


def has_move(board: Board, input_mode: str) -> bool:
    """Whether a player using input_mode can still make a move on board."""
    if input_mode == INPUT_CHAIN:
        return find_chain_hint(board) is not None
    return has_available_move(board)
