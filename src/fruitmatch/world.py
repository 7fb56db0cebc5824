import random
from typing import Optional

from esper import World

from fruitmatch.components.fruit_tally import FruitTally
from fruitmatch.components.game_state import GameMode, GameState
from fruitmatch.components.player_progress import PlayerProgress
from fruitmatch.components.selection import Selection
from fruitmatch.components.session_state import SessionState
from fruitmatch.config.config_loader import GameConfig, get_config


def create_world(
    initial_mode: GameMode = GameMode.IDLE,
    *,
    config: Optional[GameConfig] = None,
    rng: Optional[random.Random] = None,
    unlocked_level: int = 1,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())
    config = config or get_config()
    setattr(world, "config", config)

    # Session singletons live together on one state entity; the board gets its
    # own entity when the first level starts.
    world.create_entity(
        GameState(mode=initial_mode),
        SessionState(),
        FruitTally(),
        Selection(),
        PlayerProgress(unlocked_level=unlocked_level, capacity=config.session.high_score_capacity),
    )
    return world
