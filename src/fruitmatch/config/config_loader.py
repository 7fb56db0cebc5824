"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to scoring,
session tuning, engine retry caps and the level catalogue.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, FrozenSet, Optional, Tuple

import yaml

from fruitmatch.constants import GENERATION_ATTEMPTS, MAX_CASCADE_DEPTH, MIN_FRUIT_TYPES, SHUFFLE_ATTEMPTS
from fruitmatch.engine.scoring import ScoreRules

INPUT_MODES = ("chain", "swap")
COMMIT_POLICIES = ("length", "release")


@dataclass(frozen=True)
class SessionConfig:
    """Session policy knobs."""
    input_mode: str
    commit_policy: str
    combo_window_seconds: float
    shuffle_penalty: int
    auto_shuffle_on_stalemate: bool
    high_score_capacity: int


@dataclass(frozen=True)
class EngineConfig:
    """Retry caps handed to the board engine."""
    generation_attempts: int
    shuffle_attempts: int
    max_cascade_depth: int


@dataclass(frozen=True)
class ObstacleConfig:
    row: int
    col: int
    kind: str = "rock"
    health: Optional[int] = None


@dataclass(frozen=True)
class ObjectiveConfig:
    """Clear ``count`` tiles of ``fruit_type`` before the level can complete."""
    fruit_type: int
    count: int


@dataclass(frozen=True)
class LevelConfig:
    id: int
    rows: int
    cols: int
    move_limit: int
    target_score: int
    fruit_type_count: int
    obstacles: Tuple[ObstacleConfig, ...] = ()
    objectives: Tuple[ObjectiveConfig, ...] = ()
    time_limit: Optional[float] = None
    description: str = ""
    tutorial: bool = False

    @property
    def obstacle_positions(self) -> FrozenSet[Tuple[int, int]]:
        return frozenset((obstacle.row, obstacle.col) for obstacle in self.obstacles)

    @property
    def obstacle_health(self) -> Dict[Tuple[int, int], int]:
        return {
            (obstacle.row, obstacle.col): obstacle.health
            for obstacle in self.obstacles
            if obstacle.health is not None
        }

    @property
    def objective_pairs(self) -> Tuple[Tuple[int, int], ...]:
        return tuple((objective.fruit_type, objective.count) for objective in self.objectives)


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    scoring: ScoreRules
    session: SessionConfig
    engine: EngineConfig
    fruits: Tuple[str, ...]
    levels: Tuple[LevelConfig, ...]

    @property
    def last_level_id(self) -> int:
        return max(level.id for level in self.levels)

    def get_level(self, level_id: int) -> LevelConfig:
        """Level by id; unknown ids fall back to the first level."""
        for level in self.levels:
            if level.id == level_id:
                return level
        return self.levels[0]

    def has_level(self, level_id: int) -> bool:
        return any(level.id == level_id for level in self.levels)

    def fruit_name(self, fruit_type: int) -> str:
        if 1 <= fruit_type <= len(self.fruits):
            return self.fruits[fruit_type - 1]
        raise ValueError(f"Invalid fruit type: {fruit_type}")


def _parse_scoring(data: dict) -> ScoreRules:
    defaults = ScoreRules()
    return ScoreRules(
        base_points_per_tile=int(data.get("base_points_per_tile", defaults.base_points_per_tile)),
        length_bonus_per_tile=int(data.get("length_bonus_per_tile", defaults.length_bonus_per_tile)),
        combo_increment=float(data.get("combo_increment", defaults.combo_increment)),
        cascade_multiplier=float(data.get("cascade_multiplier", defaults.cascade_multiplier)),
        three_star_score=float(data.get("three_star_score", defaults.three_star_score)),
        three_star_efficiency=float(data.get("three_star_efficiency", defaults.three_star_efficiency)),
        two_star_score=float(data.get("two_star_score", defaults.two_star_score)),
        two_star_efficiency=float(data.get("two_star_efficiency", defaults.two_star_efficiency)),
    )


def _parse_obstacle(data: dict) -> ObstacleConfig:
    health = data.get("health")
    return ObstacleConfig(
        row=int(data["row"]),
        col=int(data["col"]),
        kind=str(data.get("kind", "rock")),
        health=int(health) if health is not None else None,
    )


def _parse_objective(data: dict, fruits: Tuple[str, ...]) -> ObjectiveConfig:
    fruit = data["fruit"]
    if isinstance(fruit, str):
        if fruit not in fruits:
            raise ValueError(f"Unknown objective fruit '{fruit}'")
        fruit_type = fruits.index(fruit) + 1
    else:
        fruit_type = int(fruit)
    return ObjectiveConfig(fruit_type=fruit_type, count=int(data["count"]))


def _parse_level(data: dict, fruits: Tuple[str, ...]) -> LevelConfig:
    time_limit = data.get("time_limit")
    return LevelConfig(
        id=int(data["id"]),
        rows=int(data["rows"]),
        cols=int(data["cols"]),
        move_limit=int(data["move_limit"]),
        target_score=int(data["target_score"]),
        fruit_type_count=int(data["fruit_type_count"]),
        obstacles=tuple(_parse_obstacle(o) for o in data.get("obstacles") or ()),
        objectives=tuple(_parse_objective(o, fruits) for o in data.get("objectives") or ()),
        time_limit=float(time_limit) if time_limit is not None else None,
        description=str(data.get("description", "")),
        tutorial=bool(data.get("tutorial", False)),
    )


def _validate_level(level: LevelConfig, fruit_count: int) -> None:
    if level.rows <= 0 or level.cols <= 0:
        raise ValueError(f"Level {level.id}: dimensions must be positive, got {level.rows}x{level.cols}")
    if not MIN_FRUIT_TYPES <= level.fruit_type_count <= fruit_count:
        raise ValueError(
            f"Level {level.id}: fruit_type_count must be between {MIN_FRUIT_TYPES} and {fruit_count}, "
            f"got {level.fruit_type_count}"
        )
    if level.move_limit <= 0:
        raise ValueError(f"Level {level.id}: move_limit must be positive, got {level.move_limit}")
    for obstacle in level.obstacles:
        if not (0 <= obstacle.row < level.rows and 0 <= obstacle.col < level.cols):
            raise ValueError(f"Level {level.id}: obstacle ({obstacle.row}, {obstacle.col}) is off the board")
        if obstacle.health is not None and obstacle.health <= 0:
            raise ValueError(f"Level {level.id}: obstacle health must be positive, got {obstacle.health}")
    for objective in level.objectives:
        if not 1 <= objective.fruit_type <= level.fruit_type_count:
            raise ValueError(f"Level {level.id}: objective fruit type {objective.fruit_type} never spawns")


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if not config.levels:
        raise ValueError("At least one level must be defined")
    ids = [level.id for level in config.levels]
    if len(set(ids)) != len(ids):
        raise ValueError(f"Duplicate level ids: {ids}")
    for level in config.levels:
        _validate_level(level, len(config.fruits))
    if config.session.input_mode not in INPUT_MODES:
        raise ValueError(f"input_mode must be one of {INPUT_MODES}, got '{config.session.input_mode}'")
    if config.session.commit_policy not in COMMIT_POLICIES:
        raise ValueError(f"commit_policy must be one of {COMMIT_POLICIES}, got '{config.session.commit_policy}'")
    if config.session.shuffle_penalty < 0:
        raise ValueError(f"shuffle_penalty must not be negative, got {config.session.shuffle_penalty}")


def default_config_path() -> Path:
    return Path(os.path.dirname(__file__)) / "game_config.yaml"


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to a config file. If None, uses the packaged default.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    path = Path(config_path) if config_path is not None else default_config_path()
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}

    fruits = tuple(str(name) for name in raw.get("fruits") or ())
    if len(fruits) < MIN_FRUIT_TYPES:
        raise ValueError(f"At least {MIN_FRUIT_TYPES} fruits must be defined")

    session_data = raw.get("session") or {}
    session = SessionConfig(
        input_mode=str(session_data.get("input_mode", "chain")),
        commit_policy=str(session_data.get("commit_policy", "length")),
        combo_window_seconds=float(session_data.get("combo_window_seconds", 2.0)),
        shuffle_penalty=int(session_data.get("shuffle_penalty", 2)),
        auto_shuffle_on_stalemate=bool(session_data.get("auto_shuffle_on_stalemate", True)),
        high_score_capacity=int(session_data.get("high_score_capacity", 100)),
    )

    engine_data = raw.get("engine") or {}
    engine = EngineConfig(
        generation_attempts=int(engine_data.get("generation_attempts", GENERATION_ATTEMPTS)),
        shuffle_attempts=int(engine_data.get("shuffle_attempts", SHUFFLE_ATTEMPTS)),
        max_cascade_depth=int(engine_data.get("max_cascade_depth", MAX_CASCADE_DEPTH)),
    )

    config = GameConfig(
        scoring=_parse_scoring(raw.get("scoring") or {}),
        session=session,
        engine=engine,
        fruits=fruits,
        levels=tuple(_parse_level(level, fruits) for level in raw.get("levels") or ()),
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config


def get_level(config: GameConfig, level_id: int) -> LevelConfig:
    return config.get_level(level_id)
