import pytest
import yaml

from fruitmatch.config.config_loader import get_config, get_level, load_config, reload_config


def test_default_catalogue(default_config):
    assert [level.id for level in default_config.levels] == list(range(1, 11))
    assert default_config.last_level_id == 10
    assert default_config.fruits[0] == "watermelon"
    assert default_config.fruit_name(9) == "pineapple"
    assert default_config.session.input_mode == "chain"
    assert default_config.session.commit_policy == "length"
    assert default_config.scoring.group_points(3) == 30


def test_level_details(default_config):
    first = default_config.get_level(1)
    assert (first.rows, first.cols, first.move_limit, first.target_score, first.fruit_type_count) == (6, 6, 15, 500, 3)
    assert first.tutorial

    rocks = default_config.get_level(4)
    assert rocks.obstacle_positions == {(2, 2), (2, 3), (4, 2), (4, 3)}

    assert default_config.get_level(8).time_limit == 120.0

    collect = default_config.get_level(9)
    assert collect.objective_pairs == ((1, 15), (2, 12))

    boss = default_config.get_level(10)
    assert boss.obstacle_health == {(4, 4): 5}
    assert len(boss.obstacle_positions) == 5


def test_unknown_level_falls_back_to_first(default_config):
    assert get_level(default_config, 99).id == 1


def test_fruit_name_out_of_range(default_config):
    with pytest.raises(ValueError):
        default_config.fruit_name(0)


def _write(tmp_path, data):
    path = tmp_path / "game_config.yaml"
    path.write_text(yaml.safe_dump(data))
    return str(path)


def _minimal(**level_overrides):
    level = {"id": 1, "rows": 5, "cols": 5, "move_limit": 10, "target_score": 100, "fruit_type_count": 3}
    level.update(level_overrides)
    return {"fruits": ["apple", "pear", "plum"], "levels": [level]}


def test_minimal_file_uses_defaults(tmp_path):
    config = load_config(_write(tmp_path, _minimal()))
    assert config.session.combo_window_seconds == 2.0
    assert config.session.shuffle_penalty == 2
    assert config.engine.max_cascade_depth == 100
    assert config.scoring.cascade_multiplier == 1.5


@pytest.mark.parametrize(
    "overrides",
    [
        {"fruit_type_count": 1},
        {"fruit_type_count": 4},
        {"rows": 0},
        {"move_limit": 0},
        {"obstacles": [{"row": 5, "col": 0}]},
        {"obstacles": [{"row": 1, "col": 1, "health": 0}]},
        {"objectives": [{"fruit": "banana", "count": 3}]},
    ],
)
def test_invalid_level_rejected(tmp_path, overrides):
    with pytest.raises(ValueError):
        load_config(_write(tmp_path, _minimal(**overrides)))


def test_invalid_session_rejected(tmp_path):
    data = _minimal()
    data["session"] = {"input_mode": "drag"}
    with pytest.raises(ValueError):
        load_config(_write(tmp_path, data))


def test_duplicate_level_ids_rejected(tmp_path):
    data = _minimal()
    data["levels"].append(dict(data["levels"][0]))
    with pytest.raises(ValueError):
        load_config(_write(tmp_path, data))


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "absent.yaml"))


def test_reload_replaces_cached_config(tmp_path):
    custom = reload_config(_write(tmp_path, _minimal()))
    try:
        assert get_config() is custom
    finally:
        reload_config()
    assert get_config().last_level_id == 10
