import random

from fruitmatch.events.bus import (
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_GRAVITY_APPLIED,
    EVENT_MATCH_CLEARED,
    EVENT_MOVES_CHANGED,
    EVENT_REFILL_COMPLETED,
    EVENT_SCORE_CHANGED,
)
from fruitmatch.game import create_game
from fruitmatch.systems.session_utils import set_board
from helpers import CHAIN_BOARD, CHAIN_BOARD_REFILL, FakeClock, ScriptedRandom, board_from_rows, make_config, payloads, record

CHAIN = [(0, 2), (1, 2), (2, 2)]
RESOLUTION_EVENTS = (
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_GRAVITY_APPLIED,
    EVENT_MATCH_CLEARED,
    EVENT_MOVES_CHANGED,
    EVENT_REFILL_COMPLETED,
    EVENT_SCORE_CHANGED,
)


def _game(clock=None):
    game = create_game(make_config(), input_mode="chain", rng=random.Random(2), clock=clock or FakeClock())
    game.start_level(1)
    return game


def _play(game, layout=CHAIN_BOARD, chain=CHAIN, refill=CHAIN_BOARD_REFILL):
    set_board(game.world, board_from_rows(layout, fruit_type_count=3))
    setattr(game.world, "random", ScriptedRandom(refill))
    game.select_chain(chain)


def test_stages_are_replayed_as_events():
    game = _game()
    events = record(game.event_bus, *RESOLUTION_EVENTS)
    _play(game)
    names = [name for name, _ in events]
    assert names == [
        EVENT_MOVES_CHANGED,
        EVENT_CASCADE_STEP,
        EVENT_MATCH_CLEARED,
        EVENT_GRAVITY_APPLIED,
        EVENT_REFILL_COMPLETED,
        EVENT_SCORE_CHANGED,
        EVENT_CASCADE_COMPLETE,
    ]
    cleared = payloads(events, EVENT_MATCH_CLEARED)[0]
    assert cleared["positions"] == CHAIN
    assert cleared["types"] == [(0, 2, 2), (1, 2, 2), (2, 2, 2)]
    assert cleared["points"] == 30
    assert payloads(events, EVENT_GRAVITY_APPLIED)[0]["moves"] == []
    assert payloads(events, EVENT_REFILL_COMPLETED)[0]["new_tiles"] == CHAIN
    assert payloads(events, EVENT_SCORE_CHANGED) == [{"score": 30, "delta": 30, "combo": 1}]
    assert payloads(events, EVENT_CASCADE_COMPLETE) == [{"depth": 0, "points": 30, "cascaded": False}]
    assert payloads(events, EVENT_MOVES_CHANGED)[0]["moves_remaining"] == 9


def test_cascade_is_free_and_reported():
    game = _game()
    events = record(game.event_bus, *RESOLUTION_EVENTS)
    layout = [
        [2, 2, 2, 1, 3, 1],
        [1, 3, 1, 3, 1, 3],
        [3, 1, 3, 1, 3, 1],
        [1, 3, 1, 3, 1, 3],
        [3, 1, 3, 1, 3, 1],
        [1, 3, 1, 3, 1, 3],
    ]
    _play(game, layout, [(0, 0), (0, 1), (0, 2)], [3, 3, 3, 1, 2, 1])
    assert [p["depth"] for p in payloads(events, EVENT_CASCADE_STEP)] == [0, 1]
    assert payloads(events, EVENT_CASCADE_COMPLETE) == [{"depth": 1, "points": 75, "cascaded": True}]
    assert game.session.moves_used == 1
    assert game.session.score == 75


def test_combo_within_window_boosts_next_move():
    clock = FakeClock()
    game = _game(clock)
    _play(game)
    assert game.session.score == 30
    clock.advance(1.0)
    _play(game)
    assert game.session.score == 30 + 33
    assert game.session.combo_count == 2


def test_combo_lapses_after_window():
    clock = FakeClock()
    game = _game(clock)
    _play(game)
    clock.advance(5.0)
    _play(game)
    assert game.session.score == 60
    assert game.session.combo_count == 1


def test_invalid_swap_resets_combo():
    clock = FakeClock()
    game = create_game(make_config(), input_mode="swap", rng=random.Random(2), clock=clock)
    game.start_level(1)
    game.session.combo_count = 3
    set_board(game.world, board_from_rows([[1, 2, 3], [2, 3, 1], [3, 1, 2]], fruit_type_count=3))
    game.swap((0, 0), (0, 1))
    assert game.session.combo_count == 0
