from fruitmatch.utils.combo import ComboTracker
from helpers import FakeClock


def test_first_match_starts_from_zero():
    tracker = ComboTracker(window=2.0, clock=FakeClock())
    assert tracker.combo_for_move(5) == 0


def test_match_inside_window_keeps_combo():
    clock = FakeClock()
    tracker = ComboTracker(window=2.0, clock=clock)
    tracker.record_match()
    clock.advance(1.5)
    assert tracker.combo_for_move(3) == 3
    clock.advance(0.5)
    assert tracker.combo_for_move(3) == 3


def test_match_after_window_resets():
    clock = FakeClock()
    tracker = ComboTracker(window=2.0, clock=clock)
    tracker.record_match()
    clock.advance(2.01)
    assert tracker.combo_for_move(3) == 0


def test_reset_forgets_last_match():
    clock = FakeClock()
    tracker = ComboTracker(window=2.0, clock=clock)
    tracker.record_match()
    tracker.reset()
    assert tracker.combo_for_move(2) == 0


def test_negative_window_clamped():
    assert ComboTracker(window=-1.0, clock=FakeClock()).window == 0.0
