from fruitmatch.components.fruit_tally import FruitTally
from fruitmatch.components.player_progress import HighScoreEntry, PlayerProgress
from fruitmatch.components.selection import Selection
from fruitmatch.components.session_state import SessionState


def test_tally_tracks_objectives():
    tally = FruitTally()
    tally.add_all({1: 10, 2: 3})
    tally.add(1, 2)
    tally.add(3, 0)
    objectives = [(1, 15), (2, 3)]
    assert tally.missing(objectives) == {1: 3}
    assert not tally.meets(objectives)
    tally.add(1, 3)
    assert tally.meets(objectives)
    assert tally.meets([])
    tally.clear()
    assert tally.counts == {}


def test_high_scores_sorted_and_capped():
    progress = PlayerProgress(capacity=2)
    assert progress.record(HighScoreEntry(1, 300, 1, 10)) == 0
    assert progress.record(HighScoreEntry(1, 500, 2, 9)) == 0
    assert progress.record(HighScoreEntry(2, 400, 2, 8)) == 1
    assert progress.record(HighScoreEntry(2, 100, 1, 8)) == -1
    assert [entry.score for entry in progress.high_scores] == [500, 400]
    assert progress.best_for(1).score == 500
    assert progress.best_for(3) is None


def test_unlock_only_from_frontier():
    progress = PlayerProgress()
    assert progress.is_unlocked(1) and not progress.is_unlocked(2)
    assert progress.unlock_after(1, last_level=10)
    assert progress.unlocked_level == 2
    assert not progress.unlock_after(1, last_level=10)
    progress.unlocked_level = 10
    assert not progress.unlock_after(10, last_level=10)
    assert not progress.is_unlocked(0)


def test_session_reset():
    state = SessionState(level_id=3, score=900, moves_remaining=1, moves_used=19, combo_count=4, elapsed=12.0)
    state.reset(4, 25)
    assert (state.level_id, state.score, state.moves_remaining, state.moves_used) == (4, 0, 25, 0)
    assert state.combo_count == 0 and state.elapsed == 0.0


def test_selection_clear():
    selection = Selection(chain=[(0, 0), (0, 1)], pending_swap=(2, 2))
    selection.clear()
    assert selection.chain == [] and selection.pending_swap is None
