"""Play detection over sequences of polled snapshots."""
import pytest

from songtracker.config import RECORD_THRESHOLD_MS
from songtracker.core.play_detector import (
    DetectorState,
    PlayEventDetector,
    should_record,
    update,
)
from songtracker.models.playback import PlaybackSnapshot


def snap(progress_ms, track_name="Song"):
    return PlaybackSnapshot(
        track_name=track_name,
        artists=("Artist",),
        album="Album",
        progress_ms=progress_ms,
    )


def step(state, snapshot, persisted_if_signalled=True):
    """One cycle as the worker runs it; returns the signal."""
    signal = should_record(state, snapshot)
    update(state, snapshot, signal and persisted_if_signalled)
    return signal


def test_threshold_reached_on_new_track():
    state = DetectorState()
    signals = [step(state, snap(ms)) for ms in (10, 100, 30000)]
    assert signals == [False, False, True]
    assert state.recorded_current_track is True


def test_credited_track_not_recorded_again():
    state = DetectorState()
    for ms in (10, 100, 30000):
        step(state, snap(ms))
    assert step(state, snap(31000)) is False
    assert state.recorded_current_track is True


def test_rewind_clears_credit_and_replay_is_recorded():
    state = DetectorState()
    for ms in (10, 100, 30000, 31000):
        step(state, snap(ms))

    assert step(state, snap(29000)) is False
    assert state.recorded_current_track is False
    assert step(state, snap(30000)) is True
    assert state.recorded_current_track is True
    # Same replay keeps going: no second record
    assert step(state, snap(35000)) is False
    assert step(state, snap(40000)) is False


def test_stalled_position_on_credited_track():
    state = DetectorState()
    for ms in (10, 30000):
        step(state, snap(ms))
    signals = [step(state, snap(ms)) for ms in (33000, 34000, 34000)]
    assert signals == [False, False, False]
    assert state.recorded_current_track is True


def test_first_snapshot_without_progress():
    state = DetectorState()
    s = snap(None)
    assert step(state, s) is False
    assert state.previous == s
    assert state.recorded_current_track is False


def test_first_snapshot_already_past_threshold():
    state = DetectorState()
    assert should_record(state, snap(45000)) is True


def test_first_snapshot_below_threshold():
    state = DetectorState()
    assert should_record(state, snap(RECORD_THRESHOLD_MS - 1)) is False


def test_at_most_one_signal_per_forward_run():
    state = DetectorState()
    signals = [step(state, snap(ms)) for ms in range(0, 200000, 5000)]
    assert signals.count(True) == 1
    assert signals.index(True) == RECORD_THRESHOLD_MS // 5000


def test_absent_progress_neither_signals_nor_clears_credit():
    state = DetectorState()
    for ms in (10, 30000):
        step(state, snap(ms))
    assert state.recorded_current_track is True

    assert step(state, snap(None)) is False
    assert state.recorded_current_track is True
    # Progress comes back: previous has none, so no judgement this cycle
    assert step(state, snap(40000)) is False
    assert state.recorded_current_track is True
    assert step(state, snap(45000)) is False


def test_absent_progress_then_return_does_not_record_uncredited_track():
    state = DetectorState()
    step(state, snap(10))
    assert step(state, snap(None)) is False
    assert step(state, snap(35000)) is False
    # Next forward step above threshold is eligible again
    assert step(state, snap(40000)) is True


@pytest.mark.parametrize("credited", [True, False])
def test_track_change_clears_credit(credited):
    state = DetectorState(previous=snap(200000, "Old"), recorded_current_track=credited)
    update(state, snap(500000, "New"), False)
    assert state.recorded_current_track is False


def test_track_change_mid_listen_allows_new_record():
    state = DetectorState()
    for ms in (10, 30000, 60000):
        step(state, snap(ms, "First"))
    assert step(state, snap(1000, "Second")) is False
    assert step(state, snap(31000, "Second")) is True


def test_failed_persistence_stays_eligible():
    state = DetectorState()
    step(state, snap(10))
    assert step(state, snap(30000), persisted_if_signalled=False) is True
    assert state.recorded_current_track is False
    assert step(state, snap(35000)) is True
    assert state.recorded_current_track is True


def test_update_without_persistence_keeps_credit():
    state = DetectorState(previous=snap(40000), recorded_current_track=True)
    s = snap(45000)
    assert should_record(state, s) is False
    update(state, s, False)
    assert state.recorded_current_track is True


def test_should_record_has_no_side_effects():
    state = DetectorState(previous=snap(10), recorded_current_track=False)
    should_record(state, snap(30000))
    assert state.previous == snap(10)
    assert state.recorded_current_track is False


def test_same_name_different_album_is_same_track():
    state = DetectorState(previous=snap(40000), recorded_current_track=True)
    other = PlaybackSnapshot(track_name="Song", artists=("Other",), album="Live", progress_ms=50000)
    update(state, other, False)
    assert state.recorded_current_track is True


def test_detector_object_and_reset():
    detector = PlayEventDetector()
    for ms in (10, 30000):
        if detector.should_record(snap(ms)):
            detector.update(snap(ms), True)
        else:
            detector.update(snap(ms), False)
    assert detector.state.recorded_current_track is True

    detector.reset()
    assert detector.state.previous is None
    assert detector.state.recorded_current_track is False
    assert detector.should_record(snap(31000)) is True
