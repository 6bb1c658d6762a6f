"""Decide when a polled listen counts as a play, once per contiguous listen.

The poller samples playback every few seconds, so a single listen is seen many
times. A listen is credited once its position first reaches
RECORD_THRESHOLD_MS and the record was persisted; it stays credited until the
track name changes or the position moves backwards (seek/restart), after which
it is eligible again.
"""
from dataclasses import dataclass
from typing import Optional

from songtracker.config import RECORD_THRESHOLD_MS
from songtracker.models.playback import PlaybackSnapshot


@dataclass
class DetectorState:
    """Per-listener detector state. Mutated once per poll cycle by one thread."""
    previous: Optional[PlaybackSnapshot] = None
    recorded_current_track: bool = False

    def reset(self) -> None:
        self.previous = None
        self.recorded_current_track = False


def should_record(state: DetectorState, snapshot: PlaybackSnapshot) -> bool:
    """Return True if this snapshot should trigger a persistence attempt. Read-only."""
    if state.previous is None:
        # First observation: may already be mid-track past the threshold
        return snapshot.progress_ms is not None and snapshot.progress_ms >= RECORD_THRESHOLD_MS

    cur = snapshot.progress_ms
    prev = state.previous.progress_ms
    if cur is None or prev is None:
        return False
    return cur > prev and not state.recorded_current_track and cur >= RECORD_THRESHOLD_MS


def update(state: DetectorState, snapshot: PlaybackSnapshot, was_persisted: bool) -> None:
    """Advance state to snapshot and fold in this cycle's persistence outcome."""
    previous = state.previous
    if previous is not None:
        # Identity is the track name only; album/artist are ignored
        if snapshot.track_name != previous.track_name:
            state.recorded_current_track = False
        elif state.recorded_current_track and snapshot.progress_ms is not None:
            # Only a rewind clears credit; a poll without progress keeps it
            state.recorded_current_track = (previous.progress_ms or 0) <= snapshot.progress_ms

    state.previous = snapshot

    if not state.recorded_current_track:
        state.recorded_current_track = was_persisted


class PlayEventDetector:
    """Owns one DetectorState and applies should_record/update to it."""

    def __init__(self, state: Optional[DetectorState] = None) -> None:
        self.state = state if state is not None else DetectorState()

    def should_record(self, snapshot: PlaybackSnapshot) -> bool:
        return should_record(self.state, snapshot)

    def update(self, snapshot: PlaybackSnapshot, was_persisted: bool) -> None:
        update(self.state, snapshot, was_persisted)

    def reset(self) -> None:
        self.state.reset()
