"""Contracts the play worker consumes: a playback source and a play sink."""
from typing import List, Optional, Protocol

from songtracker.models.playback import PlaybackSnapshot
from songtracker.models.song_play import SongPlay


class PlaybackSource(Protocol):
    """Yields the latest playback snapshot, or None.

    Implementations handle their own errors and reauthentication; a failure
    surfaces only as None.
    """

    def current_playing(self) -> Optional[PlaybackSnapshot]:
        """Return what is playing now, or None if nothing/unavailable."""


class PlaySink(Protocol):
    """Durably stores a song play."""

    def insert_song(self, name: str, artists: List[str], album: str) -> Optional[SongPlay]:
        """Store a play and return it with id and time assigned, or None on failure."""
