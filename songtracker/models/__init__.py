"""Data models for playback snapshots and stored plays."""
from songtracker.models.playback import PlaybackSnapshot
from songtracker.models.song_play import SongPlay

__all__ = [
    "PlaybackSnapshot",
    "SongPlay",
]
