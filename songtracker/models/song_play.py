"""Persisted song play."""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class SongPlay:
    """Stored play: one genuine listen of a track."""
    id: int
    song_name: str
    song_artist: List[str] = field(default_factory=list)
    song_album: str = ""
    time: Optional[str] = None  # ISO-8601 UTC, assigned by the store
