"""Playback snapshot observed from Spotify at one poll."""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class PlaybackSnapshot:
    """One poll's view of what is playing. Any field may be missing."""
    track_name: Optional[str] = None
    artists: Optional[Tuple[str, ...]] = None
    album: Optional[str] = None
    progress_ms: Optional[int] = None  # elapsed position within the track

    @property
    def has_record_fields(self) -> bool:
        """True if track name, artists and album are all present."""
        return (
            self.track_name is not None
            and self.artists is not None
            and self.album is not None
        )
