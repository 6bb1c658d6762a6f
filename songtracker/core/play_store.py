"""Persist and look up song plays (JSON)."""
import json
import logging
import os
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from songtracker.config import SONG_PLAYS_PATH
from songtracker.models.song_play import SongPlay

logger = logging.getLogger(__name__)


def play_to_dict(p: SongPlay) -> dict:
    return {
        "id": p.id,
        "song_name": p.song_name,
        "song_artist": list(p.song_artist),
        "song_album": p.song_album,
        "time": p.time,
    }


class PlayStore:
    """JSON-file store of song plays.

    Written by the play worker, read by the API; a lock serialises access.
    """

    def __init__(self, path: Union[str, Path] = SONG_PLAYS_PATH) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self, strict: bool) -> List[SongPlay]:
        """Parse the store file. A missing file is empty.

        Raises OSError or ValueError when the file exists but cannot be read or
        is not a {"plays": [...]} document. Malformed entries are skipped, or
        raise ValueError when strict.
        """
        if not self.path.exists():
            return []
        data = json.loads(self.path.read_text())
        plays = data.get("plays", []) if isinstance(data, dict) else None
        if not isinstance(plays, list):
            raise ValueError(f"{self.path} is not a plays document")
        out = []
        for item in plays:
            try:
                out.append(
                    SongPlay(
                        id=int(item["id"]),
                        song_name=item["song_name"],
                        song_artist=list(item["song_artist"]),
                        song_album=item["song_album"],
                        time=item.get("time"),
                    )
                )
            except (KeyError, TypeError, ValueError):
                if strict:
                    raise ValueError(f"malformed play entry in {self.path}: {item!r}")
                continue
        return out

    def _write(self, plays: List[SongPlay]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {"plays": [play_to_dict(p) for p in plays]}
        # Write to a temp file and swap so readers never see a partial file
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(data, indent=2))
        os.replace(tmp, self.path)

    def insert_song(self, name: str, artists: List[str], album: str) -> Optional[SongPlay]:
        """Append a play and save. Returns the stored play, or None if nothing was stored.

        An existing file that cannot be read back intact is left untouched.
        """
        with self._lock:
            try:
                plays = self._read(strict=True)
            except (OSError, ValueError) as e:
                logger.warning("Not storing play %r, existing plays unreadable: %s", name, e)
                return None
            next_id = max((p.id for p in plays), default=0) + 1
            play = SongPlay(
                id=next_id,
                song_name=name,
                song_artist=list(artists),
                song_album=album,
                time=datetime.now(timezone.utc).isoformat(),
            )
            try:
                self._write(plays + [play])
            except OSError as e:
                logger.warning("Failed to store play %r: %s", name, e)
                return None
        return play

    def load_plays(self) -> List[SongPlay]:
        """Load all plays from disk, oldest first. An unreadable file reads as empty."""
        with self._lock:
            try:
                return self._read(strict=False)
            except (OSError, ValueError) as e:
                logger.warning("Could not read %s: %s", self.path, e)
                return []

    def lookup_song(self, play_id: int) -> Optional[SongPlay]:
        """Return play by id or None."""
        for p in self.load_plays():
            if p.id == play_id:
                return p
        return None

    def lookup_songs_by_name(self, name: str) -> List[SongPlay]:
        """Return every play of the song with this exact name."""
        return [p for p in self.load_plays() if p.song_name == name]
