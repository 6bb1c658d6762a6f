"""Shared application state (injected into routes)."""
from songtracker.core.play_store import PlayStore
from songtracker.core.play_worker import PlayWorker
from songtracker.core.spotify_client import SpotifySource


class AppState:
    def __init__(self) -> None:
        self.play_store = PlayStore()
        self.spotify_source = SpotifySource()
        self._play_worker: PlayWorker | None = None

    @property
    def play_worker(self) -> PlayWorker:
        if self._play_worker is None:
            self._play_worker = PlayWorker(self.spotify_source, self.play_store)
        return self._play_worker


_state = AppState()


def get_state() -> AppState:
    return _state
