"""Spotify "currently playing" source via Spotipy; uses cached OAuth token."""
import logging
from pathlib import Path
from typing import Optional, Union

from spotipy import Spotify
from spotipy.cache_handler import CacheFileHandler
from spotipy.oauth2 import SpotifyOAuth

from songtracker.config import (
    SPOTIFY_CLIENT_ID,
    SPOTIFY_CLIENT_SECRET,
    SPOTIFY_REDIRECT_URI,
    SPOTIFY_SCOPES,
    SPOTIFY_TOKEN_CACHE,
)
from songtracker.models.playback import PlaybackSnapshot

logger = logging.getLogger(__name__)


def _auth_manager(cache_path: Union[str, Path] = SPOTIFY_TOKEN_CACHE) -> SpotifyOAuth:
    cache = CacheFileHandler(cache_path=str(cache_path))
    return SpotifyOAuth(
        client_id=SPOTIFY_CLIENT_ID,
        client_secret=SPOTIFY_CLIENT_SECRET,
        redirect_uri=SPOTIFY_REDIRECT_URI,
        scope=SPOTIFY_SCOPES,
        cache_handler=cache,
        open_browser=False,
    )


def get_spotify_client(cache_path: Union[str, Path] = SPOTIFY_TOKEN_CACHE) -> Optional[Spotify]:
    """Return an authenticated Spotipy Spotify client, or None if not logged in."""
    if not SPOTIFY_CLIENT_ID or not SPOTIFY_CLIENT_SECRET:
        return None
    auth = _auth_manager(cache_path)
    try:
        token_info = auth.validate_token(auth.cache_handler.get_cached_token())
    except Exception as e:
        # Refresh token revoked or network down during refresh
        logger.warning("Spotify token validation failed: %s", e)
        return None
    if token_info is None:
        return None
    return Spotify(auth_manager=auth)


def get_authorize_url() -> Optional[str]:
    """Return the Spotify login URL for this app, or None if credentials are not configured."""
    if not SPOTIFY_CLIENT_ID or not SPOTIFY_CLIENT_SECRET:
        return None
    return _auth_manager().get_authorize_url()


def exchange_code_and_save_token(code: str, cache_path: Union[str, Path] = SPOTIFY_TOKEN_CACHE) -> bool:
    """Exchange OAuth code for tokens and save to cache. Returns True on success."""
    if not SPOTIFY_CLIENT_ID or not SPOTIFY_CLIENT_SECRET:
        return False
    Path(cache_path).parent.mkdir(parents=True, exist_ok=True)
    auth = _auth_manager(cache_path)
    try:
        auth.get_access_token(code=code, check_cache=False)
        return True
    except Exception as e:
        logger.warning("Spotify code exchange failed: %s", e)
        return False


def snapshot_from_playing(playing: Optional[dict]) -> Optional[PlaybackSnapshot]:
    """Map a Spotify currently-playing response to a PlaybackSnapshot.

    Returns None for an empty response (nothing playing). Track fields are None
    when the response has no item (ads, private session, local files).
    """
    if not playing:
        return None
    progress = playing.get("progress_ms")
    item = playing.get("item")
    if not item:
        return PlaybackSnapshot(progress_ms=progress)
    artists = item.get("artists")
    album = item.get("album") or {}
    return PlaybackSnapshot(
        track_name=item.get("name"),
        artists=tuple(a.get("name", "") for a in artists) if artists is not None else None,
        album=album.get("name"),
        progress_ms=progress,
    )


class SpotifySource:
    """PlaybackSource backed by the Spotify Web API.

    Errors never leave this class: on a failed call it re-authenticates from the
    token cache and retries once, and otherwise reports "nothing playing".
    """

    def __init__(self, cache_path: Union[str, Path] = SPOTIFY_TOKEN_CACHE) -> None:
        self.cache_path = cache_path
        self._sp: Optional[Spotify] = None

    def connect(self) -> bool:
        """Build a client from the cached token. False if Spotify is not linked yet."""
        self._sp = get_spotify_client(self.cache_path)
        return self._sp is not None

    def disconnect(self) -> None:
        """Drop the client; the next poll rebuilds it from the token cache."""
        self._sp = None

    @property
    def is_connected(self) -> bool:
        return self._sp is not None

    def _has_token(self) -> bool:
        # Spotipy prompts on stdin when asked for a token it does not have
        auth = self._sp.auth_manager
        try:
            return auth.validate_token(auth.cache_handler.get_cached_token()) is not None
        except Exception as e:
            logger.warning("Spotify token refresh failed: %s", e)
            return False

    def current_playing(self) -> Optional[PlaybackSnapshot]:
        if self._sp is None and not self.connect():
            logger.debug("Spotify not linked; no snapshot")
            return None
        if not self._has_token():
            logger.info("Spotify token cache is gone; disconnected until linked again")
            self.disconnect()
            return None
        try:
            return snapshot_from_playing(self._sp.currently_playing())
        except Exception as e:
            logger.warning("Spotify API error: %s", e)

        if not self.connect():
            logger.warning("Spotify reauthentication failed")
            return None
        logger.info("Reauthenticated Spotify client")
        try:
            return snapshot_from_playing(self._sp.currently_playing())
        except Exception as e:
            logger.warning("Spotify API error after reauthentication: %s", e)
            return None
