"""Link or unlink the Spotify account the play worker polls."""
import logging
from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from songtracker.api.state import AppState, get_state
from songtracker.core.spotify_client import (
    exchange_code_and_save_token,
    get_authorize_url,
    get_spotify_client,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/auth-url")
def get_auth_url(state: AppState = Depends(get_state)):
    """Return the Spotify login URL and whether a token is already cached."""
    url = get_authorize_url()
    if url is None:
        return {"auth_url": None, "error": "SPOTIFY_CLIENT_ID/SPOTIFY_CLIENT_SECRET not set", "logged_in": False}
    return {"auth_url": url, "logged_in": get_spotify_client() is not None}


@router.get("/callback")
def spotify_callback(code: str | None = None, state: AppState = Depends(get_state)):
    """Exchange code for tokens and reconnect the play worker's source."""
    if not code:
        return HTMLResponse(
            "<body><p>Missing authorization code. Open /api/spotify/auth-url and log in again.</p></body>",
            status_code=400,
        )
    if not exchange_code_and_save_token(code):
        return HTMLResponse(
            "<body><p>Failed to link Spotify. Check backend logs and try again.</p></body>",
            status_code=500,
        )
    state.spotify_source.connect()
    return HTMLResponse(
        "<body><p>Spotify linked; plays are being recorded. You can close this window.</p></body>"
    )


@router.post("/logout")
def logout(state: AppState = Depends(get_state)):
    """Forget the Spotify token and stop polling until linked again."""
    source = state.spotify_source
    try:
        Path(source.cache_path).unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove Spotify token cache: %s", e)
    source.disconnect()
    return {"ok": True, "logged_in": False}
