"""FastAPI app, play worker lifecycle, and route registration."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from songtracker.config import LOG_LEVEL, SPOTIFY_CLIENT_ID, SPOTIFY_CLIENT_SECRET, ensure_data_dir

# Configure logging in the worker process (so play_worker INFO logs are visible under uvicorn)
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(levelname)s: %(name)s: %(message)s",
)

from songtracker.api.state import AppState, get_state

# Import routes after state to avoid circular imports
from songtracker.api.routes import plays, spotify, worker

__all__ = ["app", "AppState", "get_state"]

logger = logging.getLogger(__name__)

_state = get_state()


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_data_dir()
    if not SPOTIFY_CLIENT_ID or not SPOTIFY_CLIENT_SECRET:
        logger.warning("SPOTIFY_CLIENT_ID/SPOTIFY_CLIENT_SECRET not set; no plays will be recorded")
    _state.play_worker.start()
    logger.info("Play worker thread started (interval %.1fs)", _state.play_worker.interval_sec)

    yield

    _state.play_worker.stop()


app = FastAPI(
    title="Song Tracker API",
    description="Read-only API over song plays recorded from Spotify",
    lifespan=lifespan,
)

app.include_router(plays.router, prefix="/api", tags=["plays"])
app.include_router(worker.router, prefix="/api/worker", tags=["worker"])
app.include_router(spotify.router, prefix="/api/spotify", tags=["spotify"])
