"""Configuration: env, Spotify credentials, poll cadence, storage paths."""
import os
from pathlib import Path

# Base paths (project root = parent of songtracker package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so SPOTIFY_CLIENT_ID etc. are set
from dotenv import load_dotenv

load_dotenv(BASE_DIR / ".env")

DATA_DIR = BASE_DIR / "data"
SONG_PLAYS_PATH = Path(os.getenv("SONGTRACKER_PLAYS_PATH", str(DATA_DIR / "song_plays.json")))
SPOTIFY_TOKEN_CACHE = Path(os.getenv("SPOTIFY_TOKEN_CACHE", str(DATA_DIR / ".spotify-token")))

# API (read-only query service)
API_HOST = os.getenv("SONGTRACKER_API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("SONGTRACKER_API_PORT", "8888"))

LOG_LEVEL = os.getenv("SONGTRACKER_LOG_LEVEL", "INFO").upper()

# Spotify (OAuth; tokens stored on disk after first connect)
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID", "")
SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET", "")
SPOTIFY_REDIRECT_URI = os.getenv("SPOTIFY_REDIRECT_URI", "http://localhost:8888/api/spotify/callback")
SPOTIFY_SCOPES = os.getenv("SPOTIFY_SCOPES", "user-read-currently-playing")

# Poll cadence for the play worker
POLL_INTERVAL_SEC = max(1.0, float(os.getenv("SONGTRACKER_POLL_INTERVAL_SEC", "5")))

# Minimum elapsed playback before a listen counts as a play (not configurable)
RECORD_THRESHOLD_MS = 30000


def ensure_data_dir() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
