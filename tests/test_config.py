"""Environment-driven settings."""
import importlib

import pytest

from songtracker import config


@pytest.fixture
def reload_config(monkeypatch):
    def _reload(**env):
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        return importlib.reload(config)

    yield _reload
    monkeypatch.undo()
    importlib.reload(config)


def test_spotify_settings_from_env(reload_config, tmp_path):
    cache = tmp_path / "token"
    cfg = reload_config(SPOTIFY_TOKEN_CACHE=str(cache), SPOTIFY_SCOPES="user-read-playback-state")
    assert cfg.SPOTIFY_TOKEN_CACHE == cache
    assert cfg.SPOTIFY_SCOPES == "user-read-playback-state"


def test_defaults(reload_config, monkeypatch):
    for key in ("SPOTIFY_TOKEN_CACHE", "SPOTIFY_SCOPES", "SONGTRACKER_POLL_INTERVAL_SEC"):
        monkeypatch.delenv(key, raising=False)
    cfg = reload_config()
    assert cfg.SPOTIFY_TOKEN_CACHE == cfg.DATA_DIR / ".spotify-token"
    assert cfg.SPOTIFY_SCOPES == "user-read-currently-playing"
    assert cfg.POLL_INTERVAL_SEC == 5.0
    assert cfg.RECORD_THRESHOLD_MS == 30000


def test_poll_interval_has_floor(reload_config):
    assert reload_config(SONGTRACKER_POLL_INTERVAL_SEC="0.2").POLL_INTERVAL_SEC == 1.0
