"""Core services: play detection, play worker, Spotify source, play store."""
from songtracker.core.play_detector import DetectorState, PlayEventDetector
from songtracker.core.play_store import PlayStore
from songtracker.core.play_worker import PlayWorker

__all__ = ["DetectorState", "PlayEventDetector", "PlayStore", "PlayWorker"]
