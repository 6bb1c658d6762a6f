"""Play worker status."""
from fastapi import APIRouter, Depends

from songtracker.api.state import AppState, get_state
from songtracker.core.play_store import play_to_dict

router = APIRouter()


@router.get("")
def get_worker_status(state: AppState = Depends(get_state)):
    worker = state.play_worker
    detector_state = worker.detector.state
    previous = detector_state.previous
    return {
        "running": worker.is_running,
        "poll_interval_sec": worker.interval_sec,
        "recorded_current_track": detector_state.recorded_current_track,
        "last_track_name": previous.track_name if previous else None,
        "last_play": play_to_dict(worker.last_play) if worker.last_play else None,
    }
