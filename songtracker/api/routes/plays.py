"""Read-only lookup of stored song plays."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from songtracker.api.state import AppState, get_state
from songtracker.core.play_store import play_to_dict

router = APIRouter()


class SongPlayOut(BaseModel):
    id: int
    song_name: str
    song_artist: List[str]
    song_album: str
    time: Optional[str] = None


@router.get("/song/{song}", response_model=List[SongPlayOut])
def fetch_songs(song: str, state: AppState = Depends(get_state)):
    """List every play of the song with this name."""
    return [play_to_dict(p) for p in state.play_store.lookup_songs_by_name(song)]


@router.get("/id/{play_id}", response_model=SongPlayOut)
def fetch_song_by_id(play_id: int, state: AppState = Depends(get_state)):
    """Return one play by id."""
    play = state.play_store.lookup_song(play_id)
    if play is None:
        raise HTTPException(status_code=404, detail="Play not found")
    return play_to_dict(play)


@router.get("/plays", response_model=List[SongPlayOut])
def list_plays(
    limit: Optional[int] = Query(None, ge=1),
    state: AppState = Depends(get_state),
):
    """List plays, newest first."""
    plays = sorted(state.play_store.load_plays(), key=lambda p: p.id, reverse=True)
    if limit is not None:
        plays = plays[:limit]
    return [play_to_dict(p) for p in plays]
