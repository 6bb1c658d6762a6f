"""Poll the playback source on a fixed cadence and persist genuine plays."""
import logging
import threading
from typing import Optional

from songtracker.config import POLL_INTERVAL_SEC
from songtracker.core.play_detector import PlayEventDetector
from songtracker.core.ports import PlaybackSource, PlaySink
from songtracker.models.playback import PlaybackSnapshot
from songtracker.models.song_play import SongPlay

logger = logging.getLogger(__name__)


class PlayWorker:
    """Runs the poll -> decide -> persist -> update cycle for one listener.

    Cycles are strictly sequential, so the detector state needs no lock.
    """

    def __init__(
        self,
        source: PlaybackSource,
        sink: PlaySink,
        detector: Optional[PlayEventDetector] = None,
        interval_sec: float = POLL_INTERVAL_SEC,
    ) -> None:
        self.source = source
        self.sink = sink
        self.detector = detector if detector is not None else PlayEventDetector()
        self.interval_sec = interval_sec
        self.last_play: Optional[SongPlay] = None
        self._thread: Optional[threading.Thread] = None
        self._stop = threading.Event()

    def _persist(self, snapshot: PlaybackSnapshot) -> Optional[SongPlay]:
        if not snapshot.has_record_fields:
            logger.debug("Play threshold reached but snapshot is incomplete; not storing")
            return None
        try:
            return self.sink.insert_song(snapshot.track_name, list(snapshot.artists), snapshot.album)
        except Exception as e:
            logger.warning("Storing play %r failed: %s", snapshot.track_name, e)
            return None

    def poll_once(self) -> Optional[SongPlay]:
        """Run one cycle. Returns the stored play, if this cycle stored one."""
        snapshot = self.source.current_playing()
        if snapshot is None:
            # Not a playback event; leave detector state alone
            logger.debug("No snapshot this cycle")
            return None

        play = None
        if self.detector.should_record(snapshot):
            play = self._persist(snapshot)
        self.detector.update(snapshot, play is not None)

        if play is not None:
            self.last_play = play
            logger.info(
                "Recorded play #%s: %s - %s [%s]",
                play.id,
                ", ".join(play.song_artist),
                play.song_name,
                play.song_album,
            )
        return play

    def run(self, stop_event: Optional[threading.Event] = None) -> None:
        """Poll forever at the fixed interval. stop_event is only set on shutdown."""
        stop_event = stop_event if stop_event is not None else self._stop
        logger.info("Play worker started (interval %.1fs)", self.interval_sec)
        while True:
            try:
                self.poll_once()
            except Exception:
                logger.exception("Poll cycle failed")
            if stop_event.wait(timeout=self.interval_sec):
                break
        logger.info("Play worker stopped")

    def start(self) -> None:
        """Run the poll loop on a daemon thread."""
        if self.is_running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self.run, args=(self._stop,), daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        self._stop.set()
        if self._thread is None:
            return
        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            # Still inside a cycle; keep the handle so start() cannot run a second loop
            logger.warning("Play worker did not stop within %.1fs", timeout)
            return
        self._thread = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
