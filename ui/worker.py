# ui/worker.py
import sys
import time

from PySide6.QtCore import QThread, Signal

if sys.platform == "darwin":
    from core.music_macos import get_current_track
else:
    get_current_track = None
from core.artwork import ArtworkResolver
from core.debug import debug_log
from core.discord_rpc import PresencePublisher, connect_to_discord
from core.loop import POLL_SECONDS, run_forever
from core.models import LoopState


class PresenceWorker(QThread):
    """
    Runs the presence loop off the GUI thread.

    The loop itself stays strictly sequential; this thread is the only one
    that ever touches the artwork cache or the loop state.
    """

    status = Signal(str)
    now_playing = Signal(dict)   # Track.as_dict() + {"artwork_url": str}

    def __init__(self, poll_seconds: float = POLL_SECONDS, get_track=None, connect=None,
                 resolver=None, parent=None):
        super().__init__(parent)
        self.poll_seconds = poll_seconds
        self._running = True

        self._get_track = get_track or get_current_track
        self._connect = connect or connect_to_discord
        self._resolver = resolver or ArtworkResolver()
        self._publisher = None

    def stop(self):
        self._running = False

    def is_running(self) -> bool:
        return self._running

    def _sleep(self, seconds: float):
        # short slices so stop() takes effect promptly
        deadline = time.monotonic() + seconds
        while self._running and time.monotonic() < deadline:
            time.sleep(min(0.1, max(0.0, deadline - time.monotonic())))

    def handle_tick(self, previous: LoopState, current: LoopState):
        if current == previous:
            return

        if current.idle:
            self.status.emit("Apple Music: nothing playing")
            self.now_playing.emit({
                "title": "",
                "artist": "",
                "album": "",
                "duration": 0.0,
                "playing": False,
                "message": "",
                "artwork_url": "",
            })
            return

        track = current.last_track
        d = track.as_dict()
        d["artwork_url"] = self._resolver.cached(track) or ""
        self.now_playing.emit(d)
        self.status.emit(f"Playing: {track.label}")

    def run(self):
        if not self._get_track:
            self.status.emit("Music source unavailable on this OS")
            return

        try:
            self.status.emit("Connecting to Discord…")
            self._publisher = PresencePublisher(self._connect())
            self.status.emit("Discord connected")
        except Exception as e:
            self.status.emit(f"Discord connect failed: {e}")
            debug_log(f"Discord connect failed: {e}")
            return

        try:
            run_forever(
                self._get_track,
                self._resolver,
                self._publisher,
                poll_seconds=self.poll_seconds,
                sleep=self._sleep,
                should_run=self.is_running,
                on_tick=self.handle_tick,
            )
        finally:
            self._publisher.close()
            self.status.emit("Stopped")
