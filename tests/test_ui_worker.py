"""Tests for PresenceWorker (QThread wrapper around the loop)."""

from unittest.mock import MagicMock

from pytestqt.qtbot import QtBot

from core.artwork import ArtworkResolver
from core.models import LoopState, Track
from ui.worker import PresenceWorker


def _worker(**kwargs) -> PresenceWorker:
    resolver = MagicMock(spec=ArtworkResolver)
    resolver.resolve.return_value = "http://art/250.jpg"
    resolver.cached.return_value = "http://art/250.jpg"
    kwargs.setdefault("resolver", resolver)
    kwargs.setdefault("get_track", MagicMock(return_value=Track.stopped()))
    kwargs.setdefault("connect", MagicMock())
    return PresenceWorker(poll_seconds=0.01, **kwargs)


class TestPresenceWorkerBasics:
    def test_stop_sets_flag(self, qtbot: QtBot) -> None:
        worker = _worker()
        assert worker.is_running()
        worker.stop()
        assert not worker.is_running()


class TestHandleTick:
    """Signals emitted when loop state changes."""

    def test_new_track_emits_now_playing(self, qtbot: QtBot, song_a: Track) -> None:
        worker = _worker()
        with qtbot.waitSignal(worker.now_playing, timeout=1000) as blocker:
            worker.handle_tick(LoopState(), LoopState(last_track=song_a))

        payload = blocker.args[0]
        assert payload["title"] == "Song A"
        assert payload["artist"] == "Artist A"
        assert payload["playing"] is True
        assert payload["artwork_url"] == "http://art/250.jpg"

    def test_idle_emits_blank(self, qtbot: QtBot, song_a: Track) -> None:
        worker = _worker()
        with qtbot.waitSignal(worker.now_playing, timeout=1000) as blocker:
            worker.handle_tick(LoopState(last_track=song_a), LoopState())

        assert blocker.args[0]["title"] == ""
        assert blocker.args[0]["playing"] is False

    def test_unchanged_state_is_silent(self, qtbot: QtBot, song_a: Track) -> None:
        worker = _worker()
        state = LoopState(last_track=song_a)
        with qtbot.assertNotEmitted(worker.now_playing):
            worker.handle_tick(state, state)


class TestRun:
    def test_connect_failure_reports_status(self, qtbot: QtBot) -> None:
        worker = _worker(connect=MagicMock(side_effect=ConnectionRefusedError("no discord")))
        statuses = []
        worker.status.connect(statuses.append)

        worker.run()

        assert statuses[-1].startswith("Discord connect failed")

    def test_runs_until_stopped(self, qtbot: QtBot, song_a: Track) -> None:
        rpc = MagicMock()
        worker = _worker(connect=MagicMock(return_value=rpc), get_track=MagicMock(return_value=song_a))

        with qtbot.waitSignal(worker.now_playing, timeout=3000):
            worker.start()
        worker.stop()
        assert worker.wait(3000)

        rpc.update.assert_called_once()
        rpc.close.assert_called_once_with()
