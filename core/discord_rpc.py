#core/discord_rpc.py
import time
from typing import Callable, Optional

from pypresence import Presence
from pypresence.types import ActivityType

from .debug import debug_log, log
from .errors import PublishFailure
from .models import Track


# Apple Music application registered with Discord
APP_CLIENT_ID = "773825528921849856"

# Discord rejects text fields longer than this
MAX_TEXT = 128


def connect_to_discord(client_id: str = APP_CLIENT_ID) -> Presence:
    rpc = Presence(client_id)
    rpc.connect()

    # Give Discord time to send READY payload
    time.sleep(0.3)

    try:
        user = getattr(rpc, "user", None) or {}
        name = user.get("username", "Unknown")
        disc = user.get("discriminator", "")
        display = f"{name}#{disc}" if disc and disc != "0" else name

        log("RPC", f"Connected as {display}")
    except Exception:
        log("RPC", "Connected")

    return rpc


def build_payload(track: Track, artwork_url: str, now: Optional[float] = None) -> dict:
    if now is None:
        now = time.time()

    hover = f"{track.artist} • {track.album}" if track.album else track.artist

    return {
        "state": track.label[:MAX_TEXT],
        "details": track.title[:MAX_TEXT],
        # pypresence drops None values, so no art means no large image at all
        "large_image": artwork_url or None,
        "large_text": hover[:MAX_TEXT] or None,
        # elapsed time counts from the moment we publish, not from track start
        "start": int(now),
        "activity_type": ActivityType.LISTENING,
    }


class PresencePublisher:
    def __init__(self, rpc: Presence, clock: Callable[[], float] = time.time):
        self._rpc = rpc
        self._clock = clock

    def publish(self, track: Track, artwork_url: str) -> dict:
        payload = build_payload(track, artwork_url, now=self._clock())
        try:
            self._rpc.update(**payload)
        except Exception as e:
            raise PublishFailure(f"update rejected: {e}") from e
        debug_log(f"presence payload: {payload}")
        return payload

    def clear(self) -> None:
        try:
            self._rpc.clear()
        except Exception as e:
            raise PublishFailure(f"clear rejected: {e}") from e

    def close(self) -> None:
        try:
            self._rpc.clear()
            self._rpc.close()
        except Exception as e:
            debug_log(f"Discord close failed: {e}")
