# core/loop.py
"""
The poll -> compare -> publish loop.

Every tick takes the previous LoopState and returns the next one, so the
whole driver can be exercised without Music.app, the network or Discord.
"""
import time
from typing import Callable, Optional

from .artwork import ArtworkResolver
from .debug import log
from .discord_rpc import PresencePublisher
from .errors import BridgeInvocationFailure, BridgeParseFailure, PublishFailure
from .models import LoopState, Track


POLL_SECONDS = 1


def tick(
    state: LoopState,
    get_track: Callable[[], Track],
    resolver: ArtworkResolver,
    publisher: PresencePublisher,
) -> LoopState:
    try:
        track = get_track()
    except (BridgeInvocationFailure, BridgeParseFailure) as e:
        # keep whatever is showing; the next tick is the retry
        log("Music", f"Read failed: {e}")
        return state
    except Exception as e:
        log("Music", f"Read failed unexpectedly: {e}")
        return state

    if not track.is_playing:
        if state.idle:
            return state
        try:
            publisher.clear()
            log("RPC", f"Cleared ({track.message or 'stopped'})")
        except PublishFailure as e:
            log("RPC", f"Clear failed: {e}")
        return LoopState(last_track=None)

    if track == state.last_track:
        return state

    try:
        artwork_url = resolver.resolve(track)
    except Exception as e:
        log("Art", f"Lookup failed: {e}")
        artwork_url = ""

    try:
        publisher.publish(track, artwork_url)
        log("RPC", f"Updated: {track.label}")
    except PublishFailure as e:
        log("RPC", f"Update failed: {e}")

    # no retry until the track changes again
    return LoopState(last_track=track)


def run_forever(
    get_track: Callable[[], Track],
    resolver: ArtworkResolver,
    publisher: PresencePublisher,
    poll_seconds: float = POLL_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
    should_run: Callable[[], bool] = lambda: True,
    on_tick: Optional[Callable[[LoopState, LoopState], None]] = None,
) -> LoopState:
    state = LoopState()
    while should_run():
        new_state = tick(state, get_track, resolver, publisher)
        if on_tick is not None:
            on_tick(state, new_state)
        state = new_state
        sleep(poll_seconds)
    return state
