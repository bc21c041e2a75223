#main.py
import sys

from core.artwork import ArtworkResolver
from core.debug import log
from core.discord_rpc import PresencePublisher, connect_to_discord
from core.loop import run_forever

if sys.platform == "darwin":
    from core.music_macos import get_current_track
else:
    get_current_track = None


def main() -> int:
    if not get_current_track:
        log("Music", "Music.app is only available on macOS.")
        return 1

    try:
        rpc = connect_to_discord()
    except Exception as e:
        log("RPC", f"Could not connect to Discord: {e}")
        return 1

    publisher = PresencePublisher(rpc)
    resolver = ArtworkResolver()

    log("Music", "Watching Apple Music… (Ctrl+C to stop)")

    try:
        run_forever(get_current_track, resolver, publisher)
    except KeyboardInterrupt:
        log("Music", "Stopping")
    finally:
        publisher.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
