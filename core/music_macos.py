#core/music_macos.py
import json
import subprocess

from .debug import debug_log
from .errors import BridgeInvocationFailure, BridgeParseFailure
from .models import Track


BRIDGE_TIMEOUT_SECONDS = 5

# JavaScript for Automation; prints one JSON object per call.
_SCRIPT = r'''
const Music = Application("Music");
const output = {};
if (Music.running() && Music.playerState() === "playing") {
  const track = Music.currentTrack;
  output.trackName = track.name();
  output.artistName = track.artist();
  output.albumName = track.album();
  output.duration = track.duration();
  output.playerState = Music.playerState();
} else {
  output.playerState = "stopped";
  output.message = "No track is currently playing.";
}
JSON.stringify(output)
'''


def bridge_command() -> list:
    return ["osascript", "-l", "JavaScript", "-e", _SCRIPT]


def parse_bridge_output(out: str) -> Track:
    try:
        data = json.loads(out)
    except ValueError as e:
        raise BridgeParseFailure(f"bridge returned non-JSON output: {out[:80]!r}") from e

    if not isinstance(data, dict):
        raise BridgeParseFailure(f"bridge returned {type(data).__name__}, expected an object")

    return Track.from_bridge(data)


def _decode(raw) -> str:
    # osascript output is not guaranteed to be valid UTF-8
    if raw is None:
        return ""
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw


def get_current_track(run=subprocess.run, timeout: float = BRIDGE_TIMEOUT_SECONDS) -> Track:
    """
    Ask Music.app what is playing.

    Raises BridgeInvocationFailure / BridgeParseFailure; the caller decides
    what a failed tick means. `run` is swappable for tests.
    """
    try:
        proc = run(bridge_command(), capture_output=True, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise BridgeInvocationFailure(f"osascript timed out after {timeout}s") from e
    except OSError as e:
        raise BridgeInvocationFailure(f"could not run osascript: {e}") from e

    if proc.returncode != 0:
        err = _decode(proc.stderr).strip()
        raise BridgeInvocationFailure(f"osascript exited {proc.returncode}: {err}")

    out = _decode(proc.stdout).strip()
    debug_log(f"bridge output: {out}")
    return parse_bridge_output(out)
