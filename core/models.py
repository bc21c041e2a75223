# core/models.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class PlayerState(str, Enum):
    PLAYING = "playing"
    STOPPED = "stopped"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value) -> "PlayerState":
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.UNKNOWN


def _text(value) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _seconds(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True, eq=False)
class Track:
    title: str = ""
    artist: str = ""
    album: str = ""
    duration: float = 0.0  # seconds
    player_state: PlayerState = PlayerState.UNKNOWN
    message: Optional[str] = field(default=None)

    @property
    def identity(self) -> Tuple[str, str, str]:
        return (self.title, self.artist, self.album)

    @property
    def label(self) -> str:
        return f"{self.title} - {self.artist}"

    @property
    def is_playing(self) -> bool:
        return self.player_state is PlayerState.PLAYING and any(self.identity)

    # duration, state and message never take part in change detection
    def __eq__(self, other):
        if not isinstance(other, Track):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self):
        return hash(self.identity)

    @classmethod
    def stopped(cls, message: Optional[str] = None) -> "Track":
        return cls(player_state=PlayerState.STOPPED, message=message)

    @classmethod
    def from_bridge(cls, data: dict) -> "Track":
        """
        Normalize the JSON object printed by the Music.app bridge.

        Anything that is not "playing" collapses to a stopped track with an
        empty identity, so a paused track is never mistaken for a live one.
        """
        state = PlayerState.parse(data.get("playerState"))
        message = data.get("message")
        if message is not None:
            message = _text(message)

        if state is not PlayerState.PLAYING:
            return cls.stopped(message)

        return cls(
            title=_text(data.get("trackName")),
            artist=_text(data.get("artistName")),
            album=_text(data.get("albumName")),
            duration=_seconds(data.get("duration")),
            player_state=state,
            message=message,
        )

    def as_dict(self) -> dict:
        return {
            "title": self.title,
            "artist": self.artist,
            "album": self.album,
            "duration": self.duration,
            "playing": self.is_playing,
            "message": self.message or "",
        }


@dataclass(frozen=True)
class LoopState:
    # the last track handed to the publisher; None while idle
    last_track: Optional[Track] = None

    @property
    def idle(self) -> bool:
        return self.last_track is None
