# core/errors.py


class PresenceError(Exception):
    """Base for everything the presence loop knows how to recover from."""


class BridgeInvocationFailure(PresenceError):
    """osascript could not be run, timed out or exited non-zero."""


class BridgeParseFailure(PresenceError):
    """osascript ran but did not print a JSON object."""


class MetadataLookupFailure(PresenceError):
    """MusicBrainz or Cover Art Archive lookup failed."""


class PublishFailure(PresenceError):
    """Discord rejected (or never received) a presence call."""
