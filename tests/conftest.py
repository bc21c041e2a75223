"""Shared fixtures for Apple Music Presence tests."""

import os
from unittest.mock import MagicMock

import pytest
import requests

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from core.models import PlayerState, Track


@pytest.fixture
def song_a() -> Track:
    return Track(
        title="Song A",
        artist="Artist A",
        album="Album A",
        duration=215.0,
        player_state=PlayerState.PLAYING,
    )


@pytest.fixture
def song_b() -> Track:
    return Track(
        title="Song B",
        artist="Artist A",
        album="Album A",
        duration=180.0,
        player_state=PlayerState.PLAYING,
    )


@pytest.fixture
def stopped() -> Track:
    return Track.stopped("No track is currently playing.")


def make_response(payload=None, status_code: int = 200) -> MagicMock:
    """Build a stand-in for requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def response_factory():
    return make_response
