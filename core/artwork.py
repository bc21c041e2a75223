# core/artwork.py
from typing import Dict, Optional

import requests

from .debug import debug_log
from .errors import MetadataLookupFailure
from .models import Track


USER_AGENT = "AppleMusicPresence/1.0"
MUSICBRAINZ_SEARCH_URL = "https://musicbrainz.org/ws/2/release/"
COVER_ART_URL = "https://coverartarchive.org"
THUMBNAIL_SIZE = "250"
REQUEST_TIMEOUT = 6

# unit separator; never shows up in Music.app tags
_KEY_SEP = "\x1f"


def cache_key(artist: str, album: str) -> str:
    return f"{artist or ''}{_KEY_SEP}{album or ''}"


def release_query(artist: str, album: str) -> str:
    parts = []
    if artist:
        parts.append(f'artist:"{artist}"')
    if album:
        parts.append(f'release:"{album}"')
    return " AND ".join(parts)


class ArtworkResolver:
    """
    Album -> Cover Art Archive thumbnail URL, memoised per (artist, album).

    Misses are cached too (as ""), so a track without artwork costs two
    requests once and nothing on every later tick.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        search_url: str = MUSICBRAINZ_SEARCH_URL,
        archive_url: str = COVER_ART_URL,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self._http = session or requests.Session()
        self.search_url = search_url
        self.archive_url = archive_url.rstrip("/")
        self.timeout = timeout
        self._cache: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._cache)

    def cached(self, track: Track) -> Optional[str]:
        return self._cache.get(cache_key(track.artist, track.album))

    def resolve(self, track: Track) -> str:
        key = cache_key(track.artist, track.album)
        if key in self._cache:
            return self._cache[key]

        url = ""
        if track.artist or track.album:
            try:
                release_id = self._search_release(track.artist, track.album)
                url = self._thumbnail_url(release_id)
            except MetadataLookupFailure as e:
                debug_log(f"artwork lookup failed for '{track.artist} - {track.album}': {e}")
                url = ""
            else:
                debug_log(f"artwork for '{track.artist} - {track.album}': {url}")

        self._cache[key] = url
        return url

    def _headers(self) -> dict:
        return {"User-Agent": USER_AGENT}

    def _get_json(self, url: str, params: Optional[dict] = None) -> dict:
        try:
            r = self._http.get(url, params=params, headers=self._headers(), timeout=self.timeout)
            r.raise_for_status()
            data = r.json()
        except requests.RequestException as e:
            raise MetadataLookupFailure(f"GET {url}: {e}") from e
        except ValueError as e:
            raise MetadataLookupFailure(f"GET {url}: invalid JSON") from e

        if not isinstance(data, dict):
            raise MetadataLookupFailure(f"GET {url}: expected a JSON object")
        return data

    def _search_release(self, artist: str, album: str) -> str:
        params = {
            "query": release_query(artist, album),
            "fmt": "json",
        }
        data = self._get_json(self.search_url, params=params)
        releases = data.get("releases") or []
        if not isinstance(releases, list) or not releases:
            raise MetadataLookupFailure("no releases found")

        # first match wins; MusicBrainz already orders by search score
        release_id = releases[0].get("id") if isinstance(releases[0], dict) else None
        if not release_id:
            raise MetadataLookupFailure("first release has no id")
        return str(release_id)

    def _thumbnail_url(self, release_id: str) -> str:
        data = self._get_json(f"{self.archive_url}/release/{release_id}/")
        images = data.get("images") or []
        if not isinstance(images, list) or not images or not isinstance(images[0], dict):
            raise MetadataLookupFailure(f"no images for release {release_id}")

        thumbnails = images[0].get("thumbnails") or {}
        url = thumbnails.get(THUMBNAIL_SIZE) if isinstance(thumbnails, dict) else None
        if not url or not isinstance(url, str):
            raise MetadataLookupFailure(f"no {THUMBNAIL_SIZE}px thumbnail for release {release_id}")
        return url
