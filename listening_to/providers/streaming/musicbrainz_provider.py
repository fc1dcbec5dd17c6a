"""MusicBrainz (ListenBrainz labs) provider implementing IDirectLinkProvider.

ListenBrainz runs MusicBrainz-backed "labs" endpoints that map a
(title, artist) pair onto Spotify and Apple Music track ids.  Each platform
has its own endpoint, so one lookup is a fixed fan-out of two concurrent
sub-queries.  If one of them fails the other's link is still returned.
"""

from __future__ import annotations

import asyncio

import httpx
from pydantic import BaseModel

from listening_to.interfaces.streaming_link_provider import IDirectLinkProvider
from listening_to.models.track import LinkSet, Platform, ProviderName
from listening_to.utils.http import fetch_validated
from listening_to.utils.logging import get_logger

_LABS_BASE_URL = "https://labs.api.listenbrainz.org"
_SPOTIFY_ENDPOINT = f"{_LABS_BASE_URL}/spotify-id-from-metadata/json"
_APPLE_ENDPOINT = f"{_LABS_BASE_URL}/apple-music-id-from-metadata/json"

_SPOTIFY_TRACK_URL = "https://open.spotify.com/track/{id}"
_APPLE_SONG_URL = "https://music.apple.com/us/song/{id}"


class _SpotifyIdMatch(BaseModel):
    spotify_track_ids: list[str] | None = None


class _AppleIdMatch(BaseModel):
    apple_music_track_ids: list[str] | None = None


class MusicBrainzLinkProvider(IDirectLinkProvider):
    """Resolve Spotify and Apple Music links from track metadata.

    No API key required.  The ``httpx.AsyncClient`` is injected for
    testability.
    """

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client
        self._logger = get_logger(__name__)

    async def lookup(self, title: str, artist: str) -> LinkSet:
        params = {"title": title, "artist": artist}

        spotify_matches, apple_matches = await asyncio.gather(
            fetch_validated(self._http, _SPOTIFY_ENDPOINT, list[_SpotifyIdMatch], params),
            fetch_validated(self._http, _APPLE_ENDPOINT, list[_AppleIdMatch], params),
        )

        spotify_id = _first_id(spotify_matches[0].spotify_track_ids if spotify_matches else None)
        apple_id = _first_id(apple_matches[0].apple_music_track_ids if apple_matches else None)

        links: LinkSet = {}
        if spotify_id:
            links[Platform.SPOTIFY] = _SPOTIFY_TRACK_URL.format(id=spotify_id)
        if apple_id:
            links[Platform.APPLE] = _APPLE_SONG_URL.format(id=apple_id)

        self._logger.info(
            "musicbrainz_lookup_complete",
            title=title,
            artist=artist,
            platforms=sorted(p.value for p in links),
        )
        return links

    def get_provider_name(self) -> ProviderName:
        return ProviderName.MUSICBRAINZ


def _first_id(ids: list[str] | None) -> str | None:
    if not ids:
        return None
    return ids[0] or None
