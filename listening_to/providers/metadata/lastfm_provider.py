"""Last.fm provider implementing INowPlayingProvider.

Calls ``user.getrecenttracks`` and returns the first (most recent) entry.
Anything short of a valid, non-empty response yields the empty-track
sentinel instead of an error, so a build never fails because a user has
no scrobbles yet.
"""

from __future__ import annotations

import httpx
from pydantic import BaseModel, Field

from listening_to.interfaces.now_playing_provider import INowPlayingProvider
from listening_to.models.track import Track
from listening_to.utils.http import fetch_validated
from listening_to.utils.logging import get_logger

_API_URL = "https://ws.audioscrobbler.com/2.0/"

# Last.fm serves this grey star image when a track has no artwork.
PLACEHOLDER_COVER_URL = (
    "https://lastfm.freetls.fastly.net/i/u/34s/2a96cbd8b46e442fc41c2b86b821562f.png"
)


class _TextField(BaseModel):
    text: str = Field(alias="#text")


class _LastFmImage(BaseModel):
    size: str
    text: str = Field(alias="#text")


class _LastFmTrack(BaseModel):
    mbid: str
    name: str
    artist: _TextField
    image: list[_LastFmImage]
    album: _TextField


class _RecentTracks(BaseModel):
    track: list[_LastFmTrack]


class _RecentTracksResponse(BaseModel):
    recenttracks: _RecentTracks


class LastFmNowPlayingProvider(INowPlayingProvider):
    """Most recent scrobble of one Last.fm user.

    Parameters
    ----------
    http_client:
        Shared async HTTP client.
    api_key:
        Last.fm API key.
    user:
        Last.fm username.
    """

    def __init__(self, http_client: httpx.AsyncClient, api_key: str, user: str) -> None:
        self._http = http_client
        self._api_key = api_key
        self._user = user
        self._logger = get_logger(__name__)

    async def get_last_track(self) -> Track:
        params = {
            "method": "user.getrecenttracks",
            "user": self._user,
            "api_key": self._api_key,
            "format": "json",
        }
        response = await fetch_validated(self._http, _API_URL, _RecentTracksResponse, params)

        if response is None or not response.recenttracks.track:
            self._logger.info("lastfm_no_recent_track", user=self._user)
            return Track.empty()

        last = response.recenttracks.track[0]
        # The smallest image is enough: the cover is thumbnailed to 50px anyway.
        cover = last.image[0].text if last.image else None
        if not cover or cover == PLACEHOLDER_COVER_URL:
            cover = None

        track = Track(
            title=last.name,
            artist=last.artist.text,
            album=last.album.text,
            mbid=last.mbid,
            album_cover=cover,
        )
        self._logger.info(
            "lastfm_recent_track",
            user=self._user,
            title=track.title,
            artist=track.artist,
            mbid=track.mbid or None,
        )
        return track

    def get_provider_name(self) -> str:
        return "lastfm"
