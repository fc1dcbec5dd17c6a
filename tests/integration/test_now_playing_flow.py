"""End-to-end flow: Last.fm -> direct providers -> Odesli -> cached module.

Every component is real; only the network is replaced by an in-process
``httpx.MockTransport`` router.
"""

from __future__ import annotations

import io
import json

import httpx
import pytest
from PIL import Image

from listening_to.config.settings import Settings
from listening_to.main import build_now_playing_service
from listening_to.models.options import resolve_options
from listening_to.models.track import Platform, ProviderName
from listening_to.plugin import RESOLVED_ID, ListeningToPlugin
from listening_to.providers.metadata.lastfm_provider import PLACEHOLDER_COVER_URL

_LASTFM = "ws.audioscrobbler.com/2.0/"
_LB_SPOTIFY = "labs.api.listenbrainz.org/spotify-id-from-metadata/json"
_LB_APPLE = "labs.api.listenbrainz.org/apple-music-id-from-metadata/json"
_OPENWHYD = "openwhyd.org/search"
_ODESLI = "api.song.link/v1-alpha.1/links"
_COVER = "lastfm.freetls.fastly.net/i/u/34s/real-cover.png"

_SPOTIFY_URL = "https://open.spotify.com/track/s1"
_APPLE_URL = "https://music.apple.com/us/song/a1"


def _lastfm_payload(cover: str) -> dict:
    return {
        "recenttracks": {
            "track": [
                {
                    "mbid": "",
                    "name": "Song",
                    "artist": {"mbid": "", "#text": "Artist"},
                    "album": {"mbid": "", "#text": "Album"},
                    "image": [{"size": "small", "#text": cover}],
                }
            ]
        }
    }


def _odesli_payload() -> dict:
    return {
        "entityUniqueId": "SPOTIFY_SONG::s1",
        "userCountry": "US",
        "pageUrl": "https://song.link/s/s1",
        "linksByPlatform": {
            "spotify": {"url": _SPOTIFY_URL, "entityUniqueId": "SPOTIFY_SONG::s1"},
            "appleMusic": {"url": _APPLE_URL, "entityUniqueId": "ITUNES_SONG::a1"},
        },
        "entitiesByUniqueId": {
            "SPOTIFY_SONG::s1": {
                "id": "s1",
                "type": "song",
                "apiProvider": "spotify",
                "platforms": ["spotify"],
            }
        },
    }


def _png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (300, 300), color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def upstream(router):
    """Router answering every upstream the way a healthy network would."""
    router.routes[_LASTFM] = lambda r: httpx.Response(
        200, json=_lastfm_payload(PLACEHOLDER_COVER_URL)
    )
    router.routes[_LB_SPOTIFY] = lambda r: httpx.Response(
        200, json=[{"spotify_track_ids": ["s1"]}]
    )
    router.routes[_LB_APPLE] = lambda r: httpx.Response(200, json=[])
    router.routes[_OPENWHYD] = lambda r: httpx.Response(200, json={"results": {"posts": []}})
    router.routes[_ODESLI] = lambda r: httpx.Response(200, json=_odesli_payload())
    return router


def _service(client: httpx.AsyncClient, providers: list[ProviderName]):
    options = resolve_options({"api_key": "key", "user_id": "user", "providers": providers})
    return build_now_playing_service(options, client, Settings(thumbnail_size=50))


class TestNowPlayingFlow:
    @pytest.mark.asyncio
    async def test_direct_result_escalates_to_reference(self, client_for, upstream) -> None:
        async with client_for(upstream) as client:
            service = _service(client, [ProviderName.MUSICBRAINZ, ProviderName.ODESLI])
            track = await service.fetch_music_track()

        assert track.title == "Song"
        assert track.artist == "Artist"
        assert track.album == "Album"
        assert track.album_cover is None
        assert track.services == {Platform.SPOTIFY: _SPOTIFY_URL, Platform.APPLE: _APPLE_URL}

        odesli_calls = upstream.calls_to(_ODESLI)
        assert len(odesli_calls) == 1
        assert odesli_calls[0].url.params["url"] == _SPOTIFY_URL
        # Placeholder cover is never downloaded.
        assert not [r for r in upstream.requests if "fastly" in r.url.host]
        # Openwhyd is not enabled.
        assert upstream.calls_to(_OPENWHYD) == []

    @pytest.mark.asyncio
    async def test_no_direct_links_skips_reference(self, client_for, upstream) -> None:
        upstream.routes[_LB_SPOTIFY] = lambda r: httpx.Response(200, json=[])

        async with client_for(upstream) as client:
            service = _service(client, [ProviderName.MUSICBRAINZ, ProviderName.ODESLI])
            track = await service.fetch_music_track()

        assert track.services == {}
        assert upstream.calls_to(_ODESLI) == []

    @pytest.mark.asyncio
    async def test_reference_failure_keeps_direct_links(self, client_for, upstream) -> None:
        upstream.routes[_ODESLI] = lambda r: httpx.Response(429, json={"code": "too_many"})

        async with client_for(upstream) as client:
            service = _service(client, [ProviderName.MUSICBRAINZ, ProviderName.ODESLI])
            track = await service.fetch_music_track()

        assert track.services == {Platform.SPOTIFY: _SPOTIFY_URL}

    @pytest.mark.asyncio
    async def test_real_cover_is_inlined_as_webp(self, client_for, upstream) -> None:
        cover_url = f"https://{_COVER}"
        upstream.routes[_LASTFM] = lambda r: httpx.Response(200, json=_lastfm_payload(cover_url))
        upstream.routes[_COVER] = lambda r: httpx.Response(
            200, content=_png_bytes(), headers={"Content-Type": "image/png"}
        )

        async with client_for(upstream) as client:
            service = _service(client, [ProviderName.MUSICBRAINZ])
            track = await service.fetch_music_track()

        assert track.album_cover is not None
        assert track.album_cover.startswith("data:image/webp;base64,")

    @pytest.mark.asyncio
    async def test_lastfm_down_yields_empty_track(self, client_for, upstream) -> None:
        upstream.routes[_LASTFM] = lambda r: httpx.Response(503, text="unavailable")

        async with client_for(upstream) as client:
            service = _service(client, [ProviderName.OPENWHYD])
            track = await service.fetch_music_track()

        assert (track.title, track.artist, track.album) == ("", "", "")
        assert track.album_cover is None
        assert track.services == {}


class TestPluginFlow:
    @pytest.mark.asyncio
    async def test_module_is_served_from_cache_until_next_build(
        self, client_for, upstream, clock
    ) -> None:
        client = client_for(upstream)
        plugin = ListeningToPlugin(
            {
                "api_key": "key",
                "user_id": "user",
                "providers": ["musicbrainz", "odesli"],
                "cache_ttl": 60_000,
            },
            http_client=client,
            timer=clock,
        )

        first = await plugin.load(RESOLVED_ID)
        second = await plugin.load(RESOLVED_ID)
        assert first == second
        assert len(upstream.calls_to(_LASTFM)) == 1

        payload = json.loads(first[len("export const musicTrack = "):-1])
        assert payload["services"] == {"spotify": _SPOTIFY_URL, "apple": _APPLE_URL}
        assert payload["albumCover"] is None

        plugin.build_start()
        await plugin.load(RESOLVED_ID)
        assert len(upstream.calls_to(_LASTFM)) == 2

        await plugin.aclose()
        assert not client.is_closed
        await client.aclose()
