"""Composition root: wires providers, services and the cache together.

Everything is built here and injected downwards, so tests can replace any
collaborator with a mock.  Nothing in this module performs network I/O;
the ``httpx.AsyncClient`` only connects when a provider first uses it.
"""

from __future__ import annotations

from typing import Sequence

import httpx

from listening_to.config.settings import Settings
from listening_to.interfaces.streaming_link_provider import IStreamingLinkProvider
from listening_to.models.options import DEFAULT_PROVIDERS, PluginOptions, resolve_options
from listening_to.models.track import ProviderName, ResolvedTrack
from listening_to.providers.artwork.thumbnail_provider import CoverArtThumbnailer
from listening_to.providers.metadata.lastfm_provider import LastFmNowPlayingProvider
from listening_to.providers.streaming.musicbrainz_provider import MusicBrainzLinkProvider
from listening_to.providers.streaming.odesli_provider import OdesliLinkProvider
from listening_to.providers.streaming.openwhyd_provider import OpenwhydLinkProvider
from listening_to.services.now_playing_service import NowPlayingService
from listening_to.services.streaming_link_aggregator import StreamingLinkAggregator


def build_http_client(settings: Settings | None = None) -> httpx.AsyncClient:
    """Create the shared async HTTP client used by every provider."""
    settings = settings or Settings()
    return httpx.AsyncClient(
        timeout=settings.http_timeout,
        headers={"User-Agent": settings.http_user_agent},
        follow_redirects=True,
    )


def build_link_providers(http_client: httpx.AsyncClient) -> list[IStreamingLinkProvider]:
    """Instantiate one provider per ``ProviderName``."""
    return [
        MusicBrainzLinkProvider(http_client),
        OpenwhydLinkProvider(http_client),
        OdesliLinkProvider(http_client),
    ]


def build_now_playing_service(
    options: PluginOptions,
    http_client: httpx.AsyncClient,
    settings: Settings | None = None,
) -> NowPlayingService:
    """Assemble the full resolution pipeline for *options*."""
    settings = settings or Settings()
    return NowPlayingService(
        now_playing=LastFmNowPlayingProvider(http_client, options.api_key, options.user_id),
        aggregator=StreamingLinkAggregator(build_link_providers(http_client)),
        cover_art=CoverArtThumbnailer(http_client, size=settings.thumbnail_size),
        providers=options.providers,
    )


async def fetch_music_track(
    api_key: str,
    user_id: str,
    providers: Sequence[ProviderName] = DEFAULT_PROVIDERS,
    settings: Settings | None = None,
) -> ResolvedTrack:
    """One-shot resolution without a cache, for scripts.

    Raises
    ------
    ConfigurationError
        If *api_key* or *user_id* is empty.
    """
    options = resolve_options(
        {"api_key": api_key, "user_id": user_id, "providers": tuple(providers)}
    )
    async with build_http_client(settings) as client:
        service = build_now_playing_service(options, client, settings)
        return await service.fetch_music_track()
