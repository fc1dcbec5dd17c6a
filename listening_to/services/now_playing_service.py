"""Build the ``ResolvedTrack`` for the user's most recent scrobble.

Steps:
    1. Ask the now-playing source for the latest track.  Errors raised here
       are *not* caught: they propagate to the caller so a failed attempt
       is never cached.
    2. Resolve streaming links and the cover thumbnail concurrently.
    3. Assemble the ``ResolvedTrack``.
"""

from __future__ import annotations

import asyncio
from typing import Sequence

import structlog

from listening_to.interfaces.cover_art_provider import ICoverArtProvider
from listening_to.interfaces.now_playing_provider import INowPlayingProvider
from listening_to.models.track import ProviderName, ResolvedTrack
from listening_to.services.streaming_link_aggregator import StreamingLinkAggregator
from listening_to.utils.logging import get_logger


class NowPlayingService:
    """Combine metadata, streaming links and cover art into one record."""

    def __init__(
        self,
        now_playing: INowPlayingProvider,
        aggregator: StreamingLinkAggregator,
        cover_art: ICoverArtProvider,
        providers: Sequence[ProviderName],
    ) -> None:
        self._now_playing = now_playing
        self._aggregator = aggregator
        self._cover_art = cover_art
        self._providers = tuple(providers)
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def providers(self) -> tuple[ProviderName, ...]:
        return self._providers

    async def fetch_music_track(self) -> ResolvedTrack:
        track = await self._now_playing.get_last_track()
        if track.is_empty:
            # Still resolved: providers answer an empty query with no links.
            self._logger.info(
                "now_playing_empty", source=self._now_playing.get_provider_name()
            )

        services, album_cover = await asyncio.gather(
            self._aggregator.resolve(track.title, track.artist, self._providers),
            self._cover_art.to_data_uri(track.album_cover),
        )

        resolved = ResolvedTrack(
            title=track.title,
            artist=track.artist,
            album=track.album,
            album_cover=album_cover or None,
            services=services,
        )
        self._logger.info(
            "music_track_resolved",
            title=resolved.title,
            mbid=track.mbid or None,
            platforms=sorted(p.value for p in resolved.services),
            has_cover=resolved.album_cover is not None,
        )
        return resolved
