"""Build-host integration for listening-to.

A build host (static-site generator, bundler hook, ...) owns one
``ListeningToPlugin`` per session and drives it through three hooks:

    build_start()    : start of a build cycle; drops the cached track
    resolve_id(id)   : claims the virtual module id
    load(id)         : returns the module source for the resolved id

The plugin owns the track cache.  A cache hit skips every network call; a
miss runs the whole pipeline and caches the result.  If the pipeline
raises, nothing is cached and the next ``load`` starts from scratch.
Concurrent misses are not coalesced: each runs its own resolution.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import structlog

from listening_to.config.settings import Settings
from listening_to.main import build_http_client, build_now_playing_service
from listening_to.models.options import PluginOptions, resolve_options
from listening_to.models.track import ResolvedTrack
from listening_to.providers.cache.memory_cache import TrackCache
from listening_to.services.now_playing_service import NowPlayingService
from listening_to.utils.logging import get_logger

PLUGIN_NAME = "listening-to"
VIRTUAL_MODULE_ID = "virtual:listening-to"
RESOLVED_ID = f"\0{VIRTUAL_MODULE_ID}"


def render_module(track: ResolvedTrack) -> str:
    """Render *track* as the source of the virtual module."""
    payload = json.dumps(track.to_json_dict(), ensure_ascii=False)
    return f"export const musicTrack = {payload};"


class ListeningToPlugin:
    """Session object exposing the build hooks.

    Parameters
    ----------
    options:
        Raw or validated plugin options.  Validated immediately: missing
        credentials raise ``ConfigurationError`` before any network I/O.
    settings:
        HTTP and thumbnail settings; read from the environment when omitted.
    http_client:
        Shared client.  Created (and owned) by the plugin when omitted.
    service:
        Pre-built resolution service, mostly for tests.
    timer:
        Millisecond clock for the cache, mostly for tests.
    """

    name = PLUGIN_NAME

    def __init__(
        self,
        options: PluginOptions | dict[str, Any],
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
        service: NowPlayingService | None = None,
        timer: Callable[[], float] | None = None,
    ) -> None:
        self._options = resolve_options(options)
        self._owns_client = http_client is None and service is None
        self._http = http_client
        if service is None:
            if self._http is None:
                self._http = build_http_client(settings)
            service = build_now_playing_service(self._options, self._http, settings)
        self._service = service
        self._cache: TrackCache[ResolvedTrack] = TrackCache(self._options.cache_ttl, timer=timer)
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def options(self) -> PluginOptions:
        return self._options

    @property
    def cache(self) -> TrackCache[ResolvedTrack]:
        return self._cache

    # ------------------------------------------------------------------
    # Build hooks
    # ------------------------------------------------------------------

    def build_start(self) -> None:
        """Invalidate the cached track at the start of each build cycle."""
        self._cache.clear()

    def resolve_id(self, module_id: str) -> str | None:
        if module_id == VIRTUAL_MODULE_ID:
            return RESOLVED_ID
        return None

    async def load(self, module_id: str) -> str | None:
        if module_id != RESOLVED_ID:
            return None
        track = await self.get_music_track()
        return render_module(track)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    async def get_music_track(self) -> ResolvedTrack:
        """Return the cached track, resolving and caching a fresh one on a miss."""
        track = self._cache.get()
        if track is not None:
            self._logger.info("using_cached_track", title=track.title)
            return track

        self._logger.info("fetching_fresh_track", user=self._options.user_id)
        track = await self._service.fetch_music_track()
        self._cache.set(track)
        self._logger.info("cached_track", title=track.title)
        return track

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        """Close the HTTP client if the plugin created it."""
        if self._owns_client and self._http is not None:
            await self._http.aclose()

    async def __aenter__(self) -> ListeningToPlugin:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
