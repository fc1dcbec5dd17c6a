"""Public interface definitions for all external collaborators.

Every external API in listening-to is reached through one of the abstract
base classes below.  Concrete adapters live in ``listening_to/providers/``
and are injected by the plugin or the CLI, so tests can swap in mocks
without touching business logic.

CONCRETE PROVIDER MAP:
    Interface                  →  Concrete implementations
    ─────────────────────────────────────────────────────────
    IDirectLinkProvider        →  MusicBrainzLinkProvider, OpenwhydLinkProvider
    IReferenceLinkProvider     →  OdesliLinkProvider
    INowPlayingProvider        →  LastFmNowPlayingProvider
    ICoverArtProvider          →  CoverArtThumbnailer
    ICacheProvider             →  TrackCache
"""

from listening_to.interfaces.cache_provider import ICacheProvider
from listening_to.interfaces.cover_art_provider import ICoverArtProvider
from listening_to.interfaces.now_playing_provider import INowPlayingProvider
from listening_to.interfaces.streaming_link_provider import (
    IDirectLinkProvider,
    IReferenceLinkProvider,
    IStreamingLinkProvider,
)

__all__ = [
    "ICacheProvider",
    "ICoverArtProvider",
    "IDirectLinkProvider",
    "INowPlayingProvider",
    "IReferenceLinkProvider",
    "IStreamingLinkProvider",
]
