"""Now-playing metadata sources."""

from listening_to.providers.metadata.lastfm_provider import (
    PLACEHOLDER_COVER_URL,
    LastFmNowPlayingProvider,
)

__all__ = ["LastFmNowPlayingProvider", "PLACEHOLDER_COVER_URL"]
