"""Streaming-link providers.

Direct providers (title/artist):
    - MusicBrainzLinkProvider — ListenBrainz labs id lookups (Spotify, Apple Music)
    - OpenwhydLinkProvider    — Openwhyd search, eId pattern matching

Reference provider (one known URL):
    - OdesliLinkProvider      — song.link cross-reference
"""

from listening_to.providers.streaming.musicbrainz_provider import MusicBrainzLinkProvider
from listening_to.providers.streaming.odesli_provider import OdesliLinkProvider
from listening_to.providers.streaming.openwhyd_provider import OpenwhydLinkProvider

__all__ = [
    "MusicBrainzLinkProvider",
    "OdesliLinkProvider",
    "OpenwhydLinkProvider",
]
