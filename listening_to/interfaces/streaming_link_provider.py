"""Abstract base classes for streaming-link providers.

A streaming-link provider turns what we know about a track into a
``LinkSet``.  There are two variants, because the required input differs:

* :class:`IDirectLinkProvider` looks a track up by title and artist.
* :class:`IReferenceLinkProvider` cross-references one already-known URL
  for the same track on another platform.

Both share the same promise: return a best-effort ``LinkSet`` and never
raise for network, HTTP or schema failures -- those come back as an empty
(or partial) link set.  The aggregator relies on this and does not catch.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from listening_to.models.track import LinkSet, ProviderName


class IStreamingLinkProvider(ABC):
    """Behaviour common to both provider variants."""

    @abstractmethod
    def get_provider_name(self) -> ProviderName:
        """Return the identifier this provider is enabled under."""


class IDirectLinkProvider(IStreamingLinkProvider):
    """Contract for providers that search by track title and artist."""

    @abstractmethod
    async def lookup(self, title: str, artist: str) -> LinkSet:
        """Find links for the track *title* by *artist*.

        Parameters
        ----------
        title:
            Track title as reported by the now-playing source.
        artist:
            Artist name as reported by the now-playing source.

        Returns
        -------
        LinkSet
            Zero or more platform links.  Empty on failure.
        """


class IReferenceLinkProvider(IStreamingLinkProvider):
    """Contract for providers that cross-reference a known track URL."""

    @abstractmethod
    async def lookup(self, reference_url: str) -> LinkSet:
        """Find links for the track identified by *reference_url*.

        Parameters
        ----------
        reference_url:
            Absolute URL of the same track on a supported platform
            (Spotify, Apple Music or YouTube).

        Returns
        -------
        LinkSet
            Zero or more platform links.  Empty on failure.
        """
