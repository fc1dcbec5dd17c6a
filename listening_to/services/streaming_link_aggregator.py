"""Streaming-link aggregation across direct and reference providers.

Resolution runs in two phases:

1. **Direct phase** — every enabled title/artist provider is queried
   concurrently and their link sets are merged, later-listed provider
   winning per platform.
2. **Escalation** — if the reference provider is enabled and the direct
   merge produced a Spotify, Apple Music or YouTube link (in that order of
   preference), that URL is cross-referenced once and the result is merged
   over the direct links.  Without a usable reference URL the escalation is
   skipped and the reference provider is never called.

Providers never raise (see ``IStreamingLinkProvider``), so nothing here
catches: a failing provider simply contributes an empty link set.
"""

from __future__ import annotations

import asyncio
from typing import Iterable, Mapping, Sequence

import structlog

from listening_to.interfaces.streaming_link_provider import (
    IDirectLinkProvider,
    IReferenceLinkProvider,
    IStreamingLinkProvider,
)
from listening_to.models.track import LinkSet, Platform, ProviderName, merge_link_sets
from listening_to.utils.errors import ProviderUnavailableError
from listening_to.utils.logging import get_logger

# Platforms whose links Odesli accepts as input, most reliable first.
REFERENCE_PRIORITY: tuple[Platform, ...] = (
    Platform.SPOTIFY,
    Platform.APPLE,
    Platform.YOUTUBE,
)


def select_reference_url(links: LinkSet) -> str | None:
    """Pick the URL to cross-reference: Spotify, else Apple Music, else YouTube."""
    for platform in REFERENCE_PRIORITY:
        url = links.get(platform)
        if url:
            return url
    return None


class StreamingLinkAggregator:
    """Resolve a track's streaming links from a registry of providers.

    Parameters
    ----------
    providers:
        The available providers.  Each is registered under its own
        ``get_provider_name()``; at most one reference provider may be
        registered.
    """

    def __init__(self, providers: Iterable[IStreamingLinkProvider]) -> None:
        self._direct: dict[ProviderName, IDirectLinkProvider] = {}
        self._reference: dict[ProviderName, IReferenceLinkProvider] = {}
        for provider in providers:
            if isinstance(provider, IDirectLinkProvider):
                self._direct[provider.get_provider_name()] = provider
            elif isinstance(provider, IReferenceLinkProvider):
                self._reference[provider.get_provider_name()] = provider
            else:
                raise TypeError(f"Unsupported provider type: {type(provider).__name__}")
        if len(self._reference) > 1:
            raise ValueError("At most one reference provider can be registered")
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def registered(self) -> Mapping[ProviderName, IStreamingLinkProvider]:
        return {**self._direct, **self._reference}

    async def resolve(
        self,
        title: str,
        artist: str,
        enabled_providers: Sequence[ProviderName],
    ) -> LinkSet:
        """Return the merged links for *title* by *artist*.

        Parameters
        ----------
        title, artist:
            Track metadata passed to every direct provider.
        enabled_providers:
            Providers to use, in precedence order: for a platform resolved
            by several direct providers, the one listed last wins.  The
            reference provider, when enabled, always wins over direct ones.

        Raises
        ------
        ProviderUnavailableError
            If an enabled provider has not been registered.
        """
        enabled = list(dict.fromkeys(enabled_providers))
        for name in enabled:
            if name not in self._direct and name not in self._reference:
                raise ProviderUnavailableError(
                    message="Provider is enabled but not registered",
                    provider_name=name.value,
                )

        direct = [self._direct[name] for name in enabled if name in self._direct]
        reference = next(
            (self._reference[name] for name in enabled if name in self._reference), None
        )

        # -- Direct phase: fan out, wait for everyone, merge in list order --
        direct_results: list[LinkSet] = []
        if direct:
            direct_results = list(
                await asyncio.gather(*(p.lookup(title, artist) for p in direct))
            )
        links = merge_link_sets(*direct_results)

        self._logger.debug(
            "direct_links_merged",
            providers=[p.get_provider_name().value for p in direct],
            platforms=sorted(p.value for p in links),
        )

        if reference is None:
            return links

        # -- Escalation: needs a URL from the direct phase --
        reference_url = select_reference_url(links)
        if reference_url is None:
            self._logger.info(
                "reference_lookup_skipped",
                provider=reference.get_provider_name().value,
                reason="no_reference_url",
            )
            return links

        reference_links = await reference.lookup(reference_url)
        merged = merge_link_sets(links, reference_links)

        self._logger.info(
            "streaming_links_resolved",
            reference_url=reference_url,
            platforms=sorted(p.value for p in merged),
        )
        return merged
