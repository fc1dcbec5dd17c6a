"""Odesli (song.link) provider implementing IReferenceLinkProvider.

Odesli takes a URL of a track on any supported platform and returns the
same track on every platform it knows.  It is the most authoritative
source we have, so the aggregator queries it last and lets it override
the direct providers.
"""

from __future__ import annotations

import httpx
from pydantic import BaseModel

from listening_to.interfaces.streaming_link_provider import IReferenceLinkProvider
from listening_to.models.track import AbsoluteUrl, LinkSet, Platform, ProviderName
from listening_to.utils.http import fetch_validated
from listening_to.utils.logging import get_logger

_LINKS_URL = "https://api.song.link/v1-alpha.1/links"


class _OdesliLink(BaseModel):
    url: AbsoluteUrl
    entityUniqueId: str


class _OdesliEntity(BaseModel):
    id: str
    type: str
    title: str | None = None
    artistName: str | None = None
    thumbnailUrl: str | None = None
    apiProvider: str
    platforms: list[str]


class _OdesliResponse(BaseModel):
    entityUniqueId: str
    userCountry: str
    pageUrl: AbsoluteUrl
    linksByPlatform: dict[str, _OdesliLink] | None = None
    entitiesByUniqueId: dict[str, _OdesliEntity]


# Odesli platform key for each of our platforms.  Anything else Odesli
# returns (amazonMusic, pandora, napster, ...) is dropped.
_PLATFORM_KEYS: dict[Platform, str] = {
    Platform.SPOTIFY: "spotify",
    Platform.APPLE: "appleMusic",
    Platform.DEEZER: "deezer",
    Platform.YOUTUBE: "youtube",
    Platform.TIDAL: "tidal",
    Platform.SOUNDCLOUD: "soundcloud",
    Platform.BANDCAMP: "bandcamp",
}


class OdesliLinkProvider(IReferenceLinkProvider):
    """Cross-reference one known track URL through the song.link API."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client
        self._logger = get_logger(__name__)

    async def lookup(self, reference_url: str) -> LinkSet:
        data = await fetch_validated(
            self._http, _LINKS_URL, _OdesliResponse, {"url": reference_url}
        )
        if data is None or not data.linksByPlatform:
            self._logger.info("odesli_no_links", reference_url=reference_url)
            return {}

        links: LinkSet = {}
        for platform, odesli_key in _PLATFORM_KEYS.items():
            link = data.linksByPlatform.get(odesli_key)
            if link is not None:
                links[platform] = link.url

        self._logger.info(
            "odesli_lookup_complete",
            reference_url=reference_url,
            platforms=sorted(p.value for p in links),
        )
        return links

    def get_provider_name(self) -> ProviderName:
        return ProviderName.ODESLI
