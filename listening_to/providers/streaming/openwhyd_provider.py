"""Openwhyd provider implementing IDirectLinkProvider.

Openwhyd is a community playlist site whose search API returns posts that
reference tracks on other platforms through an ``eId`` field, e.g.
``spotify:track:4uLU6hMCjMI75M1A2tKUQC`` or ``/yt/dQw4w9WgXcQ``.  Links are
recovered from those ids by prefix matching, first match per platform
wins.  Posts with unknown prefixes are ignored.
"""

from __future__ import annotations

from typing import Callable

import httpx
from pydantic import BaseModel

from listening_to.interfaces.streaming_link_provider import IDirectLinkProvider
from listening_to.models.track import AbsoluteUrl, LinkSet, Platform, ProviderName
from listening_to.utils.http import fetch_validated
from listening_to.utils.logging import get_logger

_SEARCH_URL = "https://openwhyd.org/search"


class _OpenwhydPost(BaseModel):
    id: str
    name: str
    eId: str
    img: str | None = None
    url: AbsoluteUrl | None = None


class _OpenwhydResults(BaseModel):
    posts: list[_OpenwhydPost]


class _OpenwhydResponse(BaseModel):
    results: _OpenwhydResults


# (prefix, platform, builder) -- checked in order for every post.
_EID_PATTERNS: tuple[tuple[str, Platform, Callable[[str], str]], ...] = (
    (
        "spotify:track:",
        Platform.SPOTIFY,
        lambda eid: f"https://open.spotify.com/track/{eid.split(':')[2]}",
    ),
    ("/yt/", Platform.YOUTUBE, lambda eid: f"https://www.youtube.com/watch?v={eid[4:]}"),
    ("/dz/", Platform.DEEZER, lambda eid: f"https://www.deezer.com/track/{eid[4:]}"),
    ("/sc/", Platform.SOUNDCLOUD, lambda eid: f"https://soundcloud.com/{eid[4:]}"),
    ("/bc/", Platform.BANDCAMP, lambda eid: f"https://bandcamp.com/{eid[4:]}"),
)


def links_from_eids(eids: list[str]) -> LinkSet:
    """Map Openwhyd ``eId`` values onto a LinkSet, first match per platform."""
    links: LinkSet = {}
    for eid in eids:
        for prefix, platform, build in _EID_PATTERNS:
            if platform in links or not eid.startswith(prefix):
                continue
            # Skip bare prefixes ("/yt/") that carry no id.
            if not eid[len(prefix):]:
                continue
            links[platform] = build(eid)
    return links


class OpenwhydLinkProvider(IDirectLinkProvider):
    """Search Openwhyd for "<artist> <title>" and mine the posts' ids."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client
        self._logger = get_logger(__name__)

    async def lookup(self, title: str, artist: str) -> LinkSet:
        params = {"q": f"{artist} {title}", "format": "json"}
        data = await fetch_validated(self._http, _SEARCH_URL, _OpenwhydResponse, params)
        if data is None or not data.results.posts:
            self._logger.info("openwhyd_no_results", title=title, artist=artist)
            return {}

        links = links_from_eids([post.eId for post in data.results.posts])
        self._logger.info(
            "openwhyd_lookup_complete",
            title=title,
            artist=artist,
            posts=len(data.results.posts),
            platforms=sorted(p.value for p in links),
        )
        return links

    def get_provider_name(self) -> ProviderName:
        return ProviderName.OPENWHYD
