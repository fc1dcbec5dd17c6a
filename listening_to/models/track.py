"""Core domain models: platforms, link sets and tracks.

Key relationships:
    - A LastFm ``Track`` is what the now-playing source returns.
    - Streaming-link providers turn (title, artist) or a reference URL into a
      ``LinkSet``.
    - ``ResolvedTrack`` is the record handed to the build: track metadata,
      the merged ``LinkSet`` and an inline cover thumbnail.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Dict
from urllib.parse import urlsplit

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


class Platform(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    """Streaming platforms a LinkSet may hold a URL for.

    Closed set: providers drop any platform they cannot map onto one of
    these keys.
    """

    SPOTIFY = "spotify"
    APPLE = "apple"
    DEEZER = "deezer"
    YOUTUBE = "youtube"
    TIDAL = "tidal"
    SOUNDCLOUD = "soundcloud"
    BANDCAMP = "bandcamp"


class ProviderName(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    """Streaming-link providers that can be enabled, in any order.

    MUSICBRAINZ and OPENWHYD look tracks up by title/artist.  ODESLI is the
    cross-reference provider: it takes one already-known URL.
    """

    MUSICBRAINZ = "musicbrainz"
    OPENWHYD = "openwhyd"
    ODESLI = "odesli"


# Absent key means "unknown", never "confirmed missing".  Values are always
# absolute URLs.
LinkSet = Dict[Platform, str]


def is_absolute_url(value: str) -> bool:
    """Return ``True`` if *value* has both a scheme and a network location."""
    parts = urlsplit(value)
    return bool(parts.scheme) and bool(parts.netloc)


def _require_absolute_url(value: str) -> str:
    if not is_absolute_url(value):
        raise ValueError(f"not an absolute URL: {value!r}")
    return value


# String field that only validates when it holds an absolute URL.
AbsoluteUrl = Annotated[str, AfterValidator(_require_absolute_url)]


def merge_link_sets(*sources: LinkSet) -> LinkSet:
    """Merge link sets left to right; later sources win per platform key."""
    merged: LinkSet = {}
    for source in sources:
        merged.update(source)
    return merged


class Track(BaseModel):
    """The most recent track reported by the now-playing source.

    Empty strings are the "unknown" sentinel; they are never ``None``.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    artist: str = ""
    album: str = ""
    # Opaque catalogue id (MusicBrainz id from Last.fm), diagnostics only.
    mbid: str = ""
    # Source URL of the cover art, before thumbnailing.
    album_cover: str | None = None

    @classmethod
    def empty(cls) -> Track:
        """Return the empty-track sentinel (no history or upstream failure)."""
        return cls()

    @property
    def is_empty(self) -> bool:
        return not (self.title or self.artist or self.album)


class ResolvedTrack(BaseModel):
    """Track metadata plus streaming links plus an inline cover thumbnail.

    Serialised with ``by_alias=True`` the cover key is ``albumCover`` and the
    link set is keyed by platform value, matching what front-end consumers
    of the injected module expect.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    artist: str
    album: str
    # ``data:`` URI produced by the thumbnailer, or None.
    album_cover: str | None = Field(default=None, alias="albumCover")
    services: LinkSet = Field(default_factory=dict)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
