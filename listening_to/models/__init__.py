"""listening-to domain models.

    - track.py   — Platform/ProviderName enums, LinkSet, Track, ResolvedTrack
    - options.py — PluginOptions and their validation
"""

from __future__ import annotations

from listening_to.models.options import (
    DEFAULT_CACHE_TTL_MS,
    DEFAULT_PROVIDERS,
    PluginOptions,
    resolve_options,
)
from listening_to.models.track import (
    AbsoluteUrl,
    LinkSet,
    Platform,
    ProviderName,
    ResolvedTrack,
    Track,
    is_absolute_url,
    merge_link_sets,
)

__all__ = [
    "AbsoluteUrl",
    "DEFAULT_CACHE_TTL_MS",
    "DEFAULT_PROVIDERS",
    "LinkSet",
    "Platform",
    "PluginOptions",
    "ProviderName",
    "ResolvedTrack",
    "Track",
    "is_absolute_url",
    "merge_link_sets",
    "resolve_options",
]
