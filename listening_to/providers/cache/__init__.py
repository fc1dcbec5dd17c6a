"""Cache providers.

TrackCache is a single-slot cache on top of ``cachetools.TTLCache``, scoped
to one plugin instance.  Nothing survives a process restart.
"""

from listening_to.providers.cache.memory_cache import TrackCache

__all__ = ["TrackCache"]
