"""listening-to: resolve the last scrobbled track into metadata plus
streaming links, for injection into a static build.

    from listening_to import ListeningToPlugin

    plugin = ListeningToPlugin({"api_key": "...", "user_id": "..."})
    plugin.build_start()
    source = await plugin.load(plugin.resolve_id("virtual:listening-to"))
"""

from listening_to.main import fetch_music_track
from listening_to.models.options import PluginOptions
from listening_to.models.track import Platform, ProviderName, ResolvedTrack, Track
from listening_to.plugin import RESOLVED_ID, VIRTUAL_MODULE_ID, ListeningToPlugin

__version__ = "0.1.0"

__all__ = [
    "ListeningToPlugin",
    "Platform",
    "PluginOptions",
    "ProviderName",
    "RESOLVED_ID",
    "ResolvedTrack",
    "Track",
    "VIRTUAL_MODULE_ID",
    "fetch_music_track",
]
