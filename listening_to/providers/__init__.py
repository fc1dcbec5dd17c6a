"""Concrete adapters for the interfaces in ``listening_to.interfaces``.

    artwork/    — CoverArtThumbnailer (Pillow)
    cache/      — TrackCache (cachetools)
    metadata/   — LastFmNowPlayingProvider
    streaming/  — MusicBrainz, Openwhyd and Odesli link providers
"""
