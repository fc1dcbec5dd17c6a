"""Abstract base class for the "now playing" metadata source."""

from __future__ import annotations

from abc import ABC, abstractmethod

from listening_to.models.track import Track


class INowPlayingProvider(ABC):
    """Contract for services that report a user's most recent track."""

    @abstractmethod
    async def get_last_track(self) -> Track:
        """Return the most recently played track.

        Returns
        -------
        Track
            The latest track, or :meth:`Track.empty` when there is no
            playback history or the upstream call failed.

        Raises
        ------
        listening_to.utils.errors.MetadataSourceError
            Only for unexpected upstream faults; these are not absorbed by
            the resolution pipeline.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"lastfm"``."""
