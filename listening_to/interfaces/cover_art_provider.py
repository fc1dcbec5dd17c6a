"""Abstract base class for cover-art transformers."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ICoverArtProvider(ABC):
    """Contract for turning a cover-art URL into an inline representation."""

    @abstractmethod
    async def to_data_uri(self, image_url: str | None) -> str | None:
        """Return a ``data:`` URI for *image_url*.

        ``None`` in gives ``None`` out.  Any failure while downloading or
        transforming the image also gives ``None``; implementations never
        raise.
        """
