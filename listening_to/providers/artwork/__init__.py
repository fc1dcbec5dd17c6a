"""Cover-art providers."""

from listening_to.providers.artwork.thumbnail_provider import (
    CoverArtThumbnailer,
    bytes_to_data_uri,
)

__all__ = ["CoverArtThumbnailer", "bytes_to_data_uri"]
