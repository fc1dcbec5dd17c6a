"""Cover-art thumbnailer implementing ICoverArtProvider.

Downloads the cover image, crops/resizes it to a small square, re-encodes
it as WebP and inlines it as a ``data:`` URI so the build output carries
no external image reference.  Best-effort: any failure yields ``None``.
"""

from __future__ import annotations

import asyncio
import base64
import io

import httpx
from PIL import Image, ImageOps, UnidentifiedImageError

from listening_to.interfaces.cover_art_provider import ICoverArtProvider
from listening_to.utils.logging import get_logger

DEFAULT_IMAGE_SIZE = 50


def bytes_to_data_uri(data: bytes, content_type: str) -> str:
    """Encode *data* as a base64 ``data:`` URI of *content_type*."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


def _resize_to_webp(data: bytes, size: int) -> bytes:
    with Image.open(io.BytesIO(data)) as img:
        img = img.convert("RGBA") if img.mode in ("P", "LA") else img
        if img.mode not in ("RGB", "RGBA"):
            img = img.convert("RGB")
        # "cover" fit: scale to fill the square, centre-crop the overflow.
        thumb = ImageOps.fit(img, (size, size), method=Image.Resampling.LANCZOS)
        buffer = io.BytesIO()
        thumb.save(buffer, format="WEBP")
        return buffer.getvalue()


class CoverArtThumbnailer(ICoverArtProvider):
    """Turn a cover-art URL into a small inline WebP thumbnail.

    Pillow work runs in a worker thread so it does not block the event loop
    while the streaming-link lookups are in flight.
    """

    def __init__(self, http_client: httpx.AsyncClient, size: int = DEFAULT_IMAGE_SIZE) -> None:
        self._http = http_client
        self._size = size
        self._logger = get_logger(__name__)

    async def to_data_uri(self, image_url: str | None) -> str | None:
        if not image_url:
            return None

        try:
            response = await self._http.get(image_url)
            response.raise_for_status()
            resized = await asyncio.to_thread(_resize_to_webp, response.content, self._size)
        except (
            httpx.HTTPError,
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            ValueError,
        ) as exc:
            self._logger.warning(
                "cover_thumbnail_failed", image_url=image_url, error=str(exc)
            )
            return None

        return bytes_to_data_uri(resized, "image/webp")
