"""Image metadata extraction from raw bytes."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Optional, Protocol

from PIL import Image, UnidentifiedImageError

from contentwrap.errors import NotAnImageError

_MODE_BITS = {
    "1": 1,
    "I;16": 16,
    "I;16B": 16,
    "I;16L": 16,
    "I": 32,
    "F": 32,
}


@dataclass(frozen=True)
class ImageSize:
    """Dimensions and encoding details decoded from an image.

    Attributes:
        width: Width in pixels.
        height: Height in pixels.
        format: Decoder format name (``JPEG``, ``PNG``...).
        mime_type: MIME type the decoder associates with the format.
        channels: Number of colour bands (3 for RGB, 4 for CMYK/RGBA).
        bits: Bits per channel.
        dimensions: HTML attribute string, ``width="W" height="H"``.
    """

    width: int
    height: int
    format: Optional[str]
    mime_type: Optional[str]
    channels: int
    bits: int

    @property
    def dimensions(self) -> str:
        return f'width="{self.width}" height="{self.height}"'


class ImageMetadataReader(Protocol):
    """Decode image metadata from a byte buffer."""

    def read(self, data: bytes) -> ImageSize:
        """Return the size record for ``data``; raise NotAnImageError when undecodable."""

    def load(self, data: bytes) -> Image.Image:
        """Return a decoded image object for ``data``."""


class PillowImageReader:
    """Read image metadata with Pillow without decoding pixel data."""

    def read(self, data: bytes) -> ImageSize:
        try:
            with Image.open(io.BytesIO(data)) as img:
                width, height = img.size
                return ImageSize(
                    width=width,
                    height=height,
                    format=img.format,
                    mime_type=Image.MIME.get(img.format or ""),
                    channels=len(img.getbands()),
                    bits=_MODE_BITS.get(img.mode, 8),
                )
        except (UnidentifiedImageError, OSError) as exc:
            raise NotAnImageError(f"Content could not be decoded as an image: {exc}") from exc

    def load(self, data: bytes) -> Image.Image:
        """Return a fully loaded Pillow image."""
        try:
            img = Image.open(io.BytesIO(data))
            img.load()
        except (UnidentifiedImageError, OSError) as exc:
            raise NotAnImageError(f"Content could not be decoded as an image: {exc}") from exc
        return img


__all__ = ["ImageSize", "ImageMetadataReader", "PillowImageReader"]
