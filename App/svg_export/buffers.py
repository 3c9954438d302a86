"""Image buffer adapters exposing host pixel data to the sampler.

AIDEV-NOTE: Each buffer declares its PixelFormat once at construction so
a single decoder can be resolved for the whole image.
"""

from typing import Any

import numpy as np
from PIL import Image

from models import PixelFormat

# Pillow modes kept in their native encoding; anything else becomes RGBA
_PILLOW_FORMATS = {
    "RGBA": PixelFormat.RGBA,
    "RGB": PixelFormat.RGBA,
    "P": PixelFormat.INDEXED,
    "L": PixelFormat.GRAYSCALE,
    "LA": PixelFormat.GRAYSCALE,
}


class PillowImageBuffer:
    """Image buffer backed by a PIL image."""

    def __init__(self, image: Image.Image):
        if image.mode not in _PILLOW_FORMATS:
            image = image.convert("RGBA")
        self.image = image
        self.width, self.height = image.size
        self.pixel_format = _PILLOW_FORMATS[image.mode]
        self._access = image.load()

    def get_pixel(self, x: int, y: int) -> Any:
        return self._access[x, y]

    def __repr__(self) -> str:
        return (
            f"PillowImageBuffer({self.image.mode} "
            f"{self.width}x{self.height})"
        )


class ArrayImageBuffer:
    """Image buffer backed by a numpy array.

    2D arrays hold one integer per pixel (packed colours, palette indices
    or gray levels). 3D arrays hold channels in the last axis.
    """

    def __init__(self, pixels: np.ndarray, pixel_format: PixelFormat):
        if pixels.ndim not in (2, 3):
            raise ValueError(
                f"Expected a 2D or 3D pixel array, got {pixels.ndim}D"
            )
        if pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError("Image buffer must be at least 1x1")
        if pixels.ndim == 3 and pixel_format not in (
            PixelFormat.RGBA,
            PixelFormat.GRAYSCALE,
        ):
            raise ValueError(
                f"{pixel_format.name} buffers store one value per pixel"
            )

        self.pixels = pixels
        self.height, self.width = pixels.shape[:2]
        self.pixel_format = pixel_format

    @classmethod
    def from_rows(
        cls,
        rows: "list[list[Any]]",
        pixel_format: PixelFormat = PixelFormat.PACKED_ABGR,
    ) -> "ArrayImageBuffer":
        """Build a buffer from nested row lists (row-major, y first)."""
        if pixel_format in (PixelFormat.PACKED_ABGR, PixelFormat.PACKED_ARGB):
            dtype = np.uint32
        elif pixel_format == PixelFormat.INDEXED:
            dtype = np.int32
        else:
            dtype = np.uint8
        return cls(np.array(rows, dtype=dtype), pixel_format)

    def get_pixel(self, x: int, y: int) -> Any:
        value = self.pixels[y, x]
        if self.pixels.ndim == 3:
            return tuple(int(c) for c in value)
        return int(value)

    def __repr__(self) -> str:
        return (
            f"ArrayImageBuffer({self.pixel_format.name} "
            f"{self.width}x{self.height})"
        )
