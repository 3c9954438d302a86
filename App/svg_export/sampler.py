"""Pixel sampling: decode native pixel values into canonical RGBA.

AIDEV-NOTE: A decoder is resolved once per image buffer from its declared
PixelFormat. When the host supplies its own colour routine, that routine
is preferred per pixel as long as it returns four in-range channels;
otherwise the manual extraction for the declared format is used. Every
result is clamped to 0-255 before it leaves this module.
"""

import logging
from typing import Any, Iterator

from models import ColorDecoder, ImageBuffer, Palette, Pixel, PixelFormat

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)


def clamp_channel(value: Any) -> int:
    """Clamp a channel value into 0-255, mapping missing values to 0."""
    if value is None:
        return 0
    try:
        value = int(value)
    except (TypeError, ValueError):
        return 0
    return max(0, min(255, value))


def _decode_rgba(value: Any) -> "tuple[int, int, int, int]":
    if len(value) >= 4:
        return (value[0], value[1], value[2], value[3])
    r, g, b = value[:3]
    return (r, g, b, 255)


def _decode_grayscale(value: Any) -> "tuple[int, int, int, int]":
    if isinstance(value, (tuple, list)):
        level = value[0]
        alpha = value[1] if len(value) > 1 else 255
    else:
        level = value
        alpha = 255
    return (level, level, level, alpha)


def _decode_packed_abgr(value: int) -> "tuple[int, int, int, int]":
    return (
        value & 0xFF,
        (value >> 8) & 0xFF,
        (value >> 16) & 0xFF,
        (value >> 24) & 0xFF,
    )


def _decode_packed_argb(value: int) -> "tuple[int, int, int, int]":
    return (
        (value >> 16) & 0xFF,
        (value >> 8) & 0xFF,
        value & 0xFF,
        (value >> 24) & 0xFF,
    )


def _indexed_decoder(palette: "Palette | None") -> ColorDecoder:
    """Build a palette lookup decoder.

    The palette's transparent index (0 by convention) and indices outside
    the palette decode as fully transparent.
    """
    if palette is None:
        logger.warning("Indexed image has no palette; all pixels decode as transparent")
        palette = Palette()

    def decode(value: Any) -> "tuple[int, int, int, int]":
        index = int(value) & 0xFF
        if index == palette.transparent_index:
            return TRANSPARENT
        color = palette.get_color(index)
        if color is None:
            return TRANSPARENT
        return _decode_rgba(color)

    return decode


def _manual_decoder(
    pixel_format: PixelFormat, palette: "Palette | None"
) -> ColorDecoder:
    if pixel_format == PixelFormat.RGBA:
        return _decode_rgba
    if pixel_format == PixelFormat.GRAYSCALE:
        return _decode_grayscale
    if pixel_format == PixelFormat.INDEXED:
        return _indexed_decoder(palette)
    if pixel_format == PixelFormat.PACKED_ABGR:
        return _decode_packed_abgr
    if pixel_format == PixelFormat.PACKED_ARGB:
        return _decode_packed_argb
    raise ValueError(f"Unsupported pixel format: {pixel_format}")


def _is_valid_rgba(result: Any) -> bool:
    """Check that a host decoder result is four numbers within 0-255."""
    if not isinstance(result, (tuple, list)) or len(result) != 4:
        return False
    return all(
        isinstance(c, (int, float)) and not isinstance(c, bool) and 0 <= c <= 255
        for c in result
    )


def resolve_decoder(
    image: ImageBuffer,
    palette: "Palette | None" = None,
    host_decoder: "ColorDecoder | None" = None,
) -> ColorDecoder:
    """Resolve the colour decoder for one image buffer.

    Args:
        image: Buffer whose pixel_format selects the manual extraction
        palette: Palette used for INDEXED buffers
        host_decoder: Optional host colour routine, preferred when in range

    Returns:
        Function mapping a native pixel value to a clamped (r, g, b, a)
    """
    manual = _manual_decoder(image.pixel_format, palette)

    if host_decoder is None or image.pixel_format == PixelFormat.INDEXED:
        def decode(value: Any) -> "tuple[int, int, int, int]":
            r, g, b, a = manual(value)
            return (
                clamp_channel(r),
                clamp_channel(g),
                clamp_channel(b),
                clamp_channel(a),
            )

        return decode

    warned = False

    def decode_with_host(value: Any) -> "tuple[int, int, int, int]":
        nonlocal warned
        result = host_decoder(value)
        if _is_valid_rgba(result):
            r, g, b, a = result
        else:
            if not warned:
                logger.warning(
                    "Host colour decoder returned %r; using %s extraction",
                    result,
                    image.pixel_format.name,
                )
                warned = True
            r, g, b, a = manual(value)
        return (
            clamp_channel(r),
            clamp_channel(g),
            clamp_channel(b),
            clamp_channel(a),
        )

    return decode_with_host


def sample(
    image: ImageBuffer,
    x: int,
    y: int,
    decoder: "ColorDecoder | None" = None,
) -> "Pixel | None":
    """Read one pixel as canonical RGBA.

    Args:
        image: Image buffer
        x: X coordinate inside the buffer
        y: Y coordinate inside the buffer
        decoder: Decoder from resolve_decoder, resolved here when omitted

    Returns:
        Pixel, or None when (x, y) is outside the buffer
    """
    if image is None or not image.width or not image.height:
        return None
    if x < 0 or y < 0 or x >= image.width or y >= image.height:
        return None
    if decoder is None:
        decoder = resolve_decoder(image)

    r, g, b, a = decoder(image.get_pixel(x, y))
    return Pixel(x=x, y=y, r=r, g=g, b=b, a=a)


def iter_opaque_pixels(
    image: ImageBuffer, decoder: "ColorDecoder | None" = None
) -> Iterator[Pixel]:
    """Yield every pixel with non-zero alpha in row-major order."""
    if decoder is None:
        decoder = resolve_decoder(image)
    for y in range(image.height):
        for x in range(image.width):
            pixel = sample(image, x, y, decoder)
            if pixel is not None and pixel.a > 0:
                yield pixel
