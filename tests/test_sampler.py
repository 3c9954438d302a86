import numpy as np
import pytest

from models import Palette, PixelFormat
from svg_export.buffers import ArrayImageBuffer
from svg_export.sampler import (
    clamp_channel,
    iter_opaque_pixels,
    resolve_decoder,
    sample,
)

from conftest import CLEAR, RED, rgba_buffer


def test_sample_outside_buffer_returns_none():
    image = rgba_buffer([[RED, RED]])
    assert sample(image, -1, 0) is None
    assert sample(image, 2, 0) is None
    assert sample(image, 0, 1) is None


def test_sample_rgba():
    image = rgba_buffer([[CLEAR, (10, 20, 30, 40)]])
    pixel = sample(image, 1, 0)
    assert (pixel.x, pixel.y) == (1, 0)
    assert pixel.rgba == (10, 20, 30, 40)


def test_packed_abgr_puts_red_in_low_byte():
    image = ArrayImageBuffer.from_rows([[0x80FF0000 | 0x000000FF]])
    # alpha 0x80, blue 0xFF, red 0xFF
    assert sample(image, 0, 0).rgba == (0xFF, 0, 0xFF, 0x80)

    image = ArrayImageBuffer.from_rows([[0xFF000011]])
    assert sample(image, 0, 0).rgba == (0x11, 0, 0, 0xFF)


def test_packed_argb():
    image = ArrayImageBuffer.from_rows([[0xFF112233]], PixelFormat.PACKED_ARGB)
    assert sample(image, 0, 0).rgba == (0x11, 0x22, 0x33, 0xFF)


def test_grayscale_with_and_without_alpha():
    flat = ArrayImageBuffer.from_rows([[7]], PixelFormat.GRAYSCALE)
    assert sample(flat, 0, 0).rgba == (7, 7, 7, 255)

    with_alpha = ArrayImageBuffer(
        np.array([[[9, 100]]], dtype=np.uint8), PixelFormat.GRAYSCALE
    )
    assert sample(with_alpha, 0, 0).rgba == (9, 9, 9, 100)


def test_indexed_uses_palette_and_index_zero_is_transparent():
    palette = Palette(colors=[(1, 2, 3, 255), (255, 0, 0, 255), (0, 255, 0, 128)])
    image = ArrayImageBuffer.from_rows([[0, 1, 2, 9]], PixelFormat.INDEXED)
    decoder = resolve_decoder(image, palette)

    assert sample(image, 0, 0, decoder).rgba == (0, 0, 0, 0)
    assert sample(image, 1, 0, decoder).rgba == (255, 0, 0, 255)
    assert sample(image, 2, 0, decoder).rgba == (0, 255, 0, 128)
    # out of palette range
    assert sample(image, 3, 0, decoder).rgba == (0, 0, 0, 0)


def test_indexed_custom_transparent_index():
    palette = Palette(colors=[(1, 2, 3, 255), (4, 5, 6, 255)], transparent_index=1)
    image = ArrayImageBuffer.from_rows([[0, 1]], PixelFormat.INDEXED)
    decoder = resolve_decoder(image, palette)
    assert sample(image, 0, 0, decoder).rgba == (1, 2, 3, 255)
    assert sample(image, 1, 0, decoder).a == 0


def test_indexed_without_palette_is_transparent(caplog):
    image = ArrayImageBuffer.from_rows([[3]], PixelFormat.INDEXED)
    with caplog.at_level("WARNING"):
        decoder = resolve_decoder(image)
    assert sample(image, 0, 0, decoder).rgba == (0, 0, 0, 0)
    assert "no palette" in caplog.text


def test_host_decoder_preferred_when_in_range():
    image = ArrayImageBuffer.from_rows([[0xFF0000FF]])
    decoder = resolve_decoder(image, host_decoder=lambda value: (1, 2, 3, 4))
    assert sample(image, 0, 0, decoder).rgba == (1, 2, 3, 4)


def test_host_decoder_out_of_range_falls_back_to_manual(caplog):
    image = ArrayImageBuffer.from_rows([[0xFF0000FF, 0xFF00FF00]])
    decoder = resolve_decoder(image, host_decoder=lambda value: (300, -1, 0, 255))

    with caplog.at_level("WARNING"):
        first = sample(image, 0, 0, decoder)
        second = sample(image, 1, 0, decoder)

    assert first.rgba == (255, 0, 0, 255)
    assert second.rgba == (0, 255, 0, 255)
    # reported once per buffer, not per pixel
    assert caplog.text.count("Host colour decoder") == 1


def test_host_decoder_with_missing_channels_falls_back():
    image = ArrayImageBuffer.from_rows([[0xFF0000FF]])
    decoder = resolve_decoder(image, host_decoder=lambda value: (None, 0, 0, 255))
    assert sample(image, 0, 0, decoder).rgba == (255, 0, 0, 255)


def test_host_decoder_ignored_for_indexed_images():
    palette = Palette(colors=[(0, 0, 0, 0), (9, 9, 9, 255)])
    image = ArrayImageBuffer.from_rows([[1]], PixelFormat.INDEXED)
    decoder = resolve_decoder(image, palette, host_decoder=lambda value: (1, 1, 1, 1))
    assert sample(image, 0, 0, decoder).rgba == (9, 9, 9, 255)


@pytest.mark.parametrize(
    "value, expected",
    [(None, 0), ("x", 0), (-5, 0), (0, 0), (128, 128), (255, 255), (999, 255), (12.7, 12)],
)
def test_clamp_channel(value, expected):
    assert clamp_channel(value) == expected


def test_iter_opaque_pixels_row_major():
    image = rgba_buffer([[CLEAR, RED], [RED, CLEAR]])
    coords = [(p.x, p.y) for p in iter_opaque_pixels(image)]
    assert coords == [(1, 0), (0, 1)]


def test_array_buffer_rejects_bad_shapes():
    with pytest.raises(ValueError):
        ArrayImageBuffer(np.zeros((0, 3), dtype=np.uint32), PixelFormat.PACKED_ABGR)
    with pytest.raises(ValueError):
        ArrayImageBuffer(np.zeros(4, dtype=np.uint32), PixelFormat.PACKED_ABGR)
    with pytest.raises(ValueError):
        ArrayImageBuffer(np.zeros((1, 1, 4), dtype=np.uint8), PixelFormat.INDEXED)
