"""Shared fixtures: small sprites built from RGBA pixel rows."""

from __future__ import annotations

import numpy as np
import pytest

from models import Cel, Layer, PixelFormat, Sprite
from svg_export.buffers import ArrayImageBuffer

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
CLEAR = (0, 0, 0, 0)


def rgba_buffer(rows) -> ArrayImageBuffer:
    """RGBA buffer from rows of (r, g, b, a) tuples."""
    return ArrayImageBuffer(np.array(rows, dtype=np.uint8), PixelFormat.RGBA)


def make_layer(name, rows, position=(0, 0), frame=1, **flags) -> Layer:
    return Layer(name=name, cels={frame: Cel(rgba_buffer(rows), position)}, **flags)


def make_sprite(width, height, *layers) -> Sprite:
    return Sprite(width=width, height=height, layers=list(layers))


@pytest.fixture()
def red_sprite() -> Sprite:
    """2x2 single-layer, fully opaque red."""
    return make_sprite(2, 2, make_layer("Layer 1", [[RED, RED], [RED, RED]]))


@pytest.fixture()
def transparent_sprite() -> Sprite:
    return make_sprite(2, 2, make_layer("Empty", [[CLEAR, CLEAR], [CLEAR, CLEAR]]))


@pytest.fixture()
def two_layer_sprite() -> Sprite:
    """Red background row plus a blue pixel on a second layer."""
    background = make_layer("Back ground", [[RED, RED], [CLEAR, CLEAR]])
    overlay = make_layer("Top!", [[CLEAR, CLEAR], [BLUE, CLEAR]])
    return make_sprite(2, 2, background, overlay)
