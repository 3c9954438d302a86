"""Layer selection and per-layer colour grouping."""

import logging

from models import LayerRecord, Sprite

from .colors import to_color_key
from .sampler import iter_opaque_pixels, resolve_decoder

logger = logging.getLogger(__name__)

FALLBACK_FRAME = 1


def select_layers(sprite: "Sprite | None", frame: int = 1) -> "list[LayerRecord]":
    """Select the layers to export at a frame.

    Args:
        sprite: Host sprite
        frame: 1-based frame index

    Returns:
        Layer records in declaration order

    AIDEV-NOTE: Only an explicit is_image=False / is_visible=False skips a
    layer, so hosts that omit the flags still get their layers exported.
    A layer without a cel at the frame falls back to its frame-1 cel.
    """
    if sprite is None:
        return []

    records = []
    for index, layer in enumerate(sprite.layers, start=1):
        if layer is None:
            continue
        name = layer.name or f"Layer {index}"

        if layer.is_image is False:
            logger.debug("Skipping %r: not an image layer", name)
            continue
        if layer.is_visible is False:
            logger.debug("Skipping %r: hidden", name)
            continue

        cel = layer.cel(frame)
        if cel is None and frame != FALLBACK_FRAME:
            cel = layer.cel(FALLBACK_FRAME)
            if cel is not None:
                logger.debug(
                    "Layer %r has no cel at frame %d, using frame %d",
                    name,
                    frame,
                    FALLBACK_FRAME,
                )
        if cel is None or cel.image is None:
            logger.debug("Skipping %r: no cel image", name)
            continue

        offset_x, offset_y = cel.position
        records.append(
            LayerRecord(
                name=name,
                image=cel.image,
                offset_x=offset_x,
                offset_y=offset_y,
                decoder=resolve_decoder(
                    cel.image, sprite.palette, sprite.color_decoder
                ),
            )
        )

    return records


def collect_color_groups(
    record: LayerRecord,
) -> "dict[str, list[tuple[int, int]]]":
    """Group a layer's opaque pixels by colour key.

    Returns:
        Colour key -> absolute (offset applied) coordinates, keys in the
        order their first pixel is met in row-major order
    """
    groups: "dict[str, list[tuple[int, int]]]" = {}
    for pixel in iter_opaque_pixels(record.image, record.decoder):
        key = to_color_key(pixel.r, pixel.g, pixel.b, pixel.a)
        groups.setdefault(key, []).append(
            (pixel.x + record.offset_x, pixel.y + record.offset_y)
        )
    return groups
