"""Build sprites from image files and render preview frames.

AIDEV-NOTE: This is the host side of the exporter. Each input file is one
layer; each frame of a multi-frame file is one cel. The engine only sees
the resulting Sprite and never touches files.
"""

import logging
from pathlib import Path

from PIL import Image, ImageSequence

from models import Cel, Layer, Palette, Sprite
from svg_export.buffers import PillowImageBuffer
from svg_export.layers import select_layers
from svg_export.sampler import iter_opaque_pixels

logger = logging.getLogger(__name__)


def _palette_from_image(image: Image.Image) -> "Palette | None":
    """Extract the RGBA palette of a P-mode image with a transparent index."""
    transparency = image.info.get("transparency")
    if not isinstance(transparency, int):
        return None

    raw = image.getpalette("RGBA") or []
    colors = [tuple(raw[i : i + 4]) for i in range(0, len(raw) - 3, 4)]
    return Palette(colors=colors, transparent_index=transparency)


def _frame_buffer(frame: Image.Image, palettes: "list[Palette]") -> PillowImageBuffer:
    """Wrap one frame, keeping it indexed only when it shares the sprite palette.

    AIDEV-NOTE: The sprite has a single active palette, so a P-mode frame
    whose palette differs from it (or that has no transparent index) is
    converted to RGBA instead.
    """
    if frame.mode == "P":
        palette = _palette_from_image(frame)
        if palette is not None and not palettes:
            palettes.append(palette)
        if palette is None or palette != palettes[0]:
            frame = frame.convert("RGBA")
    elif frame.mode == "PA":
        frame = frame.convert("RGBA")
    return PillowImageBuffer(frame)


def load_sprite(paths: "list[str | Path]") -> Sprite:
    """Load image files as the layers of one sprite.

    Args:
        paths: Image files, bottom layer first

    Returns:
        Sprite sized to the largest frame

    Raises:
        ValueError: If no path is given or a file cannot be loaded
    """
    if not paths:
        raise ValueError("No input images given")

    layers = []
    palettes: "list[Palette]" = []
    width = 0
    height = 0

    for path in paths:
        path = Path(path)
        try:
            with Image.open(path) as image:
                cels = {}
                for index, frame in enumerate(ImageSequence.Iterator(image), start=1):
                    buffer = _frame_buffer(frame.copy(), palettes)
                    cels[index] = Cel(image=buffer)
                    width = max(width, buffer.width)
                    height = max(height, buffer.height)
        except Exception as e:
            raise ValueError(f"Failed to load image: {e}") from e

        logger.debug("Loaded %s with %d frame(s)", path.name, len(cels))
        layers.append(Layer(name=path.stem, cels=cels))

    return Sprite(
        width=width,
        height=height,
        layers=layers,
        palettes=palettes,
        filename=str(Path(paths[0])),
    )


def frame_count(sprite: "Sprite | None") -> int:
    """Highest frame index that any layer has a cel for."""
    if sprite is None:
        return 0
    return max(
        (max(layer.cels, default=0) for layer in sprite.layers if layer is not None),
        default=0,
    )


def render_frame(sprite: Sprite, frame: int = 1) -> Image.Image:
    """Composite the exported layers of a frame into one RGBA image.

    Uses the same layer selection and pixel decoding as the SVG export, so
    the preview shows exactly what will be exported.
    """
    canvas = Image.new("RGBA", (max(sprite.width, 1), max(sprite.height, 1)))

    for record in select_layers(sprite, frame):
        layer_image = Image.new("RGBA", canvas.size)
        for pixel in iter_opaque_pixels(record.image, record.decoder):
            x = pixel.x + record.offset_x
            y = pixel.y + record.offset_y
            if 0 <= x < canvas.width and 0 <= y < canvas.height:
                layer_image.putpixel((x, y), pixel.rgba)
        canvas = Image.alpha_composite(canvas, layer_image)

    return canvas
