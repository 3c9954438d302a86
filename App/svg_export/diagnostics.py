"""Diagnostic report shown when an export produced nothing."""

from models import EXPORTER_VERSION, Sprite

from .layers import FALLBACK_FRAME
from .sampler import resolve_decoder, sample

MAX_SAMPLES = 3


def _describe_pixels(image, decoder) -> "tuple[int, str | None, list[str]]":
    """Count opaque pixels and collect a few readable samples."""
    count = 0
    first = None
    samples = []
    for y in range(image.height):
        for x in range(image.width):
            pixel = sample(image, x, y, decoder)
            if pixel is None:
                continue
            if first is None:
                first = f"First pixel ({x},{y}): rgba{pixel.rgba}"
            if pixel.a > 0:
                count += 1
                if len(samples) < MAX_SAMPLES:
                    samples.append(f"({x},{y}): rgba{pixel.rgba}")
    return count, first, samples


def describe_sprite(sprite: "Sprite | None", frame: int = 1) -> str:
    """Build a multi-line report of what the exporter could see.

    Args:
        sprite: Sprite that failed to export
        frame: 1-based frame index that was requested

    Returns:
        Report text, one fact per line
    """
    if sprite is None:
        return "No sprite is open"

    lines = [
        f"Sprite: {sprite.filename or 'Untitled'}",
        f"Frame: {frame}",
        f"Sprite Size: {sprite.width}x{sprite.height}",
        f"Total Layers: {len(sprite.layers)}",
        "",
    ]

    visible_layers = 0
    layers_with_cels = 0
    for index, layer in enumerate(sprite.layers, start=1):
        if layer is None or layer.is_visible is False or layer.is_image is False:
            continue
        visible_layers += 1

        cel = layer.cel(frame) or layer.cel(FALLBACK_FRAME)
        if cel is None or cel.image is None:
            continue
        layers_with_cels += 1

        image = cel.image
        decoder = resolve_decoder(image, sprite.palette, sprite.color_decoder)
        count, first, samples = _describe_pixels(image, decoder)

        lines.append(f"Layer {index}: {layer.name or 'unnamed'}")
        lines.append(f"  - Pixel Format: {image.pixel_format.name}")
        lines.append(f"  - Position: ({cel.position[0]}, {cel.position[1]})")
        lines.append(f"  - Image Size: {image.width}x{image.height}")
        lines.append(f"  - Has Pixels: {'yes' if count else 'no'}")
        lines.append(f"  - Pixel Count: {count}")
        if first:
            lines.append(f"  - {first}")
        if samples:
            lines.append(f"  - Sample pixels: {', '.join(samples)}")
        lines.append("")

    lines.extend(
        [
            f"Visible layers: {visible_layers}",
            f"Layers with cels: {layers_with_cels}",
            "",
            "Make sure at least one layer is visible and contains pixels.",
            "",
            f"SVG Exporter v{EXPORTER_VERSION}",
        ]
    )
    return "\n".join(lines)
