"""SVG encoders for selected layers.

AIDEV-NOTE: Three interchangeable strategies, mirroring ExportStyle:
- encode_flat: one unit <rect> per opaque pixel
- encode_optimized: colour groups -> regions -> compact paths, inline fill
- encode_css_classes: as optimized, fills moved into a shared <style>
Each returns None when there is nothing to draw instead of raising.
"""

import logging

import svgwrite
from svgwrite.utils import pretty_xml

from models import LayerRecord

from .colors import ClassNameTable, sanitize_class_name, to_color_key
from .layers import collect_color_groups
from .paths import region_to_path
from .regions import find_regions
from .sampler import iter_opaque_pixels

logger = logging.getLogger(__name__)


def new_drawing(width: int, height: int, explicit_size: bool = True) -> svgwrite.Drawing:
    """Create the root <svg> element.

    Args:
        width: Sprite width in pixels
        height: Sprite height in pixels
        explicit_size: Emit width/height attributes next to the viewBox

    AIDEV-NOTE: svgwrite validation stays off; its colour grammar rejects
    the rgba() fills used for semi-transparent pixels.
    """
    size = (width, height) if explicit_size else (None, None)
    return svgwrite.Drawing(
        size=size,
        viewBox=f"0 0 {width} {height}",
        debug=False,
    )


def render(drawing: svgwrite.Drawing, pretty: bool = False) -> str:
    """Serialize a drawing to text."""
    xml_string = drawing.tostring()
    if pretty:
        return pretty_xml(xml_string)
    return xml_string


def layer_path_groups(
    record: LayerRecord, width: int, height: int
) -> "list[tuple[str, list[str]]]":
    """Compact one layer into path data per colour.

    Returns:
        (colour key, path data list) pairs in first-seen colour order,
        colours without any in-bounds region left out
    """
    result = []
    for color_key, pixels in collect_color_groups(record).items():
        regions = find_regions(pixels, width, height)
        paths = [region_to_path(region) for region in regions]
        paths = [d for d in paths if d]
        logger.debug(
            "Layer %r colour %s: %d pixels, %d regions",
            record.name,
            color_key,
            len(pixels),
            len(regions),
        )
        if paths:
            result.append((color_key, paths))
    return result


def encode_flat(
    records: "list[LayerRecord]",
    width: int,
    height: int,
    use_layer_groups: bool = False,
    pretty: bool = False,
) -> "str | None":
    """Encode every opaque pixel as a 1x1 rect with an inline fill.

    Args:
        records: Selected layers in declaration order
        width: Sprite width
        height: Sprite height
        use_layer_groups: Wrap each layer in <g class="layer-name">
        pretty: Indent the output

    Returns:
        SVG text, or None when no layer has an opaque pixel
    """
    if not records:
        return None

    dwg = new_drawing(width, height)
    has_content = False

    for record in records:
        rects = [
            dwg.rect(
                insert=(pixel.x + record.offset_x, pixel.y + record.offset_y),
                size=(1, 1),
                fill=to_color_key(pixel.r, pixel.g, pixel.b, pixel.a),
            )
            for pixel in iter_opaque_pixels(record.image, record.decoder)
        ]
        if not rects:
            continue
        has_content = True

        parent = dwg
        if use_layer_groups:
            parent = dwg.add(dwg.g(class_=sanitize_class_name(record.name)))
        for rect in rects:
            parent.add(rect)

    if not has_content:
        return None
    return render(dwg, pretty)


def encode_optimized(
    records: "list[LayerRecord]",
    width: int,
    height: int,
    use_layer_groups: bool = False,
    pretty: bool = False,
) -> "str | None":
    """Encode each layer as one path group per colour with an inline fill.

    Returns:
        SVG text, or None when no region could be emitted
    """
    if not records:
        return None

    dwg = new_drawing(width, height)
    has_content = False

    for record in records:
        color_paths = layer_path_groups(record, width, height)
        if not color_paths:
            continue
        has_content = True

        parent = dwg
        if use_layer_groups:
            parent = dwg.add(dwg.g(class_=sanitize_class_name(record.name)))
        for color_key, paths in color_paths:
            group = parent.add(dwg.g(fill=color_key))
            for d in paths:
                group.add(dwg.path(d=d))

    if not has_content:
        return None
    return render(dwg, pretty)


def encode_css_classes(
    records: "list[LayerRecord]",
    width: int,
    height: int,
    use_layer_groups: bool = False,
    class_table: "ClassNameTable | None" = None,
    pretty: bool = False,
) -> "tuple[str | None, ClassNameTable]":
    """Encode layers as class-referencing path groups plus a <style> block.

    Args:
        records: Selected layers in declaration order
        width: Sprite width
        height: Sprite height
        use_layer_groups: Wrap each layer in <g class="layer-name">
        class_table: Class bindings to extend; a new table when None
        pretty: Indent the output

    Returns:
        Tuple of (SVG text or None, class table after this export)

    AIDEV-NOTE: The root carries only a viewBox, no width/height. Colours
    are bound to classes across all layers; name clashes between layers
    are resolved by ClassNameTable.
    """
    if class_table is None:
        class_table = ClassNameTable()
    if not records:
        return None, class_table

    layer_groups = []
    for record in records:
        class_table.begin_layer()
        color_paths = layer_path_groups(record, width, height)
        named = [
            (class_table.assign(color_key), paths)
            for color_key, paths in color_paths
        ]
        if named:
            layer_groups.append((record.name, named))

    # Sanity check: nothing drawable means the caller should fall back
    if not any(paths for _, named in layer_groups for _, paths in named):
        return None, class_table

    dwg = new_drawing(width, height, explicit_size=False)
    if len(class_table):
        dwg.defs.add(dwg.style(class_table.stylesheet()))

    for layer_name, named in layer_groups:
        parent = dwg
        if use_layer_groups:
            parent = dwg.add(dwg.g(class_=sanitize_class_name(layer_name)))
        # One group per layer and class, never merged across layers, so
        # upper layers still paint over lower ones.
        for class_name, paths in named:
            group = parent.add(dwg.g(class_=class_name))
            for d in paths:
                group.add(dwg.path(d=d))

    return render(dwg, pretty), class_table
