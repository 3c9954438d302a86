"""Helpers shared by the exporter and the front ends."""

import re
from pathlib import Path

DEFAULT_OUTPUT_NAME = "sprite"

_ROOT_TAGS = re.compile(r"<svg[^>]*>|</svg>|<\?xml[^>]*\?>")
_EMPTY_DEFS = re.compile(r"<defs\s*/>|<defs>\s*</defs>")
_WHITESPACE = re.compile(r"\s+")


def is_empty_svg(svg: "str | None") -> bool:
    """Check whether an SVG document draws nothing.

    True for None, empty text, or a root element holding only whitespace
    and an empty <defs>.
    """
    if not svg:
        return True
    content = _ROOT_TAGS.sub("", svg)
    content = _EMPTY_DEFS.sub("", content)
    content = _WHITESPACE.sub("", content)
    return content == ""


def get_output_filename(path: "str | Path | None") -> str:
    """Base name for exported files: the sprite file name minus extension."""
    if not path:
        return DEFAULT_OUTPUT_NAME
    stem = Path(path).stem
    return stem or DEFAULT_OUTPUT_NAME
