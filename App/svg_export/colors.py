"""Colour keys and CSS class names.

AIDEV-NOTE: Colour keys double as SVG fill values and as dictionary keys,
so equal colours must always serialize to the same text.
"""

import re

from models import DEFAULT_NAMED_COLORS, CssClass

DEFAULT_LAYER_CLASS = "layer"

_WHITESPACE_RUN = re.compile(r"\s+")
_INVALID_CLASS_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def to_color_key(r: int, g: int, b: int, a: int) -> str:
    """Serialize an RGBA colour.

    Returns:
        "transparent" for alpha 0, "#rrggbb" for alpha 255, otherwise
        "rgba(r,g,b,alpha)" with alpha truncated to two decimals
    """
    if a == 0:
        return "transparent"
    if a >= 255:
        return f"#{r:02x}{g:02x}{b:02x}"
    alpha = (a * 100) // 255
    return f"rgba({r},{g},{b},{alpha / 100:.2f})"


def sanitize_class_name(name: "str | None", default: str = DEFAULT_LAYER_CLASS) -> str:
    """Turn an arbitrary name (usually a layer name) into a class name.

    Whitespace runs become a single underscore and characters outside
    [A-Za-z0-9_-] are dropped. Falls back to default when nothing is left.
    """
    if not name:
        return default
    name = _WHITESPACE_RUN.sub("_", name)
    name = _INVALID_CLASS_CHARS.sub("", name)
    return name or default


class ClassNameTable:
    """Colour-to-class bindings for one export.

    Names come from the recognised colour table first, then from a
    ``colorN`` counter that restarts for every layer. A name already bound
    to a different colour gets an integer suffix until it is unique. Once
    bound, a colour keeps its class for the rest of the export.

    AIDEV-NOTE: Never share a table between exports; build a new one per
    call (see SvgExporter).
    """

    def __init__(self, named_colors: "dict[str, str] | None" = None):
        if named_colors is None:
            named_colors = DEFAULT_NAMED_COLORS
        self.named_colors = {
            key.lower(): sanitize_class_name(name, default="color")
            for key, name in named_colors.items()
        }
        self._by_color: "dict[str, str]" = {}
        self._by_name: "dict[str, str]" = {}
        self._counter = 1

    def begin_layer(self):
        """Restart the synthesized-name counter for the next layer."""
        self._counter = 1

    def _candidate(self, color_key: str) -> str:
        named = self.named_colors.get(color_key.lower())
        if named:
            return named
        name = f"color{self._counter}"
        self._counter += 1
        return name

    def assign(self, color_key: str) -> str:
        """Get the class name bound to a colour, binding a new one if needed."""
        existing = self._by_color.get(color_key)
        if existing is not None:
            return existing

        original = self._candidate(color_key)
        name = original
        suffix = 1
        while name in self._by_name and self._by_name[name] != color_key:
            name = f"{original}{suffix}"
            suffix += 1

        self._by_color[color_key] = name
        self._by_name[name] = color_key
        return name

    def class_for(self, color_key: str) -> "str | None":
        return self._by_color.get(color_key)

    @property
    def classes(self) -> "list[CssClass]":
        """Bound classes in binding order."""
        return [CssClass(name, key) for key, name in self._by_color.items()]

    def stylesheet(self) -> str:
        """Render the class rules, one per line."""
        return "\n".join(css.rule() for css in self.classes)

    def __len__(self) -> int:
        return len(self._by_color)
