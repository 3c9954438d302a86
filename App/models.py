"""Data models and constants for the pixel SVG exporter."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Protocol

EXPORTER_VERSION = "1.0.1"

# Configuration file path
CONFIG_FILE = Path.home() / ".pixel_svg_exporter.json"

# AIDEV-NOTE: Recognised class names for the CSS-class encoder. Keys are
# colour keys as produced by svg_export.colors.to_color_key.
DEFAULT_NAMED_COLORS = {
    "#ffffff": "white",
    "#000000": "black",
    "#b6509e": "gotchi-primary",
    "#cfeef4": "gotchi-secondary",
    "#f696c6": "gotchi-cheek",
}


class PixelFormat(Enum):
    """Native encoding of the values stored in an image buffer.

    AIDEV-NOTE: Resolved once per buffer. The sampler never guesses the
    channel order of an individual pixel.
    """

    RGBA = "rgba"  # (r, g, b[, a]) sequences
    GRAYSCALE = "grayscale"  # v or (v, a)
    INDEXED = "indexed"  # palette index
    PACKED_ABGR = "packed_abgr"  # 0xAABBGGRR integers (red in the low byte)
    PACKED_ARGB = "packed_argb"  # 0xAARRGGBB integers


class ExportStyle(Enum):
    """SVG encoding strategies, most aggressive first.

    AIDEV-NOTE: The order of members is the fallback chain used when a
    strategy produces no content.
    """

    CSS_CLASSES = "css_classes"  # <style> block + class-referencing path groups
    OPTIMIZED = "optimized"  # one path group per colour with inline fill
    FLAT = "flat"  # one <rect> per opaque pixel


# Decodes one native pixel value to (r, g, b, a)
ColorDecoder = Callable[[Any], "tuple[int, int, int, int]"]


class ImageBuffer(Protocol):
    """Read access to one cel image as supplied by the host."""

    width: int
    height: int
    pixel_format: PixelFormat

    def get_pixel(self, x: int, y: int) -> Any: ...


# --- Sprite Models ---


@dataclass(frozen=True)
class Pixel:
    """A decoded pixel sample. Channels are always within 0-255."""

    x: int
    y: int
    r: int
    g: int
    b: int
    a: int

    @property
    def rgba(self) -> "tuple[int, int, int, int]":
        return (self.r, self.g, self.b, self.a)


@dataclass
class Palette:
    """Colour table for indexed images."""

    colors: "list[tuple[int, int, int, int]]" = field(default_factory=list)
    transparent_index: int = 0  # decodes as fully transparent

    def get_color(self, index: int) -> "tuple[int, int, int, int] | None":
        """Return the RGBA entry at index, or None when out of range."""
        if 0 <= index < len(self.colors):
            return self.colors[index]
        return None


@dataclass
class Cel:
    """Per-frame content of one layer."""

    image: "ImageBuffer | None"
    position: "tuple[int, int]" = (0, 0)  # pixel offset inside the sprite


@dataclass
class Layer:
    """A sprite layer.

    AIDEV-NOTE: is_visible / is_image default to None, which counts as
    visible / image layer. Only an explicit False excludes the layer.
    """

    name: "str | None"
    cels: "dict[int, Cel]" = field(default_factory=dict)  # keyed by 1-based frame
    is_visible: "bool | None" = None
    is_image: "bool | None" = None

    def cel(self, frame: int) -> "Cel | None":
        """Get the cel at a 1-based frame index."""
        return self.cels.get(frame)


@dataclass
class Sprite:
    """Layered raster document supplied by the host."""

    width: int
    height: int
    layers: "list[Layer | None]" = field(default_factory=list)
    palettes: "list[Palette]" = field(default_factory=list)
    filename: str = ""

    # Optional host colour routine, preferred when its result is in range
    color_decoder: "ColorDecoder | None" = None

    @property
    def palette(self) -> "Palette | None":
        """Active palette used for indexed images."""
        return self.palettes[0] if self.palettes else None


@dataclass
class LayerRecord:
    """A layer selected for export at one frame."""

    name: str
    image: ImageBuffer
    offset_x: int = 0
    offset_y: int = 0
    decoder: "ColorDecoder | None" = None  # resolved once for this image


# --- Export Models ---


@dataclass(frozen=True)
class CssClass:
    """A class rule in the shared <style> block."""

    name: str
    color_key: str

    def rule(self) -> str:
        return f".{self.name}{{fill:{self.color_key};}}"


@dataclass(frozen=True)
class LayerSVG:
    """One entry of the per-layer SVG array."""

    name: str
    svg: str


@dataclass
class ExportConfig:
    """Configuration for SVG and JSON export."""

    # Frame to export (1-based)
    frame: int = 1

    # Encoder selection flags
    optimized: bool = False
    use_layer_groups: bool = True
    use_css_classes: bool = False

    # Per-layer SVGs in the JSON document use region paths
    json_optimized: bool = True

    # Indent SVG output
    pretty: bool = False

    # Colour key -> class name, merged over DEFAULT_NAMED_COLORS
    named_colors: "dict[str, str]" = field(default_factory=dict)

    def all_named_colors(self) -> "dict[str, str]":
        """Return the default named colours with user overrides applied."""
        merged = dict(DEFAULT_NAMED_COLORS)
        merged.update({k.lower(): v for k, v in self.named_colors.items()})
        return merged
