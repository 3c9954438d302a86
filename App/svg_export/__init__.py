"""Raster-to-vector conversion engine for layered pixel sprites.

AIDEV-NOTE: Pipeline, leaves first:
- buffers: Pillow and numpy backed image buffers
- sampler: native pixel values -> canonical RGBA
- colors: colour keys and CSS class names
- regions: 4-connected region search
- paths: rectangle-run path compaction
- layers: layer selection and colour grouping
- encoders: flat / optimized / CSS-class SVG output
- json_export: per-layer SVG array as JSON
- exporter: SvgExporter orchestrator with strategy fallback
"""

from .buffers import ArrayImageBuffer, PillowImageBuffer
from .diagnostics import describe_sprite
from .exporter import SvgExporter
from .utils import get_output_filename, is_empty_svg

__all__ = [
    "ArrayImageBuffer",
    "PillowImageBuffer",
    "SvgExporter",
    "describe_sprite",
    "get_output_filename",
    "is_empty_svg",
]
