"""UI components for the pixel SVG exporter."""

from ui.export_window import ExportThread, ExportWindow
from ui.output_panel import OutputPanel

__all__ = [
    "ExportWindow",
    "ExportThread",
    "OutputPanel",
]
