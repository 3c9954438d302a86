"""Pixel SVG Exporter - Main entry point."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from ui.export_window import ExportWindow


def main():
    """Launch the pixel SVG exporter application."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)

    app.setApplicationDisplayName("Pixel SVG Exporter")
    app.setApplicationName("PixelSvgExporter")

    window = ExportWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
