"""Main window: load sprites, preview a frame and export SVG/JSON."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from PIL.ImageQt import ImageQt
from PyQt6.QtCore import Qt, QThread, pyqtSignal
from PyQt6.QtGui import QAction, QPixmap
from PyQt6.QtWidgets import (
    QFileDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from config_manager import ConfigManager
from models import EXPORTER_VERSION, ExportConfig, Sprite
from sprite_loader import frame_count, load_sprite, render_frame
from svg_export import SvgExporter, describe_sprite, get_output_filename
from svg_export.json_export import layers_to_json
from ui.output_panel import OutputPanel
from ui.styles import SIZES, panel_stylesheet, status_stylesheet
from ui.widgets import WidgetFactory

# Export actions offered by the window
MODE_FILE = "file"  # configured style, layer groups on
MODE_INLINE = "inline"  # CSS classes with layer groups
MODE_RAW = "raw"  # per-pixel rects with layer groups
MODE_JSON = "json"  # per-layer SVG array


class ExportThread(QThread):
    """Background thread for exports to avoid blocking UI."""

    finished = pyqtSignal(str, str)  # exported text, file extension
    empty = pyqtSignal(str)  # diagnostic report
    error = pyqtSignal(str)  # Error message

    def __init__(self, sprite: Sprite, config: ExportConfig, mode: str):
        super().__init__()
        self.sprite = sprite
        # Snapshot so option edits in the window never reach a running export
        self.config = replace(config)
        self.mode = mode

    def run(self):
        """Execute the export in background."""
        try:
            exporter = SvgExporter(self.config)
            frame = self.config.frame

            if self.mode == MODE_JSON:
                layers = exporter.export_layers(self.sprite, frame)
                if not layers:
                    self.empty.emit(describe_sprite(self.sprite, frame))
                    return
                text = layers_to_json(
                    self.sprite.width, self.sprite.height, frame, layers
                )
                self.finished.emit(text, "json")
                return

            if self.mode == MODE_RAW:
                svg = exporter.export_raw(self.sprite, frame)
            elif self.mode == MODE_INLINE:
                svg = exporter.export_svg(
                    self.sprite,
                    frame,
                    optimized=True,
                    use_layer_groups=True,
                    use_css_classes=True,
                )
            else:
                svg = exporter.export_svg(self.sprite, frame, use_layer_groups=True)

            if svg is None:
                self.empty.emit(describe_sprite(self.sprite, frame))
                return
            self.finished.emit(svg, "svg")

        except Exception as e:
            self.error.emit(str(e))


class ExportWindow(QMainWindow):
    """Main application window for sprite export."""

    def __init__(self):
        super().__init__()
        self.setWindowTitle(f"Pixel SVG Exporter v{EXPORTER_VERSION}")
        self.setMinimumSize(*SIZES.WINDOW_MIN_SIZE)

        # Application state
        self.config_manager = ConfigManager()
        self.config = self.config_manager.load()
        self.sprite: Sprite | None = None
        self.export_thread: ExportThread | None = None

        self._setup_ui()
        self._connect_signals()
        self._update_buttons()

    def _setup_ui(self):
        """Initialize the user interface."""
        self._create_toolbar()

        central = QWidget()
        layout = QHBoxLayout()

        left = QVBoxLayout()
        self._create_sprite_area(left)
        self._create_options(left)
        self._create_action_buttons(left)
        self._create_status_area(left)
        left.addStretch()
        layout.addLayout(left, stretch=1)

        self.output_panel = OutputPanel()
        layout.addWidget(self.output_panel, stretch=2)

        central.setLayout(layout)
        self.setCentralWidget(central)

    def _create_toolbar(self):
        """Create the main toolbar."""
        toolbar = QToolBar("Main Toolbar")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        self.open_action = QAction("Open Images...", self)
        self.open_action.setToolTip("Load one image per layer")
        toolbar.addAction(self.open_action)

    def _create_sprite_area(self, parent_layout: QVBoxLayout):
        """Create sprite label and preview."""
        self.sprite_label = QLabel("No sprite loaded")
        self.sprite_label.setWordWrap(True)
        parent_layout.addWidget(self.sprite_label)

        self.preview_label = QLabel()
        self.preview_label.setMinimumSize(*SIZES.PREVIEW_MIN_SIZE)
        self.preview_label.setMaximumSize(*SIZES.PREVIEW_MAX_SIZE)
        self.preview_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.preview_label.setStyleSheet(panel_stylesheet())
        self.preview_label.setText("Sprite preview will appear here")
        parent_layout.addWidget(self.preview_label)

    def _create_options(self, parent_layout: QVBoxLayout):
        """Create export option controls."""
        group = QGroupBox("Options")
        layout = QVBoxLayout()

        self.frame_spin = WidgetFactory.create_int_spinbox(
            1, 1, 1, tooltip="Frame to export (1-based)"
        )
        layout.addLayout(
            WidgetFactory.create_labeled_row("Frame:", self.frame_spin, True)
        )

        self.optimized_check = WidgetFactory.create_checkbox(
            "Optimized paths",
            self.config.optimized,
            "Merge same-coloured pixels into path regions",
        )
        self.css_check = WidgetFactory.create_checkbox(
            "CSS classes",
            self.config.use_css_classes,
            "Move fills into a shared <style> block",
        )
        self.json_optimized_check = WidgetFactory.create_checkbox(
            "Optimized JSON layers",
            self.config.json_optimized,
            "Use path regions for the per-layer SVGs in JSON output",
        )
        self.pretty_check = WidgetFactory.create_checkbox(
            "Indent output", self.config.pretty
        )
        for checkbox in (
            self.optimized_check,
            self.css_check,
            self.json_optimized_check,
            self.pretty_check,
        ):
            layout.addWidget(checkbox)

        group.setLayout(layout)
        parent_layout.addWidget(group)

    def _create_action_buttons(self, parent_layout: QVBoxLayout):
        """Create export buttons."""
        btn_layout = QHBoxLayout()

        self.file_btn = QPushButton("SVG File")
        self.file_btn.setToolTip("Export with the selected options and layer groups")
        btn_layout.addWidget(self.file_btn)

        self.inline_btn = QPushButton("SVG Inline Code")
        self.inline_btn.setToolTip("Optimized paths with CSS classes")
        btn_layout.addWidget(self.inline_btn)

        self.json_btn = QPushButton("SVG JSON")
        self.json_btn.setToolTip("One SVG document per layer")
        btn_layout.addWidget(self.json_btn)

        parent_layout.addLayout(btn_layout)

        self.raw_btn = QPushButton("Use Raw Format")
        self.raw_btn.setToolTip("One rect per pixel, grouped by layer")
        parent_layout.addWidget(self.raw_btn)

        self.export_buttons = [
            self.file_btn,
            self.inline_btn,
            self.json_btn,
            self.raw_btn,
        ]

    def _create_status_area(self, parent_layout: QVBoxLayout):
        """Create status display."""
        self.status_label = QLabel("")
        self.status_label.setWordWrap(True)
        parent_layout.addWidget(self.status_label)

    def _connect_signals(self):
        """Connect internal signals to handlers."""
        self.open_action.triggered.connect(self._on_open_clicked)
        self.frame_spin.valueChanged.connect(self._on_frame_changed)
        self.file_btn.clicked.connect(lambda: self._start_export(MODE_FILE))
        self.inline_btn.clicked.connect(lambda: self._start_export(MODE_INLINE))
        self.json_btn.clicked.connect(lambda: self._start_export(MODE_JSON))
        self.raw_btn.clicked.connect(lambda: self._start_export(MODE_RAW))
        self.output_panel.copied.connect(
            lambda: self._set_status("Copied to clipboard!", "SUCCESS")
        )
        self.output_panel.saved.connect(
            lambda path: self._set_status(f"Exported successfully to: {path}", "SUCCESS")
        )
        self.output_panel.save_failed.connect(
            lambda error: self._set_status(f"Could not write file: {error}", "ERROR")
        )

    # === Helpers ===

    def _set_status(self, text: str, state: str = "IDLE"):
        self.status_label.setText(text)
        self.status_label.setStyleSheet(status_stylesheet(state))

    def _update_buttons(self, busy: bool = False):
        enabled = self.sprite is not None and not busy
        for button in self.export_buttons:
            button.setEnabled(enabled)
        self.open_action.setEnabled(not busy)

    def _read_options(self):
        """Copy widget state into the export config."""
        self.config.frame = self.frame_spin.value()
        self.config.optimized = self.optimized_check.isChecked()
        self.config.use_css_classes = self.css_check.isChecked()
        self.config.json_optimized = self.json_optimized_check.isChecked()
        self.config.pretty = self.pretty_check.isChecked()

    def _update_preview(self):
        """Render the selected frame into the preview label."""
        if self.sprite is None:
            return
        image = render_frame(self.sprite, self.frame_spin.value())
        pixmap = QPixmap.fromImage(ImageQt(image))
        # AIDEV-NOTE: Nearest-neighbour scaling keeps pixel edges sharp
        scaled = pixmap.scaled(
            SIZES.PREVIEW_MAX_SIZE[0],
            SIZES.PREVIEW_MAX_SIZE[1],
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.FastTransformation,
        )
        self.preview_label.setPixmap(scaled)

    # === Event Handlers ===

    def _on_open_clicked(self):
        """Handle open action."""
        file_paths, _ = QFileDialog.getOpenFileNames(
            self,
            "Select Layer Images",
            "",
            "Images (*.png *.gif *.bmp *.tiff *.webp);;All Files (*)",
        )
        if file_paths:
            self._load_sprite(file_paths)

    def _load_sprite(self, file_paths: "list[str]"):
        """Load images as a sprite and refresh the window."""
        try:
            sprite = load_sprite(file_paths)
        except ValueError as e:
            self._set_status(f"Error: {e}", "ERROR")
            return

        self.sprite = sprite
        frames = max(frame_count(sprite), 1)
        self.frame_spin.setRange(1, frames)
        self.frame_spin.setValue(min(self.config.frame, frames))

        name = Path(file_paths[0]).name
        self.sprite_label.setText(
            f"Sprite: {name} ({sprite.width}x{sprite.height}, "
            f"{len(sprite.layers)} layer(s), {frames} frame(s))"
        )
        self.output_panel.default_name = get_output_filename(sprite.filename)
        self.output_panel.default_dir = str(Path(file_paths[0]).parent)
        self.output_panel.clear()

        self._update_preview()
        self._update_buttons()
        self._set_status("Sprite loaded. Choose an export format.")

    def _on_frame_changed(self, value: int):
        self.config.frame = value
        self._update_preview()

    def _start_export(self, mode: str):
        """Start an export in a background thread."""
        if self.sprite is None:
            return

        self._read_options()
        self._update_buttons(busy=True)
        self._set_status("Exporting...", "WORKING")

        self.export_thread = ExportThread(self.sprite, self.config, mode)
        self.export_thread.finished.connect(self._on_export_finished)
        self.export_thread.empty.connect(self._on_export_empty)
        self.export_thread.error.connect(self._on_export_error)
        self.export_thread.start()

    def _on_export_finished(self, text: str, extension: str):
        """Handle a completed export."""
        self._update_buttons()
        self.output_panel.set_content(text, extension)
        self._set_status(
            f"Exported {len(text)} characters of {extension.upper()}", "SUCCESS"
        )

    def _on_export_empty(self, report: str):
        """Handle an export with nothing to draw."""
        self._update_buttons()
        self._set_status("Nothing to export", "ERROR")
        QMessageBox.warning(self, "No Visible Pixels", report)

    def _on_export_error(self, error_msg: str):
        """Handle export error."""
        self._update_buttons()
        pretty_msg = error_msg.replace("\n", " ").strip()
        self._set_status(f"Error: {pretty_msg}", "ERROR")

    def closeEvent(self, event):
        """Persist options on close."""
        self._read_options()
        success, error = self.config_manager.save(self.config)
        if not success:
            QMessageBox.warning(self, "Settings", f"Could not save settings: {error}")
        event.accept()
