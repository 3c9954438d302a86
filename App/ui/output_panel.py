"""Export output panel: shows the generated SVG/JSON text."""

from pathlib import Path

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QApplication,
    QFileDialog,
    QGroupBox,
    QHBoxLayout,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
)

from ui.styles import FONTS, SIZES


class OutputPanel(QGroupBox):
    """Read-only view of the last export with copy and save actions."""

    # Emitted after a save with the written path, or an error message
    saved = pyqtSignal(str)
    save_failed = pyqtSignal(str)
    copied = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__("Output", parent)
        self.extension = "svg"
        self.default_name = "sprite"
        self.default_dir = ""
        self._setup_ui()

    def _setup_ui(self):
        """Initialize the UI components."""
        layout = QVBoxLayout()

        self.output = QTextEdit()
        self.output.setReadOnly(True)
        self.output.setMinimumHeight(SIZES.OUTPUT_MIN_HEIGHT)
        self.output.setFont(FONTS.CODE)
        layout.addWidget(self.output)

        btn_layout = QHBoxLayout()
        self.copy_btn = QPushButton("Copy to Clipboard")
        self.copy_btn.setEnabled(False)
        self.copy_btn.clicked.connect(self._on_copy_clicked)
        btn_layout.addWidget(self.copy_btn)

        self.save_btn = QPushButton("Save to File...")
        self.save_btn.setEnabled(False)
        self.save_btn.clicked.connect(self._on_save_clicked)
        btn_layout.addWidget(self.save_btn)
        layout.addLayout(btn_layout)

        self.setLayout(layout)

    def set_content(self, text: str, extension: str):
        """Show exported text and remember its file extension."""
        self.extension = extension
        self.output.setPlainText(text)
        self.copy_btn.setEnabled(bool(text))
        self.save_btn.setEnabled(bool(text))

    def text(self) -> str:
        return self.output.toPlainText()

    def clear(self):
        """Clear the output."""
        self.output.clear()
        self.copy_btn.setEnabled(False)
        self.save_btn.setEnabled(False)

    def _on_copy_clicked(self):
        clipboard = QApplication.clipboard()
        if clipboard:
            clipboard.setText(self.text())
            self.copied.emit()

    def _on_save_clicked(self):
        suggested = str(Path(self.default_dir) / f"{self.default_name}.{self.extension}")
        file_path, _ = QFileDialog.getSaveFileName(
            self,
            "Save Export",
            suggested,
            f"{self.extension.upper()} Files (*.{self.extension});;All Files (*)",
        )
        if not file_path:
            return
        try:
            Path(file_path).write_text(self.text(), encoding="utf-8")
        except OSError as e:
            self.save_failed.emit(str(e))
            return
        self.saved.emit(file_path)
