"""Widget factory for creating common UI patterns with reduced boilerplate."""

from PyQt6.QtWidgets import (
    QCheckBox,
    QHBoxLayout,
    QLabel,
    QSpinBox,
    QWidget,
)


class WidgetFactory:
    """Factory class for creating commonly used widget patterns."""

    @staticmethod
    def create_int_spinbox(
        range_min: int,
        range_max: int,
        value: int,
        suffix: str = "",
        step: int = 1,
        tooltip: str = "",
    ) -> QSpinBox:
        """Create a configured QSpinBox.

        Args:
            range_min: Minimum value
            range_max: Maximum value
            value: Initial value
            suffix: Suffix text
            step: Single step increment
            tooltip: Tooltip text

        Returns:
            Configured QSpinBox
        """
        spinbox = QSpinBox()
        spinbox.setRange(range_min, range_max)
        spinbox.setValue(value)
        spinbox.setSuffix(suffix)
        spinbox.setSingleStep(step)
        if tooltip:
            spinbox.setToolTip(tooltip)
        return spinbox

    @staticmethod
    def create_checkbox(text: str, checked: bool, tooltip: str = "") -> QCheckBox:
        """Create a QCheckBox with an initial state and tooltip."""
        checkbox = QCheckBox(text)
        checkbox.setChecked(checked)
        if tooltip:
            checkbox.setToolTip(tooltip)
        return checkbox

    @staticmethod
    def create_labeled_row(
        label_text: str,
        widget: QWidget,
        stretch_after: bool = False,
    ) -> QHBoxLayout:
        """Create a horizontal layout with label and widget.

        Args:
            label_text: Text for the label
            widget: Widget to place after label
            stretch_after: Whether to add stretch after widget

        Returns:
            QHBoxLayout with label and widget
        """
        layout = QHBoxLayout()
        layout.addWidget(QLabel(label_text))
        layout.addWidget(widget)
        if stretch_after:
            layout.addStretch()
        return layout
