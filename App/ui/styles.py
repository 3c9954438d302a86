"""Centralized styling constants for the exporter UI.

This module consolidates colors, fonts, and sizes used throughout the application
to ensure consistency and easier maintenance.
"""

from PyQt6.QtGui import QFont


class StatusColors:
    """Status line colors."""

    SUCCESS = "green"
    WORKING = "orange"
    ERROR = "red"
    IDLE = "gray"


class ThemeColors:
    """Application theme colors."""

    BACKGROUND_PANEL = "#2a2a2a"
    BORDER_DEFAULT = "gray"


class Fonts:
    """Standard application fonts."""

    CODE = QFont("Courier", 9)


class Sizes:
    """Standard widget sizes and constraints."""

    WINDOW_MIN_SIZE = (900, 650)

    # Sprite preview
    PREVIEW_MIN_SIZE = (200, 150)
    PREVIEW_MAX_SIZE = (400, 300)

    # Export output
    OUTPUT_MIN_HEIGHT = 200


FONTS = Fonts
SIZES = Sizes


def status_stylesheet(state: str) -> str:
    """Generate status label stylesheet.

    Args:
        state: Status name ('SUCCESS', 'WORKING', 'ERROR', 'IDLE')

    Returns:
        CSS stylesheet string with appropriate color
    """
    color = getattr(StatusColors, state.upper(), StatusColors.IDLE)
    return f"color: {color};"


def panel_stylesheet() -> str:
    """Generate standard panel stylesheet with border and background.

    Returns:
        CSS stylesheet string for panel styling
    """
    return (
        f"border: 1px solid {ThemeColors.BORDER_DEFAULT}; "
        f"background-color: {ThemeColors.BACKGROUND_PANEL};"
    )
