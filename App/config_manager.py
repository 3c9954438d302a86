"""Configuration persistence manager for the pixel SVG exporter.

This module handles loading and saving of export settings to/from JSON files.
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Tuple

from models import CONFIG_FILE, ExportConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """Handles loading and saving of export configuration."""

    def __init__(self, config_path: Path = CONFIG_FILE):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file (defaults to ~/.pixel_svg_exporter.json)
        """
        self.config_path = Path(config_path)

    def load(self) -> ExportConfig:
        """Load configuration from file, returning defaults if not found.

        Returns:
            ExportConfig with loaded or default values
        """
        config = ExportConfig()

        try:
            if self.config_path.exists():
                with open(self.config_path, "r") as f:
                    data = json.load(f)
                    # Update config with loaded values (fallback to defaults)
                    config.frame = int(data.get("frame", config.frame))
                    config.optimized = bool(data.get("optimized", config.optimized))
                    config.use_layer_groups = bool(
                        data.get("use_layer_groups", config.use_layer_groups)
                    )
                    config.use_css_classes = bool(
                        data.get("use_css_classes", config.use_css_classes)
                    )
                    config.json_optimized = bool(
                        data.get("json_optimized", config.json_optimized)
                    )
                    config.pretty = bool(data.get("pretty", config.pretty))
                    named_colors = data.get("named_colors", config.named_colors)
                    if isinstance(named_colors, dict):
                        config.named_colors = {
                            str(k): str(v) for k, v in named_colors.items()
                        }
                logger.info("Loaded configuration from %s", self.config_path)
        except Exception as e:
            logger.warning("Could not load config file: %s", e)
            config = ExportConfig()

        return config

    def save(self, config: ExportConfig) -> Tuple[bool, Optional[str]]:
        """Save configuration to file.

        Args:
            config: ExportConfig to save

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        try:
            with open(self.config_path, "w") as f:
                json.dump(asdict(config), f, indent=2)
            return True, None
        except Exception as e:
            return False, str(e)
