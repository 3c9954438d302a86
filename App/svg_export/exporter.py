"""Export orchestration: strategy selection, fallback and layer arrays.

AIDEV-NOTE: SvgExporter is the single entry point for front ends (CLI and
desktop window). It owns no state between calls apart from its config;
every export builds its own class table.
"""

import logging

from models import ExportConfig, ExportStyle, LayerSVG, Sprite

from .colors import ClassNameTable
from .encoders import encode_css_classes, encode_flat, encode_optimized
from .json_export import layers_to_json
from .layers import select_layers
from .utils import is_empty_svg

logger = logging.getLogger(__name__)

FALLBACK_CHAIN = list(ExportStyle)


class SvgExporter:
    """Converts one frame of a sprite into SVG or JSON text."""

    def __init__(self, config: ExportConfig | None = None):
        self.config = config or ExportConfig()

    @staticmethod
    def style_for_flags(optimized: bool, use_css_classes: bool) -> ExportStyle:
        """Map the caller flags onto an encoding strategy.

        CSS classes imply optimized paths, so they win over the optimized flag.
        """
        if use_css_classes:
            return ExportStyle.CSS_CLASSES
        if optimized:
            return ExportStyle.OPTIMIZED
        return ExportStyle.FLAT

    def _resolve_frame(self, frame: int | None) -> int:
        frame = self.config.frame if frame is None else frame
        if frame < 1:
            raise ValueError(f"Frame index must be 1 or greater, got {frame}")
        return frame

    def encode(
        self,
        style: ExportStyle,
        sprite: Sprite,
        frame: int,
        use_layer_groups: bool,
    ) -> "str | None":
        """Run a single strategy without fallback.

        Returns:
            SVG text, or None when the strategy produced nothing
        """
        records = select_layers(sprite, frame)
        pretty = self.config.pretty

        if style is ExportStyle.CSS_CLASSES:
            table = ClassNameTable(self.config.all_named_colors())
            svg, table = encode_css_classes(
                records,
                sprite.width,
                sprite.height,
                use_layer_groups=use_layer_groups,
                class_table=table,
                pretty=pretty,
            )
            logger.debug("CSS export bound %d classes", len(table))
            return svg
        if style is ExportStyle.OPTIMIZED:
            return encode_optimized(
                records, sprite.width, sprite.height, use_layer_groups, pretty
            )
        return encode_flat(
            records, sprite.width, sprite.height, use_layer_groups, pretty
        )

    def export_svg(
        self,
        sprite: "Sprite | None",
        frame: int | None = None,
        optimized: bool | None = None,
        use_layer_groups: bool | None = None,
        use_css_classes: bool | None = None,
    ) -> "str | None":
        """Export one frame as a single SVG document.

        Args:
            sprite: Sprite to export
            frame: 1-based frame index, config default if None
            optimized: Emit region paths instead of per-pixel rects
            use_layer_groups: Wrap each layer in a named group
            use_css_classes: Move fills into a shared <style> block

        Returns:
            SVG text, or None when there is nothing to export

        AIDEV-NOTE: A strategy that yields nothing is retried with the next
        less aggressive one (CSS classes -> optimized -> flat) before
        reporting no content.
        """
        if sprite is None:
            return None

        frame = self._resolve_frame(frame)
        if optimized is None:
            optimized = self.config.optimized
        if use_layer_groups is None:
            use_layer_groups = self.config.use_layer_groups
        if use_css_classes is None:
            use_css_classes = self.config.use_css_classes

        requested = self.style_for_flags(optimized, use_css_classes)
        chain = FALLBACK_CHAIN[FALLBACK_CHAIN.index(requested):]

        for style in chain:
            svg = self.encode(style, sprite, frame, use_layer_groups)
            if not is_empty_svg(svg):
                logger.info(
                    "Exported frame %d as %s (%d chars)",
                    frame,
                    style.value,
                    len(svg),
                )
                return svg
            if style is not ExportStyle.FLAT:
                logger.info("%s export was empty, falling back", style.value)

        logger.info("Nothing to export at frame %d", frame)
        return None

    def export_raw(self, sprite: "Sprite | None", frame: int | None = None) -> "str | None":
        """Per-pixel rects grouped by layer, ignoring the configured style."""
        return self.export_svg(
            sprite,
            frame,
            optimized=False,
            use_layer_groups=True,
            use_css_classes=False,
        )

    def export_layers(
        self,
        sprite: "Sprite | None",
        frame: int | None = None,
        optimized: bool | None = None,
    ) -> "list[LayerSVG]":
        """Export each selected layer as its own sprite-sized SVG.

        Args:
            sprite: Sprite to export
            frame: 1-based frame index, config default if None
            optimized: Region paths instead of rects, config default if None

        Returns:
            One LayerSVG per layer with visible content, in layer order
        """
        if sprite is None:
            return []
        if not sprite.width or not sprite.height or sprite.width <= 0 or sprite.height <= 0:
            logger.warning(
                "Invalid sprite dimensions %sx%s", sprite.width, sprite.height
            )
            return []

        frame = self._resolve_frame(frame)
        if optimized is None:
            optimized = self.config.json_optimized
        encode_layer = encode_optimized if optimized else encode_flat

        layers = []
        for record in select_layers(sprite, frame):
            svg = encode_layer(
                [record],
                sprite.width,
                sprite.height,
                use_layer_groups=False,
                pretty=self.config.pretty,
            )
            if svg is not None:
                layers.append(LayerSVG(name=record.name, svg=svg))

        logger.info("Exported %d layer documents at frame %d", len(layers), frame)
        return layers

    def export_json(
        self,
        sprite: "Sprite | None",
        frame: int | None = None,
        optimized: bool | None = None,
    ) -> str:
        """Export the per-layer SVG array as a JSON document.

        Always returns a document; the layers array is empty when nothing
        could be exported.
        """
        frame = self._resolve_frame(frame)
        layers = self.export_layers(sprite, frame, optimized)
        width = sprite.width if sprite is not None else 0
        height = sprite.height if sprite is not None else 0
        return layers_to_json(width, height, frame, layers)
