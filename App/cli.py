"""Command line front end for the pixel SVG exporter."""

import argparse
import logging
import sys
from pathlib import Path

from config_manager import ConfigManager
from models import EXPORTER_VERSION, ExportConfig
from sprite_loader import load_sprite
from svg_export import SvgExporter, describe_sprite, get_output_filename
from svg_export.json_export import layers_to_json

logger = logging.getLogger(__name__)


def _frame_index(value: str) -> int:
    frame = int(value)
    if frame < 1:
        raise argparse.ArgumentTypeError("frame must be 1 or greater")
    return frame


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="pixel-svg-export",
        description="Convert one frame of layered pixel art into SVG or JSON.",
    )
    ap.add_argument("input", nargs="+", help="Layer images, bottom layer first.")
    ap.add_argument("--frame", type=_frame_index, help="1-based frame to export.")
    ap.add_argument(
        "--format", choices=("svg", "json"), default="svg", help="Output format."
    )
    ap.add_argument(
        "--optimized",
        action="store_true",
        default=None,
        help="Merge same-coloured pixels into path regions.",
    )
    ap.add_argument(
        "--css-classes",
        dest="use_css_classes",
        action="store_true",
        default=None,
        help="Move fills into a shared <style> block (implies --optimized).",
    )
    ap.add_argument(
        "--no-layer-groups",
        dest="use_layer_groups",
        action="store_false",
        default=None,
        help="Do not wrap each layer in a <g> element.",
    )
    ap.add_argument("--pretty", action="store_true", help="Indent SVG output.")
    ap.add_argument(
        "-o", "--output", help="Output file or directory (default: stdout)."
    )
    ap.add_argument(
        "--config", type=Path, help="Load defaults from a settings JSON file."
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    ap.add_argument(
        "--version", action="version", version=f"%(prog)s {EXPORTER_VERSION}"
    )
    return ap


def _output_path(output: "str | None", inputs: "list[str]", extension: str) -> "Path | None":
    """Resolve -o; a directory gets <first input stem>.<extension>."""
    if not output:
        return None
    path = Path(output)
    if path.is_dir():
        return path / f"{get_output_filename(inputs[0])}.{extension}"
    return path


def main(argv: "list[str] | None" = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = ConfigManager(args.config).load() if args.config else ExportConfig()
    if args.pretty:
        config.pretty = True
    frame = args.frame or config.frame

    try:
        sprite = load_sprite(args.input)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    logger.debug(
        "Loaded %dx%d sprite with %d layer(s)",
        sprite.width,
        sprite.height,
        len(sprite.layers),
    )

    exporter = SvgExporter(config)
    if args.format == "json":
        layers = exporter.export_layers(sprite, frame)
        text = layers_to_json(sprite.width, sprite.height, frame, layers) if layers else None
    else:
        text = exporter.export_svg(
            sprite,
            frame,
            optimized=args.optimized,
            use_layer_groups=args.use_layer_groups,
            use_css_classes=args.use_css_classes,
        )

    if text is None:
        print(describe_sprite(sprite, frame), file=sys.stderr)
        return 1

    path = _output_path(args.output, args.input, args.format)
    if path is None:
        sys.stdout.write(text + "\n")
        return 0

    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        print(f"Error: Could not write file: {e}", file=sys.stderr)
        return 1
    print(f"Exported successfully to: {path}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
