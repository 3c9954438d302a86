"""Layer-array JSON document.

AIDEV-NOTE: The layout (two-space indent, key order, one name/svg object per
layer) is consumed byte-for-byte by downstream tooling. It is written by
hand rather than with json.dumps so the shape never drifts.
"""

import re

from models import LayerSVG

_ESCAPES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
)
_CONTROL_CHARS = re.compile(r"[\x00-\x1f]")


def escape_json(text: str) -> str:
    """Escape text for a JSON string literal.

    Backslash, quote, newline, carriage return and tab use their short forms.
    Any other control character becomes a four-digit unicode escape.
    """
    for raw, escaped in _ESCAPES:
        text = text.replace(raw, escaped)
    return _CONTROL_CHARS.sub(lambda m: f"\\u{ord(m.group()):04x}", text)


def layers_to_json(
    width: int, height: int, frame: int, layers: "list[LayerSVG]"
) -> str:
    """Build the JSON document for a set of per-layer SVGs.

    Args:
        width: Sprite width
        height: Sprite height
        frame: 1-based frame index that was exported
        layers: Layer documents in output order

    Returns:
        Pretty-printed JSON text
    """
    parts = [
        "{",
        f'  "width": {width},',
        f'  "height": {height},',
        f'  "frame": {frame},',
        '  "layers": [',
    ]

    for i, layer in enumerate(layers):
        comma = "," if i < len(layers) - 1 else ""
        parts.append(
            "    {\n"
            f'      "name": "{escape_json(layer.name)}",\n'
            f'      "svg": "{escape_json(layer.svg)}"\n'
            f"    }}{comma}"
        )

    parts.append("  ]")
    parts.append("}")
    return "\n".join(parts)
