import pytest
from PIL import Image

from models import PixelFormat
from sprite_loader import frame_count, load_sprite, render_frame
from svg_export import SvgExporter
from svg_export.layers import select_layers


def _save(tmp_path, name, image, **params):
    path = tmp_path / name
    image.save(path, **params)
    return path


def _solid(color, size=(2, 2), mode="RGBA"):
    return Image.new(mode, size, color)


def test_each_file_is_a_layer(tmp_path):
    back = _save(tmp_path, "back.png", _solid((255, 0, 0, 255)))
    front = _save(tmp_path, "front ink.png", _solid((0, 0, 255, 255), (3, 1)))

    sprite = load_sprite([back, front])

    assert [layer.name for layer in sprite.layers] == ["back", "front ink"]
    assert (sprite.width, sprite.height) == (3, 2)
    assert sprite.filename == str(back)
    assert frame_count(sprite) == 1


def test_pixel_formats(tmp_path):
    rgba = _save(tmp_path, "rgba.png", _solid((1, 2, 3, 4)))
    rgb = _save(tmp_path, "rgb.png", _solid((1, 2, 3), mode="RGB"))
    gray = _save(tmp_path, "gray.png", _solid(9, mode="L"))

    sprite = load_sprite([rgba, rgb, gray])
    formats = [layer.cel(1).image.pixel_format for layer in sprite.layers]
    assert formats == [PixelFormat.RGBA, PixelFormat.RGBA, PixelFormat.GRAYSCALE]

    records = select_layers(sprite)
    assert records[1].decoder(records[1].image.get_pixel(0, 0)) == (1, 2, 3, 255)
    assert records[2].decoder(records[2].image.get_pixel(0, 0)) == (9, 9, 9, 255)


def test_palette_image_stays_indexed(tmp_path):
    image = Image.new("P", (2, 1), 0)
    image.putpalette([0, 0, 0, 255, 0, 0])
    image.putpixel((1, 0), 1)
    path = _save(tmp_path, "indexed.png", image, transparency=0)

    sprite = load_sprite([path])

    assert sprite.layers[0].cel(1).image.pixel_format is PixelFormat.INDEXED
    assert sprite.palette is not None
    assert sprite.palette.transparent_index == 0
    svg = SvgExporter().export_svg(sprite, optimized=True, use_layer_groups=False)
    assert '<g fill="#ff0000"><path d="M1,0h1v1h-1z" /></g>' in svg


def test_palette_image_without_transparency_is_converted(tmp_path):
    image = Image.new("P", (1, 1), 0)
    image.putpalette([0, 255, 0])
    path = _save(tmp_path, "opaque.png", image)

    sprite = load_sprite([path])

    assert sprite.layers[0].cel(1).image.pixel_format is PixelFormat.RGBA
    assert sprite.palettes == []


def test_animated_file_gives_one_cel_per_frame(tmp_path):
    frames = [_solid((255, 0, 0), mode="RGB"), _solid((0, 0, 255), mode="RGB")]
    path = tmp_path / "anim.gif"
    frames[0].save(path, save_all=True, append_images=frames[1:], duration=100)
    still = _save(tmp_path, "still.png", _solid((0, 255, 0, 255), (1, 1)))

    sprite = load_sprite([path, still])

    assert frame_count(sprite) == 2
    assert sorted(sprite.layers[0].cels) == [1, 2]
    # still image falls back to its only frame
    preview = render_frame(sprite, 2)
    assert preview.getpixel((0, 0)) == (0, 255, 0, 255)
    assert preview.getpixel((1, 1)) == (0, 0, 255, 255)
    assert render_frame(sprite, 1).getpixel((1, 1)) == (255, 0, 0, 255)


def test_render_frame_composites_in_layer_order(tmp_path):
    back = _save(tmp_path, "a.png", _solid((255, 0, 0, 255)))
    half = _save(tmp_path, "b.png", _solid((0, 0, 255, 0)))

    image = render_frame(load_sprite([back, half]))

    assert image.mode == "RGBA"
    assert image.size == (2, 2)
    assert image.getpixel((0, 0)) == (255, 0, 0, 255)


def test_unreadable_file_raises(tmp_path):
    bad = tmp_path / "bad.png"
    bad.write_text("not an image")
    with pytest.raises(ValueError, match="Failed to load image"):
        load_sprite([bad])


def test_no_paths_raises():
    with pytest.raises(ValueError):
        load_sprite([])


def test_frame_count_without_sprite():
    assert frame_count(None) == 0
