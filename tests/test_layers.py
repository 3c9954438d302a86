from models import Cel, Layer, Palette, PixelFormat, Sprite
from svg_export.buffers import ArrayImageBuffer
from svg_export.layers import collect_color_groups, select_layers

from conftest import BLUE, CLEAR, RED, make_layer, make_sprite, rgba_buffer


def test_no_sprite():
    assert select_layers(None) == []


def test_declaration_order_and_offsets():
    a = make_layer("a", [[RED]], position=(1, 0))
    b = make_layer("b", [[BLUE]], position=(0, 1))
    records = select_layers(make_sprite(2, 2, a, b))
    assert [r.name for r in records] == ["a", "b"]
    assert [(r.offset_x, r.offset_y) for r in records] == [(1, 0), (0, 1)]


def test_explicit_flags_exclude_missing_flags_do_not():
    hidden = make_layer("hidden", [[RED]], is_visible=False)
    group = make_layer("group", [[RED]], is_image=False)
    lenient = make_layer("lenient", [[RED]])
    shown = make_layer("shown", [[RED]], is_visible=True, is_image=True)
    sprite = make_sprite(1, 1, hidden, group, None, lenient, shown)
    assert [r.name for r in select_layers(sprite)] == ["lenient", "shown"]


def test_nameless_layer_gets_positional_name():
    sprite = make_sprite(1, 1, make_layer("", [[RED]]), make_layer(None, [[RED]]))
    assert [r.name for r in select_layers(sprite)] == ["Layer 1", "Layer 2"]


def test_frame_fallback_to_first_frame():
    only_first = make_layer("A", [[RED]], frame=1)
    both = Layer(
        name="B",
        cels={1: Cel(rgba_buffer([[CLEAR]])), 2: Cel(rgba_buffer([[BLUE]]))},
    )
    records = select_layers(make_sprite(1, 1, only_first, both), frame=2)
    assert [r.name for r in records] == ["A", "B"]
    assert records[1].image.get_pixel(0, 0) == BLUE


def test_layer_without_cel_or_image_is_skipped():
    no_cel = Layer(name="no cel", cels={3: Cel(rgba_buffer([[RED]]))})
    no_image = Layer(name="no image", cels={1: Cel(None)})
    assert select_layers(make_sprite(1, 1, no_cel, no_image), frame=2) == []


def test_decoder_resolved_with_sprite_palette():
    palette = Palette(colors=[(0, 0, 0, 0), (1, 2, 3, 255)])
    image = ArrayImageBuffer.from_rows([[1, 0]], PixelFormat.INDEXED)
    sprite = Sprite(2, 1, layers=[Layer("idx", {1: Cel(image)})], palettes=[palette])

    record = select_layers(sprite)[0]
    assert record.decoder(1) == (1, 2, 3, 255)
    assert collect_color_groups(record) == {"#010203": [(0, 0)]}


def test_color_groups_first_seen_order_with_offsets():
    layer = make_layer("a", [[BLUE, RED], [RED, CLEAR]], position=(2, 3))
    record = select_layers(make_sprite(4, 5, layer))[0]
    groups = collect_color_groups(record)
    assert list(groups) == ["#0000ff", "#ff0000"]
    assert groups["#ff0000"] == [(3, 3), (2, 4)]
