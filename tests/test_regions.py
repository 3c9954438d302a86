import numpy as np
import pytest

from svg_export.regions import find_regions


def _cells(regions):
    return [set(region) for region in regions]


def test_empty_input():
    assert find_regions([], 4, 4) == []


@pytest.mark.parametrize("width, height", [(0, 3), (3, 0), (-1, 2)])
def test_non_positive_bounds(width, height):
    assert find_regions([(0, 0)], width, height) == []


def test_diagonal_pixels_are_separate_regions():
    regions = find_regions([(0, 0), (1, 1)], 2, 2)
    assert _cells(regions) == [{(0, 0)}, {(1, 1)}]


def test_edge_neighbours_join():
    pixels = [(0, 0), (1, 0), (1, 1), (3, 3)]
    regions = find_regions(pixels, 4, 4)
    assert _cells(regions) == [{(0, 0), (1, 0), (1, 1)}, {(3, 3)}]


def test_regions_ordered_by_first_cell_row_major():
    # second region starts earlier in row-major order than it appears in input
    pixels = [(2, 2), (0, 1), (3, 0)]
    regions = find_regions(pixels, 4, 4)
    assert [min(r, key=lambda c: (c[1], c[0])) for r in regions] == [
        (3, 0),
        (0, 1),
        (2, 2),
    ]


def test_out_of_bounds_pixels_are_dropped():
    regions = find_regions([(0, 0), (5, 5), (-1, 0)], 2, 2)
    assert _cells(regions) == [{(0, 0)}]


def test_large_region_does_not_recurse():
    width = height = 300
    pixels = [(x, y) for y in range(height) for x in range(width)]
    regions = find_regions(pixels, width, height)
    assert len(regions) == 1
    assert len(regions[0]) == width * height


def test_partition_property_random_sets():
    rng = np.random.default_rng(7)
    for _ in range(25):
        width = int(rng.integers(1, 12))
        height = int(rng.integers(1, 12))
        mask = rng.random((height, width)) < 0.5
        pixels = {(int(x), int(y)) for y, x in np.argwhere(mask)}

        regions = find_regions(pixels, width, height)

        seen = set()
        for region in regions:
            cells = set(region)
            assert len(cells) == len(region)
            assert not (cells & seen)
            seen |= cells
        assert seen == pixels


def test_regions_are_connected():
    pixels = [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2), (0, 2)]
    for region in find_regions(pixels, 3, 3):
        cells = set(region)
        start = region[0]
        stack = [start]
        reached = {start}
        while stack:
            x, y = stack.pop()
            for n in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
                if n in cells and n not in reached:
                    reached.add(n)
                    stack.append(n)
        assert reached == cells
