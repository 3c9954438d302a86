import numpy as np

from svg_export.paths import (
    RunRect,
    horizontal_runs,
    merge_runs,
    region_to_path,
    region_to_rects,
)
from svg_export.regions import find_regions


def _covered(rects):
    cells = []
    for rect in rects:
        cells.extend(rect.cells())
    return cells


def test_singleton_at_3_4():
    assert region_to_path([(3, 4)]) == "M3,4h1v1h-1z"


def test_empty_region():
    assert region_to_path([]) is None


def test_full_square_is_one_rect():
    region = [(0, 0), (1, 0), (0, 1), (1, 1)]
    assert region_to_path(region) == "M0,0h2v2h-2z"


def test_horizontal_runs_split_on_gaps():
    runs = horizontal_runs([(0, 0), (1, 0), (3, 0), (1, 1)])
    assert runs == [RunRect(0, 0, 2), RunRect(3, 0, 1), RunRect(1, 1, 1)]


def test_merge_requires_same_start_and_width():
    runs = [RunRect(0, 0, 2), RunRect(0, 1, 2), RunRect(0, 2, 3)]
    assert merge_runs(runs) == [RunRect(0, 0, 2, 2), RunRect(0, 2, 3, 1)]


def test_l_shape_is_union_of_rects():
    # ##
    # #.
    region = [(0, 0), (1, 0), (0, 1)]
    assert region_to_path(region) == "M0,0h2v1h-2z M0,1h1v1h-1z"


def test_column_merges_vertically():
    region = [(5, 1), (5, 2), (5, 3)]
    assert region_to_path(region) == "M5,1h1v3h-1z"


def test_coverage_property_random_regions():
    rng = np.random.default_rng(11)
    for _ in range(25):
        width = int(rng.integers(1, 10))
        height = int(rng.integers(1, 10))
        mask = rng.random((height, width)) < 0.6
        pixels = [(int(x), int(y)) for y, x in np.argwhere(mask)]

        for region in find_regions(pixels, width, height):
            covered = _covered(region_to_rects(region))
            assert len(covered) == len(set(covered))
            assert set(covered) == set(region)
