"""Connected region search over same-coloured pixels."""

import logging
from typing import Iterable

import numpy as np

logger = logging.getLogger(__name__)

# 4-connected neighbour offsets
NEIGHBORS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def build_grid(
    pixels: "Iterable[tuple[int, int]]", width: int, height: int
) -> np.ndarray:
    """Build a boolean occupancy grid indexed [y, x].

    Coordinates outside [0, width) x [0, height) are left out.
    """
    grid = np.zeros((height, width), dtype=bool)
    dropped = 0
    for x, y in pixels:
        if 0 <= x < width and 0 <= y < height:
            grid[y, x] = True
        else:
            dropped += 1
    if dropped:
        logger.debug("Dropped %d pixels outside %dx%d", dropped, width, height)
    return grid


def find_regions(
    pixels: "Iterable[tuple[int, int]]", width: int, height: int
) -> "list[list[tuple[int, int]]]":
    """Partition pixel coordinates into maximal 4-connected regions.

    Args:
        pixels: (x, y) coordinates sharing one colour
        width: Width of the search area
        height: Height of the search area

    Returns:
        Regions as lists of (x, y), ordered by their first cell in
        row-major order

    AIDEV-NOTE: Flood fill uses an explicit stack so large regions cannot
    exhaust the call stack. np.argwhere yields cells in row-major order,
    which gives the deterministic region order encoders rely on.
    """
    if width <= 0 or height <= 0:
        return []

    grid = build_grid(pixels, width, height)
    visited = np.zeros_like(grid)
    regions = []

    for y, x in np.argwhere(grid):
        y = int(y)
        x = int(x)
        if visited[y, x]:
            continue

        region = []
        stack = [(x, y)]
        visited[y, x] = True

        while stack:
            cx, cy = stack.pop()
            region.append((cx, cy))

            for dx, dy in NEIGHBORS:
                nx = cx + dx
                ny = cy + dy
                if (
                    0 <= nx < width
                    and 0 <= ny < height
                    and grid[ny, nx]
                    and not visited[ny, nx]
                ):
                    visited[ny, nx] = True
                    stack.append((nx, ny))

        regions.append(region)

    return regions
