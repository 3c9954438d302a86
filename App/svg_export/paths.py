"""Path compaction: turn one pixel region into SVG path data.

AIDEV-NOTE: This is a rectangle-union approximation, not outline tracing.
Horizontal runs are merged downwards when consecutive rows have a run with
the same x-start and width. The emitted rectangles cover exactly the
region's cells.
"""

from dataclasses import dataclass
from itertools import groupby
from typing import Iterable


@dataclass
class RunRect:
    """Axis-aligned rectangle of pixel cells."""

    x: int
    y: int
    width: int
    height: int = 1

    def to_path(self) -> str:
        """Absolute move, then relative h/v/h-negative and close."""
        return f"M{self.x},{self.y}h{self.width}v{self.height}h-{self.width}z"

    def cells(self) -> "set[tuple[int, int]]":
        return {
            (x, y)
            for y in range(self.y, self.y + self.height)
            for x in range(self.x, self.x + self.width)
        }


def horizontal_runs(region: "Iterable[tuple[int, int]]") -> "list[RunRect]":
    """Find maximal horizontal runs, rows top to bottom, runs left to right."""
    cells = sorted({(y, x) for x, y in region})
    runs = []

    for y, row in groupby(cells, key=lambda cell: cell[0]):
        xs = [x for _, x in row]
        start = prev = xs[0]
        for x in xs[1:]:
            if x != prev + 1:
                runs.append(RunRect(start, y, prev - start + 1))
                start = x
            prev = x
        runs.append(RunRect(start, y, prev - start + 1))

    return runs


def merge_runs(runs: "list[RunRect]") -> "list[RunRect]":
    """Stack runs vertically when x-start and width match on the next row.

    Runs must arrive in row-major order (as from horizontal_runs).
    """
    merged: "list[RunRect]" = []
    for run in runs:
        for rect in merged:
            if (
                rect.x == run.x
                and rect.width == run.width
                and rect.y + rect.height == run.y
            ):
                rect.height += run.height
                break
        else:
            merged.append(RunRect(run.x, run.y, run.width, run.height))
    return merged


def region_to_rects(region: "list[tuple[int, int]]") -> "list[RunRect]":
    """Rectangles covering a region exactly."""
    if not region:
        return []
    if len(region) == 1:
        x, y = region[0]
        return [RunRect(x, y, 1, 1)]
    return merge_runs(horizontal_runs(region))


def region_to_path(region: "list[tuple[int, int]]") -> "str | None":
    """Encode one region as path data.

    Args:
        region: (x, y) cells of one connected region

    Returns:
        Space-separated rectangle subpaths, or None for an empty region
    """
    rects = region_to_rects(region)
    if not rects:
        return None
    return " ".join(rect.to_path() for rect in rects)
