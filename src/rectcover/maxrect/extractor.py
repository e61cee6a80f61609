import logging
from typing import Iterator, Optional

import numpy as np
from numba import njit

from rectcover.bitmap import Bitmap
from rectcover.model import Rectangle, RectangleSet

logger = logging.getLogger(__name__)

NO_LIMIT = None

"""
Greedy cover by maximal rectangles:
    - one call of _maximal_rectangle scans the bitmap row by row, keeping per column the height of the run
        of foreground cells ending at the current row (a histogram), and finds the largest rectangle under
        that histogram with a stack of open bars
    - the extractor clears the returned rectangle from the bitmap and calls the scan again until it reports
        area 0
"""

class MaximalRectangleExtractor:
    def __init__(self, max_rectangles: Optional[int] = NO_LIMIT) -> None:
        """
        Args:
            max_rectangles (int | None): stop after this many rectangles were extracted, None runs
                until the bitmap is empty
        """
        self.max_rectangles = max_rectangles

    def extract(self, bitmap: Bitmap, preserve: bool = False) -> RectangleSet:
        """Covers the foreground of bitmap with disjoint rectangles, largest first.

        The bitmap is cleared as rectangles are claimed, unless preserve is set, in which case
        a copy is consumed instead.
        """
        target = bitmap.copy() if preserve else bitmap
        res = RectangleSet(target.bounding_box)
        for rect in self.iter_extract(target):
            res.append(rect)
        logger.debug("extracted %d rectangles covering %d pixels", len(res), res.area)
        return res

    def iter_extract(self, bitmap: Bitmap) -> Iterator[Rectangle]:
        """Yields rectangles in extraction order, clearing each one before the next scan."""
        extracted = 0
        while True:
            if self.max_rectangles is not None and extracted >= self.max_rectangles:
                if not bitmap.is_empty():
                    logger.warning("stopped after %d rectangles, %d foreground pixels left uncovered",
                                   extracted, bitmap.count())
                return
            area, rect = find_maximal_rectangle(bitmap)
            if area <= 0:
                return
            bitmap.clear(rect)
            extracted += 1
            yield rect


def find_maximal_rectangle(bitmap: Bitmap) -> tuple[int, Rectangle | None]:
    """Returns area and position of the largest all-foreground rectangle, (0, None) if there is none.
       On equal areas the first rectangle found by the row-major scan is kept.
    """
    area, x, y, width, height = _maximal_rectangle(bitmap.cells)
    if area <= 0:
        return 0, None
    return int(area), Rectangle(int(x), int(y), int(width), int(height))


@njit
def _maximal_rectangle(cells: np.ndarray) -> tuple[int, int, int, int, int]:
    """Returns (area, x, y, width, height) of the first largest rectangle of nonzero cells."""
    n_rows, n_cols = cells.shape

    # heights of foreground runs ending at the current row, cache[n_cols] stays 0 as a sentinel
    cache = np.zeros(n_cols + 1, dtype=np.int64)
    stack_start = np.zeros(n_cols + 1, dtype=np.int64)
    stack_width = np.zeros(n_cols + 1, dtype=np.int64)
    top = 0

    best_area = 0
    best_x = 0
    best_y = 0
    best_w = 0
    best_h = 0

    for row in range(n_rows):
        for col in range(n_cols):
            if cells[row, col]:
                cache[col] += 1
            else:
                cache[col] = 0

        open_width = 0
        for col in range(n_cols + 1):
            if cache[col] > open_width:
                stack_start[top] = col
                stack_width[top] = open_width
                top += 1
                open_width = cache[col]
            elif cache[col] < open_width:
                start = 0
                prev_width = 0
                while True:
                    top -= 1
                    start = stack_start[top]
                    prev_width = stack_width[top]

                    area = open_width * (col - start)
                    if area > best_area:
                        best_area = area
                        best_x = start
                        best_y = row - open_width + 1
                        best_w = col - start
                        best_h = open_width

                    open_width = prev_width
                    if cache[col] >= open_width:
                        break

                open_width = cache[col]
                if open_width != 0:
                    # the lower bar reaches back to where the closed one started
                    stack_start[top] = start
                    stack_width[top] = prev_width
                    top += 1

    return best_area, best_x, best_y, best_w, best_h
