from typing import Iterable, Sequence

import numpy as np

from rectcover.config import MIN_BITMAP_SIDE
from rectcover.exceptions import InvalidBitmapError
from rectcover.model import BoundingBox, Rectangle

FOREGROUND_CHARS = "#1Xx*"


class Bitmap:
    """Boolean pixel matrix with its origin at (0, 0).

    Cells are stored as a 2d bool array indexed [row, col], i.e. [y, x]. The shape is fixed
    at construction; only cell values change (the maximal rectangle extractor clears them).
    """

    def __init__(self, cells: np.ndarray) -> None:
        try:
            cells = np.asarray(cells)
        except ValueError as e:
            raise InvalidBitmapError(f"bitmap rows must have the same length: {e}") from e
        if cells.ndim != 2:
            raise InvalidBitmapError(f"bitmap must be 2 dimensional, got shape {cells.shape}")
        height, width = cells.shape
        if width < MIN_BITMAP_SIDE or height < MIN_BITMAP_SIDE:
            raise InvalidBitmapError(
                f"bitmap must be at least {MIN_BITMAP_SIDE}x{MIN_BITMAP_SIDE} pixels, got {width}x{height}")
        self._cells = np.array(cells != 0, dtype=np.bool_)

    @staticmethod
    def blank(width: int, height: int) -> "Bitmap":
        return Bitmap(np.zeros((height, width), dtype=np.bool_))

    @staticmethod
    def from_rows(rows: Sequence[str | Iterable[int]]) -> "Bitmap":
        """Builds a bitmap from rows of 0/1 values or strings like '#..#'."""
        parsed = []
        for row in rows:
            if isinstance(row, str):
                parsed.append([ch in FOREGROUND_CHARS for ch in row])
            else:
                parsed.append([bool(v) for v in row])
        if len({len(r) for r in parsed}) > 1:
            raise InvalidBitmapError("all bitmap rows must have the same length")
        return Bitmap(np.array(parsed, dtype=np.bool_))

    @property
    def cells(self) -> np.ndarray:
        return self._cells

    @property
    def width(self) -> int:
        return self._cells.shape[1]

    @property
    def height(self) -> int:
        return self._cells.shape[0]

    @property
    def shape(self) -> tuple[int, int]:
        return self._cells.shape

    @property
    def bounds(self) -> Rectangle:
        return Rectangle(0, 0, self.width, self.height)

    @property
    def bounding_box(self) -> BoundingBox:
        return BoundingBox(0, 0, self.width, self.height)

    def is_set(self, x: int, y: int) -> bool:
        return bool(self._cells[y, x])

    def set_cell(self, x: int, y: int, value: bool = True) -> None:
        self._cells[y, x] = value

    def count(self, region: Rectangle | None = None) -> int:
        if region is None:
            return int(np.count_nonzero(self._cells))
        return int(np.count_nonzero(self._view(region)))

    def clear(self, rect: Rectangle) -> None:
        self._view(rect)[:] = False

    def is_empty(self) -> bool:
        return not self._cells.any()

    def copy(self) -> "Bitmap":
        return Bitmap(self._cells)

    def foreground_cells(self) -> set[tuple[int, int]]:
        ys, xs = np.nonzero(self._cells)
        return {(int(x), int(y)) for x, y in zip(xs, ys)}

    def _view(self, rect: Rectangle) -> np.ndarray:
        return self._cells[int(rect.y):int(rect.max_y), int(rect.x):int(rect.max_x)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bitmap):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._cells, other._cells))

    def __repr__(self) -> str:
        return f"Bitmap({self.width}x{self.height}, foreground={self.count()})"
