from dataclasses import dataclass, field
from typing import Iterator

Number = int | float


@dataclass(frozen=True)
class Rectangle:
    x: Number
    y: Number
    width: Number
    height: Number

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"rectangle must have positive extent, got {self.width}x{self.height}")

    @property
    def area(self) -> Number:
        return self.width * self.height

    @property
    def max_x(self) -> Number:
        return self.x + self.width

    @property
    def max_y(self) -> Number:
        return self.y + self.height

    def translated(self, dx: Number, dy: Number) -> "Rectangle":
        return Rectangle(self.x + dx, self.y + dy, self.width, self.height)

    def overlaps(self, other: "Rectangle") -> bool:
        return (self.x < other.max_x and other.x < self.max_x and
                self.y < other.max_y and other.y < self.max_y)

    def contains(self, other: "Rectangle") -> bool:
        return (self.x <= other.x and self.y <= other.y and
                other.max_x <= self.max_x and other.max_y <= self.max_y)

    def cells(self) -> Iterator[tuple[int, int]]:
        """Yields (x, y) of every pixel of an integer rectangle, row by row."""
        for y in range(int(self.y), int(self.max_y)):
            for x in range(int(self.x), int(self.max_x)):
                yield x, y

    def as_tuple(self) -> tuple[Number, Number, Number, Number]:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class BoundingBox:
    min_x: Number
    min_y: Number
    max_x: Number
    max_y: Number

    @property
    def width(self) -> Number:
        return self.max_x - self.min_x

    @property
    def height(self) -> Number:
        return self.max_y - self.min_y

    @property
    def center(self) -> tuple[float, float]:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def expand(self, margin: Number) -> "BoundingBox":
        return BoundingBox(self.min_x - margin, self.min_y - margin, self.max_x + margin, self.max_y + margin)

    def translated(self, dx: Number, dy: Number) -> "BoundingBox":
        return BoundingBox(self.min_x + dx, self.min_y + dy, self.max_x + dx, self.max_y + dy)


@dataclass
class RectangleSet:
    """Rectangles in discovery order plus the bounding box of the source bitmap.

    Order matters to consumers that replay the decomposition (animation), not to coverage.
    """
    bounding_box: BoundingBox
    rectangles: list[Rectangle] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rectangles)

    def __iter__(self) -> Iterator[Rectangle]:
        return iter(self.rectangles)

    def __getitem__(self, idx: int) -> Rectangle:
        return self.rectangles[idx]

    def append(self, rect: Rectangle) -> None:
        self.rectangles.append(rect)

    @property
    def area(self) -> Number:
        return sum(r.area for r in self.rectangles)

    def covered_cells(self) -> set[tuple[int, int]]:
        covered = set()
        for rect in self.rectangles:
            covered.update(rect.cells())
        return covered

    def translated(self, dx: Number, dy: Number) -> "RectangleSet":
        return RectangleSet(
            self.bounding_box.translated(dx, dy),
            [r.translated(dx, dy) for r in self.rectangles]
        )

    def centered(self) -> "RectangleSet":
        """Shifts by minus half the bounding box extent.

        The box is assumed to start at (0, 0), as boxes of bitmaps do; only then is its centre moved to the
        origin. The shift depends on the extent alone, so centering twice compounds.
        """
        dx = -self.bounding_box.width / 2
        dy = -self.bounding_box.height / 2
        return self.translated(dx, dy)
