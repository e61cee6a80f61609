from dataclasses import dataclass, field
from typing import Iterator

from rectcover.model import Rectangle

NUM_QUADRANTS = 4
NO_CHILD = -1

# (min_x, min_y, max_x, max_y), half open; quadrants of odd sized regions may be empty
Region = tuple[int, int, int, int]


def split_region(region: Region) -> list[Region]:
    """Splits region at its integer midpoint into top-left, top-right, bottom-left and bottom-right."""
    min_x, min_y, max_x, max_y = region
    mid_x = (min_x + max_x) // 2
    mid_y = (min_y + max_y) // 2
    return [
        (min_x, min_y, mid_x, mid_y),
        (mid_x, min_y, max_x, mid_y),
        (min_x, mid_y, mid_x, max_y),
        (mid_x, mid_y, max_x, max_y),
    ]


def region_area(region: Region) -> int:
    min_x, min_y, max_x, max_y = region
    return max(max_x - min_x, 0) * max(max_y - min_y, 0)


def region_to_rectangle(region: Region) -> Rectangle:
    min_x, min_y, max_x, max_y = region
    return Rectangle(min_x, min_y, max_x - min_x, max_y - min_y)


@dataclass
class QuadCount:
    expected: int = 0
    observed: int = 0

    def is_full(self) -> bool:
        return self.expected > 0 and self.observed == self.expected

    def is_divisible(self) -> bool:
        return self.expected > 1 and self.observed < self.expected


@dataclass
class QuadNode:
    region: Region
    depth: int
    quadrants: list[Region] = field(default_factory=list)
    counts: list[QuadCount] = field(default_factory=list)
    children: list[int] = field(default_factory=lambda: [NO_CHILD] * NUM_QUADRANTS)

    def full_quadrants(self) -> Iterator[Region]:
        for quadrant, count in zip(self.quadrants, self.counts):
            if count.is_full():
                yield quadrant

    def is_leaf(self) -> bool:
        return all(child == NO_CHILD for child in self.children)


class Quadtree:
    """Arena of quadtree nodes, children are referenced by index into nodes. Node 0 is the root."""

    def __init__(self, region: Region) -> None:
        self.region = region
        self.nodes: list[QuadNode] = []

    def add(self, node: QuadNode) -> int:
        self.nodes.append(node)
        return len(self.nodes) - 1

    @property
    def root(self) -> QuadNode:
        return self.nodes[0]

    def __len__(self) -> int:
        return len(self.nodes)

    def depth(self) -> int:
        return max((node.depth for node in self.nodes), default=0)

    def iter_full_regions(self) -> Iterator[Region]:
        """Pre-order walk: a node's full quadrants first, then its children in quadrant order."""
        if not self.nodes:
            return
        stack = [0]
        while stack:
            node = self.nodes[stack.pop()]
            yield from node.full_quadrants()
            for child in reversed(node.children):
                if child != NO_CHILD:
                    stack.append(child)
