import logging
from typing import Optional

import numpy as np
from numba import njit

from rectcover.bitmap import Bitmap
from rectcover.exceptions import InvalidRegionError
from rectcover.model import Rectangle, RectangleSet
from rectcover.quadtree.common import (QuadCount, QuadNode, Quadtree, Region, region_area,
                                       region_to_rectangle, split_region)

logger = logging.getLogger(__name__)

UNLIMITED_DEPTH = None

"""
Quadtree decomposition:
    - split the region into 4 quadrants at the integer midpoint, count expected and observed foreground pixels
    - fully foreground quadrants are emitted as one rectangle
    - partially foreground quadrants with more than one pixel are split again
    - quadrants of at most one pixel that are not full are dropped; such a quadrant is either empty or
        background, so nothing is lost there
    - with max_depth set, partially foreground quadrants at that depth are dropped as well and the result no
        longer covers every foreground pixel
"""

class QuadtreeDecomposer:
    def __init__(self, max_depth: Optional[int] = UNLIMITED_DEPTH) -> None:
        """
        Args:
            max_depth (int | None): don't split nodes at this depth any further (root has depth 0)
        """
        self.max_depth = max_depth

    def decompose(self, bitmap: Bitmap, region: Rectangle | None = None) -> RectangleSet:
        tree = self.build(bitmap, region)
        res = RectangleSet(bitmap.bounding_box)
        for quadrant in tree.iter_full_regions():
            res.append(region_to_rectangle(quadrant))
        logger.debug("quadtree with %d nodes emitted %d rectangles", len(tree), len(res))
        return res

    def build(self, bitmap: Bitmap, region: Rectangle | None = None) -> Quadtree:
        """Builds the node arena for region (whole bitmap by default) without touching the bitmap."""
        root_region = self._validate_region(bitmap, region)
        cells = bitmap.cells
        tree = Quadtree(root_region)
        tree.add(QuadNode(root_region, 0))

        stack = [0]
        while stack:
            node_idx = stack.pop()
            node = tree.nodes[node_idx]
            node.quadrants = split_region(node.region)
            node.counts = [QuadCount(region_area(q), _count_foreground(cells, *q)) for q in node.quadrants]

            if self.max_depth is not None and node.depth >= self.max_depth:
                continue

            for i, (quadrant, count) in enumerate(zip(node.quadrants, node.counts)):
                if count.is_divisible():
                    child_idx = tree.add(QuadNode(quadrant, node.depth + 1))
                    node.children[i] = child_idx
                    stack.append(child_idx)

        return tree

    def _validate_region(self, bitmap: Bitmap, region: Rectangle | None) -> Region:
        if region is None:
            return (0, 0, bitmap.width, bitmap.height)
        if int(region.x) != region.x or int(region.y) != region.y or \
                int(region.width) != region.width or int(region.height) != region.height:
            raise InvalidRegionError(f"region {region.as_tuple()} must have integer coordinates")
        if not bitmap.bounds.contains(region):
            raise InvalidRegionError(
                f"region {region.as_tuple()} is not inside the {bitmap.width}x{bitmap.height} bitmap")
        return (int(region.x), int(region.y), int(region.max_x), int(region.max_y))


@njit
def _count_foreground(cells: np.ndarray, min_x: int, min_y: int, max_x: int, max_y: int) -> int:
    observed = 0
    for y in range(min_y, max_y):
        for x in range(min_x, max_x):
            if cells[y, x]:
                observed += 1
    return observed

