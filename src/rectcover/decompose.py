import logging
from typing import Optional

from rectcover.bitmap import Bitmap
from rectcover.config import Strategy
from rectcover.maxrect.extractor import MaximalRectangleExtractor
from rectcover.model import RectangleSet
from rectcover.quadtree.decomposer import QuadtreeDecomposer

logger = logging.getLogger(__name__)


def decompose(bitmap: Bitmap, strategy: Strategy = Strategy.MAXRECT,
              max_rectangles: Optional[int] = None, preserve: bool = False) -> RectangleSet:
    """Runs one decomposer over bitmap. Only the maximal rectangle strategy consumes the bitmap,
       and only when preserve is not set.
    """
    strategy = Strategy(strategy)
    foreground = bitmap.count()
    if strategy == Strategy.MAXRECT:
        rect_set = MaximalRectangleExtractor(max_rectangles).extract(bitmap, preserve=preserve)
    else:
        if max_rectangles is not None:
            logger.warning("max_rectangles=%d is ignored by the %s strategy", max_rectangles, strategy.value)
        rect_set = QuadtreeDecomposer().decompose(bitmap)
    logger.info("%s decomposition: %d rectangles covering %d of %d foreground pixels",
                strategy.value, len(rect_set), rect_set.area, foreground)
    return rect_set
