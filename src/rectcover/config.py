"""Constants and option containers shared by the pipeline stages."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from rectcover.exceptions import ConfigurationError

MIN_BITMAP_SIDE = 2
MAX_GRAY = 255
DEFAULT_THRESHOLD = 127

STROKE_WIDTH = 0.03125
RECT_STYLE = f"fill: rgb(255,255,255); stroke: rgb(0,0,0); stroke-width: {STROKE_WIDTH};"
BACKGROUND_STYLE = f"fill: rgb(0,0,0); stroke: rgb(0,0,0); stroke-width: {STROKE_WIDTH};"

DEFAULT_FPS = 5.0
MIN_FPS = 0.1
MAX_FPS = 100.0

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


class Strategy(str, Enum):
    """Available decomposition strategies."""
    MAXRECT = "maxrect"
    QUADTREE = "quadtree"


class SvgStyle(str, Enum):
    """How rectangles are drawn in the SVG output."""
    FLAT = "flat"
    HOLES = "holes"


@dataclass
class SvgConfig:
    style: SvgStyle = SvgStyle.FLAT
    stroke_width: float = STROKE_WIDTH
    rect_style: str = RECT_STYLE
    background_style: str = BACKGROUND_STYLE


@dataclass
class PipelineConfig:
    """Options for turning a raster image into a rectangle set.

    Attributes:
        threshold: gray level (post negation) above which a pixel is foreground
        invert: negate the image colors before grayscaling
        strategy: which decomposer to run
        center: translate the result so the bounding box is centred at the origin
        fps: approximate animation frames per second
        max_rectangles: stop the extractor after this many rectangles, None for no limit
    """
    threshold: int = DEFAULT_THRESHOLD
    invert: bool = False
    strategy: Strategy = Strategy.MAXRECT
    center: bool = False
    fps: float = DEFAULT_FPS
    max_rectangles: Optional[int] = None

    def validate(self) -> "PipelineConfig":
        if not 0 <= self.threshold <= MAX_GRAY:
            raise ConfigurationError(
                f"the monochrome threshold must be in [0, {MAX_GRAY}] inclusive", config_key="threshold")
        if not MIN_FPS <= self.fps <= MAX_FPS:
            raise ConfigurationError(
                f"the animation fps must be in [{MIN_FPS}, {MAX_FPS}]", config_key="fps")
        if self.max_rectangles is not None and self.max_rectangles < 1:
            raise ConfigurationError("max_rectangles must be positive", config_key="max_rectangles")
        if self.max_rectangles is not None and Strategy(self.strategy) != Strategy.MAXRECT:
            raise ConfigurationError("max_rectangles only applies to the maxrect strategy",
                                     config_key="max_rectangles")
        return self
