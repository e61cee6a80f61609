import logging
from typing import BinaryIO

from PIL import Image, ImageDraw

from rectcover.config import DEFAULT_FPS, MAX_FPS, MAX_GRAY, MIN_FPS
from rectcover.exceptions import ConfigurationError, ImageLoadError
from rectcover.model import RectangleSet

logger = logging.getLogger(__name__)

BACKGROUND = 0
FOREGROUND = MAX_GRAY
LOOP_FOREVER = 0


class AnimationBuilder:
    """Replays a decomposition: one background frame, then one frame per rectangle painted in set order.

    Rectangles are expected in bitmap coordinates (not centered).
    """

    def __init__(self, fps: float = DEFAULT_FPS) -> None:
        if not MIN_FPS <= fps <= MAX_FPS:
            raise ConfigurationError(f"the animation fps must be in [{MIN_FPS}, {MAX_FPS}]", config_key="fps")
        self.fps = fps

    @property
    def frame_duration_ms(self) -> int:
        return int(round(1000. / self.fps))

    def build_frames(self, rect_set: RectangleSet) -> list[Image.Image]:
        box = rect_set.bounding_box
        canvas = Image.new("L", (int(box.width), int(box.height)), BACKGROUND)
        draw = ImageDraw.Draw(canvas)
        frames = [canvas.copy()]
        for rect in rect_set:
            # rectangle corners are inclusive for ImageDraw
            draw.rectangle(
                [rect.x - box.min_x, rect.y - box.min_y, rect.max_x - box.min_x - 1, rect.max_y - box.min_y - 1],
                fill=FOREGROUND)
            frames.append(canvas.copy())
        return frames

    def save(self, rect_set: RectangleSet, output: str | BinaryIO):
        frames = self.build_frames(rect_set)
        try:
            frames[0].save(output, format="GIF", save_all=True, append_images=frames[1:],
                           duration=self.frame_duration_ms, loop=LOOP_FOREVER)
        except OSError as e:
            raise ImageLoadError(f"cannot write animation: {e}",
                                 image_path=output if isinstance(output, str) else None) from e
        logger.info("wrote animation with %d frames", len(frames))
