import io
import logging
import sys
from dataclasses import dataclass
from typing import BinaryIO, Optional

import numpy as np
from PIL import Image, UnidentifiedImageError

from rectcover.bitmap import Bitmap
from rectcover.config import DEFAULT_THRESHOLD, MAX_GRAY
from rectcover.exceptions import ConfigurationError, ImageLoadError

logger = logging.getLogger(__name__)

STDIO = "-"


@dataclass
class IntermediateImages:
    """Optional PNG paths where each stage of the binarization is written for inspection."""
    verify: Optional[str] = None
    negative: Optional[str] = None
    grayscale: Optional[str] = None
    monochrome: Optional[str] = None


def load_rgba(src: str | BinaryIO | None) -> np.ndarray:
    """Decodes a PNG, GIF or JPEG image into an (height, width, 4) uint8 RGBA array.
       `-`, an empty string or None read the image from stdin.
    """
    if src is None or src == "" or src == STDIO:
        name = "<stdin>"
        src = io.BytesIO(sys.stdin.buffer.read())
    else:
        name = src if isinstance(src, str) else "<stream>"
    try:
        with Image.open(src) as im:
            logger.info("read '%s' as a '%s' image with mode '%s' and size %dx%d",
                        name, im.format, im.mode, im.width, im.height)
            return np.array(im.convert("RGBA"))
    except (UnidentifiedImageError, OSError) as e:
        raise ImageLoadError(f"cannot decode image: {e}", image_path=name) from e


def negate(rgba: np.ndarray) -> np.ndarray:
    """Inverts the color channels, alpha is kept as is."""
    res = np.copy(rgba)
    res[..., :3] = MAX_GRAY - rgba[..., :3]
    return res


def to_grayscale(rgba: np.ndarray) -> np.ndarray:
    """Reduces RGBA to 8 bit luma; colors are weighted by alpha first, so transparent pixels are black."""
    alpha = rgba[..., 3:4].astype(np.uint32)
    premultiplied = (rgba[..., :3].astype(np.uint32) * alpha + MAX_GRAY // 2) // MAX_GRAY
    return np.array(Image.fromarray(premultiplied.astype(np.uint8)).convert("L"))


def binarize(gray: np.ndarray, threshold: int = DEFAULT_THRESHOLD) -> np.ndarray:
    if not 0 <= threshold <= MAX_GRAY:
        raise ConfigurationError(f"the monochrome threshold must be in [0, {MAX_GRAY}] inclusive",
                                 config_key="threshold")
    return gray > threshold


def bitmap_from_image(src: str | BinaryIO | None, threshold: int = DEFAULT_THRESHOLD, invert: bool = False,
                      intermediates: IntermediateImages | None = None) -> Bitmap:
    """Decodes src and binarizes it: optional negation, grayscale, then `gray > threshold` is foreground."""
    intermediates = intermediates if intermediates is not None else IntermediateImages()
    if intermediates.negative and not invert:
        raise ConfigurationError("a negative image was requested, but color inversion was not",
                                 config_key="negative")

    rgba = load_rgba(src)
    save_png(rgba, intermediates.verify)

    if invert:
        rgba = negate(rgba)
        save_png(rgba, intermediates.negative)

    gray = to_grayscale(rgba)
    save_png(gray, intermediates.grayscale)

    mono = binarize(gray, threshold)
    save_png(mono.astype(np.uint8) * MAX_GRAY, intermediates.monochrome)

    bitmap = Bitmap(mono)
    logger.info("binarized with threshold %d: %d of %d pixels are foreground",
                threshold, bitmap.count(), bitmap.width * bitmap.height)
    return bitmap


def bitmap_to_image(bitmap: Bitmap) -> Image.Image:
    return Image.fromarray(bitmap.cells.astype(np.uint8) * MAX_GRAY)


def save_png(arr: np.ndarray, path: Optional[str]):
    if not path:
        return
    try:
        Image.fromarray(arr).save(path, format="PNG")
    except OSError as e:
        raise ImageLoadError(f"cannot write image: {e}", image_path=path) from e
    logger.debug("wrote %s", path)
