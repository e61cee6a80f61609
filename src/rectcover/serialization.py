import logging
from abc import ABC, abstractmethod
from typing import TextIO

from rectcover.config import SvgConfig, SvgStyle
from rectcover.exceptions import OutputWriteError
from rectcover.model import BoundingBox, Number, RectangleSet

logger = logging.getLogger(__name__)

SVG_HEADER = '<?xml version="1.0" standalone="no"?>\n'
SVG_NAMESPACE = "http://www.w3.org/2000/svg"
SVG_FOOTER = "</svg>\n"


def format_number(v: Number) -> str:
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)


class RectangleSetSerializer(ABC):
    @abstractmethod
    def to_string(self, rect_set: RectangleSet) -> str:
        pass

    def serialize(self, rect_set: RectangleSet, output: str | TextIO):
        """Writes rect_set to output, which is either a path or an open text stream (left open)."""
        if isinstance(output, str):
            try:
                with open(output, "w", encoding="utf-8") as f:
                    f.write(self.to_string(rect_set))
            except OSError as e:
                raise OutputWriteError(f"cannot write rectangles: {e}", output_path=output) from e
            logger.info("wrote %d rectangles to %s", len(rect_set), output)
        else:
            output.write(self.to_string(rect_set))


class ReportSerializer(RectangleSetSerializer):
    """Plain text listing: the bounding box line, then `x y width height` per rectangle in set order."""

    def to_string(self, rect_set: RectangleSet) -> str:
        box = rect_set.bounding_box
        lines = [self._line(box.min_x, box.min_y, box.width, box.height)]
        lines.extend(self._line(*rect.as_tuple()) for rect in rect_set)
        return "\n".join(lines) + "\n"

    def _line(self, x: Number, y: Number, width: Number, height: Number) -> str:
        return " ".join(format_number(v) for v in (x, y, width, height))


class SvgSerializer(RectangleSetSerializer):
    def __init__(self, config: SvgConfig | None = None) -> None:
        self.config = config if config is not None else SvgConfig()

    def to_string(self, rect_set: RectangleSet) -> str:
        view_box = rect_set.bounding_box.expand(self.config.stroke_width / 2)

        parts = [SVG_HEADER, self._open_tag(view_box)]
        if self.config.style == SvgStyle.HOLES:
            parts.append(self._rect_element(rect_set.bounding_box.min_x, rect_set.bounding_box.min_y,
                                            rect_set.bounding_box.width, rect_set.bounding_box.height,
                                            self.config.background_style))
        for rect in rect_set:
            parts.append(self._rect_element(rect.x, rect.y, rect.width, rect.height, self.config.rect_style))
        parts.append(SVG_FOOTER)
        return "".join(parts)

    def _open_tag(self, view_box: BoundingBox) -> str:
        x, y = format_number(view_box.min_x), format_number(view_box.min_y)
        w, h = format_number(view_box.width), format_number(view_box.height)
        return f'<svg xmlns="{SVG_NAMESPACE}" version="1.1" viewBox="{x} {y} {w} {h}">\n'

    def _rect_element(self, x: Number, y: Number, width: Number, height: Number, style: str) -> str:
        return (f'  <rect x="{format_number(x)}" y="{format_number(y)}" '
                f'width="{format_number(width)}" height="{format_number(height)}" style="{style}"/>\n')


def rectangle_report(rect_set: RectangleSet) -> str:
    return ReportSerializer().to_string(rect_set)


def rectangle_svg(rect_set: RectangleSet, style: SvgStyle = SvgStyle.FLAT) -> str:
    return SvgSerializer(SvgConfig(style=style)).to_string(rect_set)
