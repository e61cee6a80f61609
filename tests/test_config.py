"""Tests for configuration and the exception hierarchy."""

import pytest

from rectcover.bitmap import Bitmap
from rectcover.config import PipelineConfig, Strategy, SvgConfig, SvgStyle
from rectcover.decompose import decompose
from rectcover.exceptions import ConfigurationError, ImageLoadError, RectCoverError
from rectcover.model import Rectangle


class TestPipelineConfig:

    def test_defaults_are_valid(self):
        config = PipelineConfig().validate()
        assert config.threshold == 127
        assert config.strategy == Strategy.MAXRECT
        assert config.max_rectangles is None

    @pytest.mark.parametrize("kwargs,key", [
        ({"threshold": 256}, "threshold"),
        ({"fps": 0.01}, "fps"),
        ({"max_rectangles": 0}, "max_rectangles"),
        ({"max_rectangles": 5, "strategy": Strategy.QUADTREE}, "max_rectangles"),
    ])
    def test_invalid(self, kwargs, key):
        with pytest.raises(ConfigurationError) as exc_info:
            PipelineConfig(**kwargs).validate()
        assert exc_info.value.config_key == key
        assert exc_info.value.error_code == "CONFIG_ERROR"

    def test_enums_from_strings(self):
        assert Strategy("quadtree") == Strategy.QUADTREE
        assert SvgStyle("holes") == SvgStyle.HOLES
        assert SvgConfig().style == SvgStyle.FLAT


class TestExceptions:

    def test_hierarchy(self):
        assert issubclass(ConfigurationError, RectCoverError)
        assert issubclass(ImageLoadError, RectCoverError)

    def test_image_path_in_message(self):
        assert str(ImageLoadError("boom", image_path="a.png")) == "[IMAGE_ERROR] boom (image: a.png)"


class TestDecompose:

    def test_strategies_agree_on_block(self):
        rows = ["##..", "##..", "....", "...."]
        for strategy in Strategy:
            rect_set = decompose(Bitmap.from_rows(rows), strategy)
            assert rect_set.rectangles == [Rectangle(0, 0, 2, 2)]

    def test_quadtree_ignores_max_rectangles(self, caplog):
        bitmap = Bitmap.from_rows(["##", "##"])
        rect_set = decompose(bitmap, Strategy.QUADTREE, max_rectangles=1)
        assert len(rect_set) == 4
        assert "ignored" in caplog.text

    def test_preserve(self):
        bitmap = Bitmap.from_rows(["##", "##"])
        decompose(bitmap, "maxrect", preserve=True)
        assert bitmap.count() == 4
        decompose(bitmap, Strategy.MAXRECT)
        assert bitmap.is_empty()
