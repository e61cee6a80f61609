"""Tests for the greedy maximal rectangle extractor."""

import numpy as np
import pytest

from rectcover.bitmap import Bitmap
from rectcover.maxrect.extractor import MaximalRectangleExtractor, find_maximal_rectangle
from rectcover.model import Rectangle


def largest_area_brute_force(cells: np.ndarray) -> int:
    height, width = cells.shape
    best = 0
    for y0 in range(height):
        for x0 in range(width):
            for y1 in range(y0 + 1, height + 1):
                for x1 in range(x0 + 1, width + 1):
                    if cells[y0:y1, x0:x1].all():
                        best = max(best, (y1 - y0) * (x1 - x0))
    return best


def random_bitmap(rng: np.random.Generator, width: int, height: int, density: float) -> Bitmap:
    return Bitmap(rng.random((height, width)) < density)


class TestScenarios:

    def test_all_foreground(self):
        bitmap = Bitmap(np.ones((4, 4), dtype=np.bool_))
        rect_set = MaximalRectangleExtractor().extract(bitmap)
        assert rect_set.rectangles == [Rectangle(0, 0, 4, 4)]

    def test_top_left_block(self):
        bitmap = Bitmap.from_rows([
            "##..",
            "##..",
            "....",
            "....",
        ])
        rect_set = MaximalRectangleExtractor().extract(bitmap)
        assert rect_set.rectangles == [Rectangle(0, 0, 2, 2)]

    def test_checkerboard_order(self):
        bitmap = Bitmap.from_rows([
            "#.",
            ".#",
        ])
        rect_set = MaximalRectangleExtractor().extract(bitmap)
        assert rect_set.rectangles == [Rectangle(0, 0, 1, 1), Rectangle(1, 1, 1, 1)]

    def test_all_background(self):
        rect_set = MaximalRectangleExtractor().extract(Bitmap.blank(4, 4))
        assert len(rect_set) == 0

    def test_bounding_box_is_bitmap_bounds(self):
        rect_set = MaximalRectangleExtractor().extract(Bitmap.blank(5, 3))
        assert (rect_set.bounding_box.width, rect_set.bounding_box.height) == (5, 3)


class TestSingleStep:

    def test_finds_largest(self):
        bitmap = Bitmap.from_rows([
            "#....",
            "#.###",
            "..###",
            "#####",
        ])
        area, rect = find_maximal_rectangle(bitmap)
        assert area == 9
        assert rect == Rectangle(2, 1, 3, 3)

    def test_wide_and_tall_bars(self):
        bitmap = Bitmap.from_rows([
            ".#..",
            ".#..",
            ".#..",
            "####",
        ])
        area, rect = find_maximal_rectangle(bitmap)
        assert area == 4
        # the column is found before the bottom row closes
        assert rect == Rectangle(1, 0, 1, 4)

    def test_first_found_wins_ties(self):
        bitmap = Bitmap.from_rows([
            "##.##",
            "##.##",
        ])
        area, rect = find_maximal_rectangle(bitmap)
        assert area == 4
        assert rect == Rectangle(0, 0, 2, 2)

    def test_empty(self):
        assert find_maximal_rectangle(Bitmap.blank(3, 3)) == (0, None)

    def test_does_not_mutate(self):
        bitmap = Bitmap(np.ones((3, 3)))
        find_maximal_rectangle(bitmap)
        assert bitmap.count() == 9

    @pytest.mark.parametrize("seed", range(10))
    def test_matches_brute_force(self, seed):
        rng = np.random.default_rng(seed)
        bitmap = random_bitmap(rng, 6, 5, 0.7)
        area, rect = find_maximal_rectangle(bitmap)
        assert area == largest_area_brute_force(bitmap.cells)
        if rect is not None:
            assert rect.area == area
            assert bitmap.count(rect) == area


class TestExtraction:

    @pytest.mark.parametrize("seed", range(20))
    def test_exact_cover(self, seed, assert_exact_cover):
        rng = np.random.default_rng(seed)
        bitmap = random_bitmap(rng, int(rng.integers(2, 17)), int(rng.integers(2, 17)), rng.random())
        foreground = bitmap.foreground_cells()
        rect_set = MaximalRectangleExtractor().extract(bitmap)
        assert_exact_cover(rect_set, foreground)
        assert bitmap.is_empty()

    @pytest.mark.parametrize("seed", range(8))
    def test_each_step_is_maximal(self, seed):
        rng = np.random.default_rng(100 + seed)
        bitmap = random_bitmap(rng, 5, 5, 0.6)
        current = bitmap.copy()
        for rect in MaximalRectangleExtractor().iter_extract(bitmap):
            assert current.count(rect) == rect.area
            assert rect.area == largest_area_brute_force(current.cells)
            current.clear(rect)

    def test_terminates_within_pixel_count(self):
        checkerboard = (np.indices((6, 6)).sum(axis=0) % 2) == 0
        bitmap = Bitmap(checkerboard)
        rect_set = MaximalRectangleExtractor().extract(bitmap)
        assert len(rect_set) == 18
        assert len(rect_set) <= bitmap.width * bitmap.height
        assert all(rect.area == 1 for rect in rect_set)

    def test_areas_never_increase(self):
        rng = np.random.default_rng(7)
        rect_set = MaximalRectangleExtractor().extract(random_bitmap(rng, 12, 12, 0.8))
        areas = [rect.area for rect in rect_set]
        assert areas == sorted(areas, reverse=True)

    def test_consumes_bitmap(self):
        bitmap = Bitmap(np.ones((2, 3)))
        MaximalRectangleExtractor().extract(bitmap)
        assert bitmap.is_empty()
        assert bitmap.shape == (2, 3)

    def test_preserve_leaves_bitmap(self):
        bitmap = Bitmap(np.ones((2, 3)))
        rect_set = MaximalRectangleExtractor().extract(bitmap, preserve=True)
        assert rect_set.rectangles == [Rectangle(0, 0, 3, 2)]
        assert bitmap.count() == 6

    def test_reproducible(self):
        rng = np.random.default_rng(3)
        bitmap = random_bitmap(rng, 10, 8, 0.5)
        first = MaximalRectangleExtractor().extract(bitmap, preserve=True)
        second = MaximalRectangleExtractor().extract(bitmap, preserve=True)
        assert first == second

    def test_max_rectangles(self):
        bitmap = Bitmap.from_rows([
            "#.#.",
            "....",
            "#.#.",
        ])
        rect_set = MaximalRectangleExtractor(max_rectangles=2).extract(bitmap)
        assert rect_set.rectangles == [Rectangle(0, 0, 1, 1), Rectangle(2, 0, 1, 1)]
        assert bitmap.count() == 2
