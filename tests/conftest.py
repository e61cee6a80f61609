"""Shared pytest fixtures."""

import pytest


def _assert_exact_disjoint_cover(rectangles, foreground):
    covered = set()
    for rect in rectangles:
        cells = set(rect.cells())
        assert not cells & covered, f"{rect} overlaps an earlier rectangle"
        covered |= cells
    assert covered == foreground


@pytest.fixture
def assert_exact_cover():
    """Checks that rectangles are pairwise disjoint and their union is exactly the foreground cells."""
    return _assert_exact_disjoint_cover
