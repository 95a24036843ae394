import itertools

import numpy
import pytest

from rindex import Rect
from rindex.split import Group, pick_next, pick_seeds, quadratic_split


@pytest.fixture
def rects():
    return [
        Rect((0, 0), (1, 1)),
        Rect((10, 10), (11, 11)),
        Rect((0.5, 0.5), (1.5, 1.5)),
        Rect((5, 5), (6, 6)),
    ]


def test_pick_seeds_most_wasteful_pair(rects):
    assert pick_seeds(rects) == (0, 1)
    assert pick_seeds(rects[2:]) == (0, 1)


def test_pick_seeds_nested():
    # A rectangle enclosing another wastes negative space with it.
    rects = [Rect((0, 0), (4, 4)), Rect((1, 1), (2, 2)),
             Rect((2.5, 2.5), (3.5, 3.5))]
    assert pick_seeds(rects) == (1, 2)


def test_pick_next_strongest_preference(rects):
    left = Group(0, rects[0])
    right = Group(1, rects[1])
    assert pick_next(left, right, rects, [2, 3]) == 2
    assert pick_next(left, right, rects, [3, 2]) == 2


def test_quadratic_split(rects):
    left, right = quadratic_split(rects, min_children=2, max_children=4)
    assert sorted(left) == [0, 2]
    assert sorted(right) == [1, 3]


def test_forced_assignment():
    # The last rectangle is closer to the left group but the right group
    # needs it to reach min_children.
    rects = [
        Rect((0, 0), (1, 1)),
        Rect((10, 10), (11, 11)),
        Rect((0.5, 0.5), (1.5, 1.5)),
        Rect((1, 1), (2, 2)),
        Rect((2, 2), (3, 3)),
    ]
    left, right = quadratic_split(rects, min_children=2, max_children=4)
    assert sorted(left) == [0, 2, 3]
    assert sorted(right) == [1, 4]


def test_grid_ties_go_left():
    points = [Rect.around(p) for p in [(0, 0), (1, 0), (0, 1), (1, 1)]]
    left, right = quadratic_split(points, min_children=1, max_children=3)
    assert left == [0, 1]
    assert right == [3, 2]


def test_split_too_few():
    with pytest.raises(ValueError):
        quadratic_split([Rect((0,), (1,))], 1, 2)


@pytest.mark.parametrize("min_children, max_children",
                         [(1, 2), (2, 4), (2, 5), (3, 6), (4, 16)])
def test_split_bounds(min_children, max_children):
    rng = numpy.random.default_rng(42)
    for _ in range(20):
        corners = rng.uniform(0, 10, size=(max_children + 1, 2))
        lengths = rng.uniform(0, 3, size=(max_children + 1, 2))
        rects = [Rect.from_point(c, l) for c, l in zip(corners, lengths)]
        left, right = quadratic_split(rects, min_children, max_children)
        assert sorted(itertools.chain(left, right)) == \
            list(range(len(rects)))
        for group in (left, right):
            assert min_children <= len(group) <= max_children
