import numpy
import pytest

from rindex import Rect


class Thing():
    """Spatial object compared by identity, as most stored objects are."""
    __slots__ = ("name", "rect")

    def __init__(self, name, rect):
        self.name = name
        self.rect = rect

    def bounds(self):
        return self.rect

    def __repr__(self):
        return "Thing({!r})".format(self.name)


def make_point(*coords):
    return Thing(coords, Rect.around(coords))


def assert_valid(tree):
    """Checks every structural invariant of `tree`."""
    root = tree.root
    assert root.parent is None
    assert len(root) <= tree.max_children
    if not root.isleaf:
        assert len(root) >= 2
    objects = []

    def walk(node, level):
        if node is not root:
            assert tree.min_children <= len(node) <= tree.max_children
        if node.isleaf:
            assert level == 0
            objects.extend(node.items)
            return node.bounds()
        assert level > 0
        for entry in node.items:
            assert entry.child.parent is node
            assert entry.bounds == walk(entry.child, level - 1)
        return node.bounds()

    walk(root, tree.height - 1)
    assert len(objects) == tree.size() == len(tree)
    assert sorted(map(id, objects)) == sorted(map(id, tree))


@pytest.fixture
def check_tree():
    return assert_valid


@pytest.fixture
def point():
    return make_point


@pytest.fixture
def random_points():
    def generate(n, dim=2, seed=0):
        rng = numpy.random.default_rng(seed)
        return [make_point(*xs) for xs in rng.uniform(0, 100, size=(n, dim))]
    return generate


@pytest.fixture
def random_boxes():
    def generate(n, dim=3, seed=0):
        rng = numpy.random.default_rng(seed)
        corners = rng.uniform(-50, 50, size=(n, dim))
        lengths = rng.uniform(0, 10, size=(n, dim))
        return [Thing(i, Rect.from_point(c, l))
                for i, (c, l) in enumerate(zip(corners, lengths))]
    return generate
