import gc

import pytest

from rindex import Rect
from rindex.node import (
    Entry, InternalNode, LeafNode, breadth_first_iterator,
    depth_first_iterator, iter_objects)


@pytest.fixture
def small_tree():
    """Root with two leaves holding two rectangles each."""
    a, b, c, d = [Rect.around(p) for p in [(0, 0), (1, 0), (5, 5), (6, 5)]]
    left = LeafNode([a, b])
    right = LeafNode([c, d])
    root = InternalNode([Entry.of(left), Entry.of(right)])
    return root, left, right, [a, b, c, d]


def test_node_kind():
    assert LeafNode().isleaf
    assert not InternalNode().isleaf


def test_empty_node_bounds():
    assert LeafNode().bounds() is None
    assert len(LeafNode()) == 0


def test_entry_of(small_tree):
    root, left, right, _ = small_tree
    assert root.items[0].bounds == Rect((0, 0), (1, 0))
    assert root.items[1].bounds == Rect((5, 5), (6, 5))
    assert root.bounds() == Rect((0, 0), (6, 5))


def test_parent_links(small_tree):
    root, left, right, _ = small_tree
    assert root.is_root
    assert left.parent is root
    assert right.parent is root
    assert not left.is_root
    assert root.entry_for(right).child is right


def test_parent_link_is_weak():
    leaf = LeafNode([Rect.around((0, 0))])
    root = InternalNode([Entry.of(leaf)])
    assert leaf.parent is root
    del root
    gc.collect()
    assert leaf.parent is None


def test_remove_child(small_tree):
    root, left, right, _ = small_tree
    root.remove_child(left)
    assert len(root) == 1
    assert left.parent is None
    with pytest.raises(LookupError):
        root.entry_for(left)


def test_iterators(small_tree):
    root, left, right, rects = small_tree
    assert list(depth_first_iterator(root)) == [root, left, right]
    assert list(breadth_first_iterator(root)) == [root, left, right]
    assert list(iter_objects(root)) == rects
    assert list(iter_objects(LeafNode())) == []


def test_leaf_built_from_items():
    rects = [Rect.around((0, 0)), Rect.around((1, 1))]
    leaf = LeafNode(rects)
    assert leaf.items == rects
    assert leaf.is_root
    assert leaf.bounds() == Rect((0, 0), (1, 1))
