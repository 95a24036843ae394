# Copyright (C) 2018 DataStorm
#
# This file is part of RIndex.
#
# RIndex is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# RIndex is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# A copy of the GNU General Public License is available in the LICENSE
# file or at <http://www.gnu.org/licenses/>.
'''
Dynamic R-tree.

Insertion and deletion are implemented per Sections 3.2 and 3.3 of "R-trees:
A Dynamic Index Structure for Spatial Searching" by A. Guttman, Proceedings of
ACM SIGMOD, p. 47-57, 1984.

Levels are counted from the bottom: leaves are at level 0 and the root is at
level ``height - 1``. Counting from the bottom keeps the level of a detached
subtree valid while the tree above it grows during reinsertion.
'''
import logging
import numbers

from .envelope import Rect
from .errors import DimensionMismatch, InvalidConfiguration
from .node import Entry, InternalNode, LeafNode, iter_objects
from .spatial import Spatial
from .split import quadratic_split

logger = logging.getLogger(__name__)


def least_enlargement(entries, rect):
    """
    Entry needing the least enlargement to enclose `rect`.

    Ties are broken by the smaller entry, then by the first one encountered.
    """
    chosen = None
    for entry in entries:
        diff = entry.bounds.enlargement(rect)
        area = entry.bounds.size()
        if chosen is None or diff < min_diff \
                or (diff == min_diff and area < min_area):
            chosen, min_diff, min_area = entry, diff, area
    return chosen


class RTree():
    """
    R-tree storing spatial objects, that is objects with a ``bounds()`` method
    returning a :class:`rindex.envelope.Rect`.

    The tree is a sequential structure: callers sharing one between threads
    must hold a lock around every mutation.

    Args:
        dim (int): number of spatial dimensions.
        min_children (int): minimum branching factor of non-root nodes.
        max_children (int): maximum branching factor, at least twice
            `min_children`.

    Raises:
        InvalidConfiguration: if the branching factors cannot guarantee that a
            split yields two valid nodes.
    """
    def __init__(self, dim, min_children=8, max_children=16):
        for name, value in (("dim", dim), ("min_children", min_children),
                            ("max_children", max_children)):
            if not isinstance(value, numbers.Integral) \
                    or isinstance(value, bool):
                raise InvalidConfiguration(
                    "{} must be an integer, got {!r}".format(name, value))
        if dim < 1:
            raise InvalidConfiguration(
                "dim must be positive, got {}".format(dim))
        if min_children < 1:
            raise InvalidConfiguration(
                "min_children must be positive, got {}".format(min_children))
        if max_children < 2 * min_children:
            raise InvalidConfiguration(
                "max_children must be at least 2 * min_children, got "
                "min_children={} and max_children={}"
                .format(min_children, max_children))
        self._dim = int(dim)
        self._min_children = int(min_children)
        self._max_children = int(max_children)
        self._root = LeafNode()
        self._height = 1
        self._size = 0

    @classmethod
    def from_objects(cls, dim, objects, **kwargs):
        '''New tree holding `objects`, inserted one at a time in order.'''
        tree = cls(dim, **kwargs)
        for obj in objects:
            tree.insert(obj)
        return tree

    @property
    def dim(self):
        return self._dim

    @property
    def min_children(self):
        return self._min_children

    @property
    def max_children(self):
        return self._max_children

    @property
    def root(self):
        return self._root

    @property
    def height(self):
        """Number of levels, 1 for a tree made of a single leaf."""
        return self._height

    depth = height

    @property
    def is_empty(self):
        return self._size == 0

    def size(self):
        """Number of objects stored in the tree."""
        return self._size

    def __len__(self):
        return self._size

    def __iter__(self):
        return iter_objects(self._root)

    def __contains__(self, obj):
        return self._find_leaf(self._root, obj, self._bounds_of(obj)) \
            is not None

    def __repr__(self):
        return "<{}(dim={}, min_children={}, max_children={}) size={} " \
               "height={}>".format(self.__class__.__name__, self._dim,
                                   self._min_children, self._max_children,
                                   self._size, self._height)

    def _bounds_of(self, obj):
        if not isinstance(obj, Spatial):
            raise TypeError(
                "{!r} has no bounds() method".format(type(obj)))
        rect = obj.bounds()
        if not isinstance(rect, Rect):
            raise TypeError(
                "bounds() must return a Rect, got {!r}".format(type(rect)))
        if rect.ndims != self._dim:
            raise DimensionMismatch(self._dim, rect.ndims)
        return rect

    # ===========================  Insertion  ================================

    def insert(self, obj):
        """
        Inserts the spatial object `obj` into the tree.

        Overflowing nodes are split and the tree is rebalanced automatically.

        Raises:
            DimensionMismatch: if `obj` does not have the tree's dimensions.
                The tree is left unchanged.
        """
        rect = self._bounds_of(obj)
        self._insert(obj, rect, level=0)
        self._size += 1

    def _insert(self, item, rect, level):
        # `item` is an object for level 0, an entry for higher levels.
        node = self._choose_node(self._root, rect, self._height - 1, level)
        node.append(item)
        split = None
        if len(node) > self._max_children:
            split = self._split(node)
        self._adjust_tree(node, split)

    def _choose_node(self, node, rect, node_level, level):
        """Descends from `node` to the node at `level` best suited for `rect`."""
        if node_level == level:
            return node
        chosen = least_enlargement(node.items, rect)
        return self._choose_node(chosen.child, rect, node_level - 1, level)

    def _split(self, node):
        """
        Splits the overflowing `node` in two.

        `node` keeps the first group, so that the entry pointing to it stays
        valid, and the new sibling holding the second group is returned.
        """
        left, right = quadratic_split(
            node.rects(), self._min_children, self._max_children)
        items = node.items
        node.items = []
        for idx in left:
            node.append(items[idx])
        sibling = type(node)(items[idx] for idx in right)
        logger.debug("Split %s into groups of %d and %d items",
                     type(node).__name__, len(node), len(sibling))
        return sibling

    def _adjust_tree(self, node, split=None):
        """
        Ascends from `node` to the root, tightening bounding rectangles and
        propagating the split sibling `split` upwards.
        """
        while not node.is_root:
            parent = node.parent
            parent.entry_for(node).bounds = node.bounds()
            if split is not None:
                parent.append(Entry.of(split))
                if len(parent) > self._max_children:
                    split = self._split(parent)
                else:
                    split = None
            node = parent
        if split is not None:
            self._grow(node, split)

    def _grow(self, root, sibling):
        self._root = InternalNode([Entry.of(root), Entry.of(sibling)])
        self._height += 1
        logger.debug("Root split, tree height is now %d", self._height)

    # ===========================  Deletion  =================================

    def delete(self, obj):
        """
        Removes one occurrence of `obj` from the tree.

        Objects are matched with ``==``, which is identity for objects not
        defining equality.

        Returns:
            bool: True if `obj` was found and removed, False otherwise.

        Raises:
            DimensionMismatch: if `obj` does not have the tree's dimensions.
                The tree is left unchanged.
        """
        rect = self._bounds_of(obj)
        leaf = self._find_leaf(self._root, obj, rect)
        if leaf is None:
            return False
        leaf.items.remove(obj)
        self._condense_tree(leaf)
        self._size -= 1
        self._shorten()
        return True

    def _find_leaf(self, node, obj, rect):
        """
        Leaf below `node` holding `obj`, or None.

        Bounding rectangles of siblings may overlap, so every branch whose
        rectangle meets `rect` is searched.
        """
        if node.isleaf:
            return node if obj in node.items else None
        for entry in node.items:
            if entry.bounds.intersects(rect):
                leaf = self._find_leaf(entry.child, obj, rect)
                if leaf is not None:
                    return leaf
        return None

    def _condense_tree(self, node):
        """
        Ascends from the leaf `node` to the root, removing underflowing nodes
        and tightening bounding rectangles, then reinserts the items of the
        removed nodes at their original level.
        """
        orphans = []
        level = 0
        while not node.is_root:
            parent = node.parent
            if len(node) < self._min_children:
                parent.remove_child(node)
                orphans.extend((level, item) for item in node.items)
            else:
                parent.entry_for(node).bounds = node.bounds()
            node = parent
            level += 1

        if orphans:
            logger.debug("Reinserting %d orphaned items", len(orphans))
        for level, item in orphans:
            if level == 0:
                self._insert(item, item.bounds(), level)
            else:
                self._insert(item, item.bounds, level)

    def _shorten(self):
        """Replaces an internal root having a single child by that child."""
        while not self._root.isleaf and len(self._root) == 1:
            child = self._root.items[0].child
            child.parent = None
            self._root = child
            self._height -= 1
            logger.debug("Root collapsed, tree height is now %d",
                         self._height)
