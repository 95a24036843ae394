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
Nodes and entries of an R-tree.

The data model is given by the following specifications:
  1. There are 2 types of nodes, fixed at creation:
         a. leaf nodes whose items are the stored objects.
         a. internal nodes whose items are entries.
  1. An entry pairs a bounding rectangle with the child node it describes.
     The rectangle is updated in place, the child never changes.
  1. Each node but the root keeps a weak reference to its parent. Ownership
     flows from the root down to the children only.
  1. Stored objects are never owned by the tree: leaves only reference them.

No balancing policy lives here, see :mod:`rindex.tree`.
'''
import collections
import weakref

import toolz

from .envelope import Rect


class Node():
    """
    Base class for R-tree nodes.

    Attributes
    ----------
    items: list
        Stored objects for a leaf, entries for an internal node.
    isleaf: boolean
        Class-level flag telling the two kinds of node apart.
    """
    __slots__ = ["items", "_parent", "__weakref__"]
    isleaf = False

    def __init__(self, items=None):
        self.items = []
        self._parent = None
        for item in items or ():
            self.append(item)

    @property
    def parent(self):
        '''The parent node, or None for a root.'''
        if self._parent is None:
            return None
        return self._parent()

    @parent.setter
    def parent(self, node):
        self._parent = None if node is None else weakref.ref(node)

    @property
    def is_root(self):
        return self.parent is None

    def __len__(self):
        return len(self.items)

    def append(self, item):
        self.items.append(item)

    def item_bounds(self, item):
        '''Bounding rectangle of one of this node's items.'''
        raise NotImplementedError

    def rects(self):
        return [self.item_bounds(item) for item in self.items]

    def bounds(self):
        '''Rectangle enclosing every item, None for an empty node.'''
        if not self.items:
            return None
        return Rect.merge(self.rects())

    def __repr__(self):
        return "<{} with {} items>".format(self.__class__.__name__,
                                           len(self.items))


class LeafNode(Node):
    """Node holding references to stored spatial objects."""
    __slots__ = []
    isleaf = True

    def item_bounds(self, item):
        return item.bounds()

    def children(self):
        return iter(())


class InternalNode(Node):
    """Node holding entries that point to child nodes."""
    __slots__ = []

    def item_bounds(self, item):
        return item.bounds

    def append(self, entry):
        entry.child.parent = self
        self.items.append(entry)

    def children(self):
        return (entry.child for entry in self.items)

    def entry_for(self, child):
        '''The entry pointing to `child`.'''
        for entry in self.items:
            if entry.child is child:
                return entry
        raise LookupError("{!r} is not a child of {!r}".format(child, self))

    def remove_child(self, child):
        self.items.remove(self.entry_for(child))
        child.parent = None


class Entry():
    """Bounding rectangle of a child node, together with that child."""
    __slots__ = ["bounds", "child"]

    def __init__(self, bounds, child):
        self.bounds = bounds
        self.child = child

    @classmethod
    def of(cls, child):
        '''Entry tightly enclosing `child`.'''
        return cls(child.bounds(), child)

    def __repr__(self):
        return "Entry({!r}, {!r})".format(self.bounds, self.child)


def breadth_first_iterator(root):
    '''Breadth-first iterator of the nodes below `root`.'''
    fifo = collections.deque([root])
    while fifo:
        node = fifo.popleft()
        yield node
        fifo.extend(node.children())


def depth_first_iterator(root):
    '''Depth-first iterator of the nodes below `root`.'''
    filo = [root]
    while filo:
        node = filo.pop()
        yield node
        filo.extend(reversed(list(node.children())))


def iter_objects(root):
    '''Every stored object below `root`, leaves visited depth-first.'''
    leaves = filter(lambda n: n.isleaf, depth_first_iterator(root))
    return toolz.concat(leaf.items for leaf in leaves)
