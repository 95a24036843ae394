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
Quadratic-cost node splitting.

Implemented per Section 3.5.2 of "R-trees: A Dynamic Index Structure for
Spatial Searching" by A. Guttman, Proceedings of ACM SIGMOD, p. 47-57, 1984.

The functions work on plain lists of rectangles and return positions in those
lists, so that they apply to leaves (objects) and internal nodes (entries)
alike.
'''
import itertools
import math


class Group():
    """One side of a split: member positions and their enclosing rectangle."""
    __slots__ = ["members", "rect"]

    def __init__(self, idx, rect):
        self.members = [idx]
        self.rect = rect

    def add(self, idx, rect):
        self.members.append(idx)
        self.rect = self.rect.union(rect)

    def __len__(self):
        return len(self.members)


def pick_seeds(rects):
    """
    Chooses the two rectangles that would waste the most space if grouped.

    Returns:
        tuple: positions (i, j), i < j, in `rects`.
    """
    max_waste = -math.inf
    seeds = None
    for i, j in itertools.combinations(range(len(rects)), 2):
        waste = (rects[i].union(rects[j]).size()
                 - rects[i].size() - rects[j].size())
        if waste > max_waste:
            max_waste = waste
            seeds = (i, j)
    return seeds


def pick_next(left, right, rects, remaining):
    """
    Chooses, among the `remaining` positions, the rectangle with the greatest
    preference for one group over the other.

    Ties go to the first position in `remaining`.
    """
    max_diff = -math.inf
    chosen = None
    for idx in remaining:
        d1 = left.rect.enlargement(rects[idx])
        d2 = right.rect.enlargement(rects[idx])
        diff = abs(d1 - d2)
        if diff > max_diff:
            max_diff = diff
            chosen = idx
    return chosen


def _choose_group(left, right, rect):
    d1 = left.rect.enlargement(rect)
    d2 = right.rect.enlargement(rect)
    if d1 != d2:
        return left if d1 < d2 else right
    s1, s2 = left.rect.size(), right.rect.size()
    if s1 != s2:
        return left if s1 < s2 else right
    if len(left) != len(right):
        return left if len(left) < len(right) else right
    return left


def quadratic_split(rects, min_children, max_children):
    """
    Partitions `rects` into two groups of at least `min_children` and at most
    `max_children` members, trying to minimise the total area of the groups.

    Args:
        rects (list of Rect): bounding rectangles of an overflowing node's
            items, at least 2 of them.
        min_children (int): lower bound on each group's size.
        max_children (int): upper bound on each group's size.

    Returns:
        tuple: two lists of positions in `rects`.
    """
    if len(rects) < 2:
        raise ValueError("Cannot split fewer than 2 items")
    i, j = pick_seeds(rects)
    left = Group(i, rects[i])
    right = Group(j, rects[j])
    remaining = [k for k in range(len(rects)) if k not in (i, j)]

    while remaining:
        # Forced assignment: a group needs every remaining item to reach the
        # lower bound, or the other group is full.
        if len(left) + len(remaining) <= min_children \
                or len(right) >= max_children:
            forced = left
        elif len(right) + len(remaining) <= min_children \
                or len(left) >= max_children:
            forced = right
        else:
            forced = None
        if forced is not None:
            for k in remaining:
                forced.add(k, rects[k])
            break

        k = pick_next(left, right, rects, remaining)
        remaining.remove(k)
        _choose_group(left, right, rects[k]).add(k, rects[k])

    return left.members, right.members
