"""
Axis-aligned bounding regions.

An R-tree describes every subtree by the smallest axis-aligned box enclosing
everything below it. This module implements such boxes in any number of
dimensions on top of numpy arrays.
"""
import numpy

from .errors import DimensionMismatch
from .spatial import Spatial


class Rect(Spatial):
    """
    Axis-aligned minimum bounding rectangle in `ndims` dimensions.

    Intervals are closed: a degenerate rectangle (zero length along some
    dimension) is valid and encloses a point, a segment, etc.

    Args:
        mins: lower corner, one coordinate per dimension.
        maxs: upper corner, one coordinate per dimension.

    Attributes:
        mins (1d-float-array): read-only lower corner.
        maxs (1d-float-array): read-only upper corner.
    """
    __slots__ = ("mins", "maxs")

    def __init__(self, mins, maxs):
        mins = numpy.array(mins, dtype=float).reshape(-1)
        maxs = numpy.array(maxs, dtype=float).reshape(-1)
        if mins.shape != maxs.shape:
            raise ValueError("Mins and maxs must be of same shape")
        if len(mins) == 0:
            raise ValueError("A rectangle needs at least one dimension")
        if (mins > maxs).any():
            raise ValueError(
                "Mins must not exceed maxs, got mins={} and maxs={}"
                .format(mins.tolist(), maxs.tolist())
            )
        mins.setflags(write=False)
        maxs.setflags(write=False)
        self.mins = mins
        self.maxs = maxs

    @classmethod
    def from_point(cls, point, lengths):
        """
        Rectangle with lower corner `point` and side `lengths`.

        Lengths must be non-negative; zero gives a degenerate side.
        """
        point = numpy.array(point, dtype=float)
        lengths = numpy.array(lengths, dtype=float)
        if point.shape != lengths.shape:
            raise DimensionMismatch(len(point), len(lengths))
        if (lengths < 0).any():
            raise ValueError(
                "Side lengths must be non-negative, got {}"
                .format(lengths.tolist())
            )
        return cls(point, point + lengths)

    @classmethod
    def around(cls, point, tol=0.):
        """Rectangle of half-width `tol` centered on `point`."""
        point = numpy.array(point, dtype=float)
        return cls(point - tol, point + tol)

    @staticmethod
    def merge(collection):
        """Returns the smallest rectangle enclosing every rectangle given."""
        rects = list(collection)
        if not rects:
            raise ValueError("Cannot merge an empty collection of rectangles")
        ndims = rects[0].ndims
        for r in rects[1:]:
            if r.ndims != ndims:
                raise DimensionMismatch(ndims, r.ndims)
        return Rect(
            numpy.min([r.mins for r in rects], axis=0),
            numpy.max([r.maxs for r in rects], axis=0),
        )

    @property
    def ndims(self):
        return len(self.mins)

    @property
    def lengths(self):
        return self.maxs - self.mins

    def bounds(self):
        return self

    def check_dims(self, other):
        if self.ndims != other.ndims:
            raise DimensionMismatch(self.ndims, other.ndims)

    def size(self):
        """Hyper-volume: area in 2d, volume in 3d."""
        return float(numpy.prod(self.lengths))

    def union(self, other):
        self.check_dims(other)
        return Rect(numpy.minimum(self.mins, other.mins),
                    numpy.maximum(self.maxs, other.maxs))

    def enlargement(self, other):
        """Increase in size needed for `self` to also enclose `other`."""
        return self.union(other).size() - self.size()

    def intersects(self, other):
        self.check_dims(other)
        return bool(((self.mins <= other.maxs)
                     & (self.maxs >= other.mins)).all())

    def __eq__(self, other):
        if not isinstance(other, Rect):
            return NotImplemented
        return (numpy.array_equal(self.mins, other.mins)
                and numpy.array_equal(self.maxs, other.maxs))

    def __hash__(self):
        return hash((tuple(self.mins.tolist()), tuple(self.maxs.tolist())))

    def __repr__(self):
        return "Rect(mins={}, maxs={})".format(self.mins.tolist(),
                                               self.maxs.tolist())


# Functional interface over rectangles.

def bounding_box(a, b):
    """Smallest rectangle enclosing both `a` and `b`."""
    return a.union(b)


def size(r):
    return r.size()


def overlaps(a, b):
    return a.intersects(b)
