"""
Dynamic spatial indexing with R-trees.

An R-tree is a balanced tree storing objects positioned by axis-aligned
bounding rectangles, in any number of dimensions. Objects can be inserted and
deleted one at a time; the tree rebalances itself by splitting overflowing
nodes and condensing underflowing ones, following Guttman's original
algorithms with the quadratic split heuristic.

Any object with a ``bounds()`` method returning a :class:`Rect` can be stored.
"""
from .envelope import Rect, bounding_box, overlaps, size  # noqa: F401
from .errors import (  # noqa: F401
    DimensionMismatch, InvalidConfiguration, RIndexError)
from .spatial import Spatial  # noqa: F401
from .tree import RTree  # noqa: F401

__version__ = "0.1.0"
