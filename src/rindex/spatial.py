"""
The capability shared by every object that can be stored in an R-tree.
"""
import abc


class Spatial(abc.ABC):
    """
    Anything that can report its own bounding region.

    Subclassing is optional: any object with a callable ``bounds`` attribute
    is considered spatial, the same way ``collections.abc`` checks protocols.
    """
    __slots__ = ()

    @abc.abstractmethod
    def bounds(self):
        """Returns the :class:`rindex.envelope.Rect` enclosing `self`."""
        pass

    @classmethod
    def __subclasshook__(cls, other):
        if cls is Spatial:
            if any(callable(vars(klass).get("bounds")) for klass in other.__mro__):
                return True
        return NotImplemented
