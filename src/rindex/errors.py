"""
Exceptions raised by rindex.
"""


class RIndexError(Exception):
    """Base class for errors raised by this package."""


class DimensionMismatch(RIndexError, ValueError):
    """
    Raised when a region's dimensionality differs from the expected one.

    Attributes:
        expected (int): dimensionality required by the operation.
        got (int): dimensionality that was given.
    """
    def __init__(self, expected, got):
        self.expected = expected
        self.got = got
        super().__init__(
            "Incompatible number of dimensions: expected {}, got {}."
            .format(expected, got)
        )


class InvalidConfiguration(RIndexError, ValueError):
    """Raised when a tree is constructed with unusable parameters."""
