"""Exceptions raised by the AVL map."""


class AVLMapError(Exception):
    """Base class for every error raised by avlmap."""


class NotFound(AVLMapError, KeyError):
    """The requested key is not present in the map."""

    def __init__(self, key):
        super().__init__(key)
        self.key = key

    def __str__(self):
        return f"Key not found: {self.key!r}"


class OutOfRange(AVLMapError, IndexError):
    """An iterator was stepped past either end, or the end was dereferenced."""


class InvalidIteratorError(AVLMapError, RuntimeError):
    """An iterator refers to a node that is no longer in the tree."""


class InvariantError(AVLMapError, AssertionError):
    """A structural invariant of the tree does not hold."""
