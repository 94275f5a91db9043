"""Ordered key/value map backed by an AVL tree."""

from avlmap.errors import (AVLMapError, InvalidIteratorError, InvariantError,
                           NotFound, OutOfRange)
from avlmap.iterator import MapIterator, ReverseMapIterator
from avlmap.node import AVLNode, CountingAllocator, NodeAllocator
from avlmap.tree import AVLMap

__all__ = [
    "AVLMap",
    "AVLMapError",
    "AVLNode",
    "CountingAllocator",
    "InvalidIteratorError",
    "InvariantError",
    "MapIterator",
    "NodeAllocator",
    "NotFound",
    "OutOfRange",
    "ReverseMapIterator",
]

__version__ = "0.1.0"
