"""
Bidirectional cursors over an AVLMap.

A cursor holds a reference to one node (or None for the end position) and
computes its neighbours on demand from the node's children and its chain of
parent links. No traversal stack is kept between steps.
"""

from typing import TYPE_CHECKING, Any, Iterator, Optional, Tuple

from avlmap.errors import InvalidIteratorError, OutOfRange
from avlmap.node import AVLNode

if TYPE_CHECKING:
    from avlmap.tree import AVLMap


def leftmost(node: Optional[AVLNode]) -> Optional[AVLNode]:
    """Return the node with the smallest key in the subtree (None if empty)."""
    if node is None:
        return None
    while node.left is not None:
        node = node.left
    return node


def rightmost(node: Optional[AVLNode]) -> Optional[AVLNode]:
    """Return the node with the largest key in the subtree (None if empty)."""
    if node is None:
        return None
    while node.right is not None:
        node = node.right
    return node


def successor(node: AVLNode) -> Optional[AVLNode]:
    """Return the node following node in key order, or None at the end."""
    if node.right is not None:
        return leftmost(node.right)
    walk = node.get_parent()
    while walk is not None and not node.key < walk.key:
        walk = walk.get_parent()
    return walk


def predecessor(node: AVLNode) -> Optional[AVLNode]:
    """Return the node preceding node in key order, or None at the start."""
    if node.left is not None:
        return rightmost(node.left)
    walk = node.get_parent()
    while walk is not None and not walk.key < node.key:
        walk = walk.get_parent()
    return walk


class MapIterator:
    """Forward cursor in ascending key order.

    Cursors compare equal when they sit on the same node of the same map,
    or when both are at the end. A cursor is also a Python iterator:
    ``next()`` returns the current (key, value) pair and steps forward, so
    ``for`` consumes it up to the end. Iterate over ``copy()`` to keep the
    position.
    """

    def __init__(self, owner: "AVLMap", node: Optional[AVLNode] = None, readonly: bool = False):
        self._map = owner
        self._node = node
        self._readonly = readonly

    # ------------------ Position ------------------
    @property
    def node(self) -> Optional[AVLNode]:
        return self._validate()

    def at_end(self) -> bool:
        return self._validate() is None

    def _validate(self) -> Optional[AVLNode]:
        node = self._node
        if node is not None and node.is_defunct():
            raise InvalidIteratorError("Iterator refers to a deleted node")
        return node

    # ------------------ Stepping ------------------
    def advance(self) -> "MapIterator":
        """Move to the next key; raises OutOfRange when already at the end."""
        node = self._validate()
        if node is None:
            raise OutOfRange("Iterator out of range")
        self._node = successor(node)
        return self

    def retreat(self) -> "MapIterator":
        """Move to the previous key; from the end, move to the largest key."""
        node = self._validate()
        if node is None:
            previous = rightmost(self._map._root)
        else:
            previous = predecessor(node)
        if previous is None:
            raise OutOfRange("Iterator out of range")
        self._node = previous
        return self

    # ------------------ Dereference ------------------
    def _current(self) -> AVLNode:
        node = self._validate()
        if node is None:
            raise OutOfRange("Cannot dereference the end iterator")
        return node

    @property
    def key(self) -> Any:
        return self._current().key

    @property
    def value(self) -> Any:
        return self._current().value

    @value.setter
    def value(self, value: Any) -> None:
        if self._readonly:
            raise TypeError("Cannot assign through a const iterator")
        self._current().value = value

    def item(self) -> Tuple[Any, Any]:
        node = self._current()
        return node.key, node.value

    # ------------------ Protocol ------------------
    def copy(self) -> "MapIterator":
        return type(self)(self._map, self._node, self._readonly)

    __copy__ = copy

    def __iter__(self) -> Iterator[Tuple[Any, Any]]:
        return self

    def __next__(self) -> Tuple[Any, Any]:
        if self.at_end():
            raise StopIteration
        item = self.item()
        self.advance()
        return item

    def __eq__(self, other):
        if not isinstance(other, MapIterator):
            return NotImplemented
        return self._map is other._map and self._node is other._node

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __repr__(self):
        if self._node is None:
            return f"<{type(self).__name__} at end>"
        return f"<{type(self).__name__} at key={self._node.key!r}>"


class ReverseMapIterator:
    """Descending cursor built on a forward one.

    Like a C++ reverse iterator, it wraps a base position and refers to the
    element just before it: rbegin() wraps end(), rend() wraps begin().
    """

    def __init__(self, base: MapIterator):
        self._base = base

    def base(self) -> MapIterator:
        return self._base.copy()

    def at_end(self) -> bool:
        """True when the wrapped cursor sits on the smallest key (or the map is empty)."""
        start = leftmost(self._base._map._root)
        return self._base._validate() is start

    def advance(self) -> "ReverseMapIterator":
        self._base.retreat()
        return self

    def retreat(self) -> "ReverseMapIterator":
        self._base.advance()
        return self

    def _target(self) -> MapIterator:
        cursor = self._base.copy()
        cursor.retreat()
        return cursor

    @property
    def key(self) -> Any:
        return self._target().key

    @property
    def value(self) -> Any:
        return self._target().value

    @value.setter
    def value(self, value: Any) -> None:
        self._target().value = value

    def item(self) -> Tuple[Any, Any]:
        return self._target().item()

    def copy(self) -> "ReverseMapIterator":
        return ReverseMapIterator(self._base.copy())

    __copy__ = copy

    def __iter__(self) -> Iterator[Tuple[Any, Any]]:
        return self

    def __next__(self) -> Tuple[Any, Any]:
        if self.at_end():
            raise StopIteration
        item = self.item()
        self.advance()
        return item

    def __eq__(self, other):
        if not isinstance(other, ReverseMapIterator):
            return NotImplemented
        return self._base == other._base

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None
