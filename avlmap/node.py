import logging
import weakref
from typing import Any, Optional

logger = logging.getLogger(__name__)


class AVLNode:
    """Storage unit of the tree: a key/value pair plus links and cached height.

    ``left`` and ``right`` are the owning edges. The parent link is a weak
    reference so the only strong references in a tree point downward.
    """
    __slots__ = 'key', 'value', 'left', 'right', 'height', '_parent', '__weakref__'

    def __init__(self, key, value, parent=None):
        self.key = key
        self.value = value
        self.left: Optional["AVLNode"] = None
        self.right: Optional["AVLNode"] = None
        self.height = 1
        self._parent = None
        self.set_parent(parent)

    def get_parent(self) -> Optional["AVLNode"]:
        if self._parent is None:
            return None
        return self._parent()

    def set_parent(self, parent: Optional["AVLNode"]) -> None:
        self._parent = weakref.ref(parent) if parent is not None else None

    def mark_defunct(self) -> None:
        """Detach the node; by convention a defunct node is its own parent."""
        self.left = None
        self.right = None
        self._parent = weakref.ref(self)

    def is_defunct(self) -> bool:
        return self._parent is not None and self._parent() is self

    def __repr__(self):
        return f"AVLNode({self.key!r}, {self.value!r}, height={self.height})"


class NodeAllocator:
    """Creates and destroys nodes on behalf of a map.

    Every node a map owns goes through ``allocate`` and, once removed from
    the tree, through ``release``. Subclass to track node lifetimes or to
    build a custom node class.
    """

    node_class = AVLNode

    def allocate(self, key: Any, value: Any) -> AVLNode:
        """Return a fresh, unlinked node of height 1."""
        return self.node_class(key, value)

    def release(self, node: AVLNode) -> None:
        """Take back a node that is no longer part of any tree."""
        logger.debug("Releasing node with key %r", node.key)
        node.mark_defunct()


class CountingAllocator(NodeAllocator):
    """Allocator that keeps track of how many of its nodes are alive."""

    def __init__(self):
        self.allocated = 0
        self.released = 0

    @property
    def live(self) -> int:
        return self.allocated - self.released

    def allocate(self, key: Any, value: Any) -> AVLNode:
        self.allocated += 1
        return super().allocate(key, value)

    def release(self, node: AVLNode) -> None:
        self.released += 1
        super().release(node)
