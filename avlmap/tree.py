import logging
from typing import Any, Callable, Iterable, Iterator, Optional, Tuple

from avlmap.balance import fix_and_rebalance, height as subtree_height
from avlmap.config import check_invariants_enabled
from avlmap.copying import copy_tree
from avlmap.errors import NotFound
from avlmap.iterator import (MapIterator, ReverseMapIterator, leftmost,
                             rightmost, successor)
from avlmap.node import AVLNode, NodeAllocator
from avlmap.validation import check_tree

logger = logging.getLogger(__name__)

_MISSING = object()


class AVLMap:
    """Ordered map implemented as an AVL tree with parent links.

    Keys must be totally ordered by ``<``; values can be anything. Mutations
    rewrite the affected subtree recursively, fixing heights and rebalancing
    on the way back to the root.

    ``m[key]`` for a missing key behaves like ``collections.defaultdict``: it
    inserts ``default_factory()`` when the map has a factory and raises
    NotFound otherwise. ``index_or_insert`` always inserts, falling back to
    None when no factory is available.
    """

    def __init__(self, items: Any = None, *,
                 allocator: Optional[NodeAllocator] = None,
                 default_factory: Optional[Callable[[], Any]] = None,
                 check_invariants: Optional[bool] = None):
        """Create a map, optionally filled from another map or from items.

        Passing an AVLMap deep-copies its node structure; any other mapping or
        iterable of (key, value) pairs is inserted entry by entry.
        """
        self._root: Optional[AVLNode] = None
        self._size = 0
        self._allocator = allocator if allocator is not None else NodeAllocator()
        self.default_factory = default_factory
        self._check_invariants = check_invariants

        if isinstance(items, AVLMap):
            self._root = copy_tree(items._root, self._allocator.allocate)
            self._size = items._size
        elif items is not None:
            self.update(items)
        self._after_mutation()

    # ------------------ Accessors ------------------
    @property
    def allocator(self) -> NodeAllocator:
        return self._allocator

    @property
    def root(self) -> Optional[AVLNode]:
        return self._root

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._root is not None

    def height(self) -> int:
        """Return the height of the tree (0 when empty)."""
        return subtree_height(self._root)

    # ------------------ Lookup ------------------
    def _find(self, node: Optional[AVLNode], key: Any) -> Optional[AVLNode]:
        """Return the node holding key in this subtree, or None."""
        if node is None:
            return None
        if key < node.key:
            return self._find(node.left, key)
        if node.key < key:
            return self._find(node.right, key)
        return node

    def get(self, key: Any) -> Any:
        """Return the value stored under key; raises NotFound if absent."""
        node = self._find(self._root, key)
        if node is None:
            raise NotFound(key)
        return node.value

    def get_default(self, key: Any, default: Any = None) -> Any:
        """Return the value stored under key, or default if absent."""
        node = self._find(self._root, key)
        return default if node is None else node.value

    def contains(self, key: Any) -> bool:
        return self._find(self._root, key) is not None

    def __contains__(self, key: Any) -> bool:
        return self.contains(key)

    def min_key(self) -> Any:
        node = leftmost(self._root)
        if node is None:
            raise NotFound("min_key() on an empty map")
        return node.key

    def max_key(self) -> Any:
        node = rightmost(self._root)
        if node is None:
            raise NotFound("max_key() on an empty map")
        return node.key

    # ------------------ Insertion ------------------
    def _insert(self, node: Optional[AVLNode], parent: Optional[AVLNode],
                key: Any, value: Any, overwrite: bool) -> Tuple[AVLNode, AVLNode]:
        """Insert into the subtree at node; return (new subtree root, node holding key)."""
        if node is None:
            created = self._allocator.allocate(key, value)
            created.set_parent(parent)
            self._size += 1
            return created, created

        if key < node.key:
            node.left, target = self._insert(node.left, node, key, value, overwrite)
        elif node.key < key:
            node.right, target = self._insert(node.right, node, key, value, overwrite)
        else:
            if overwrite:
                node.value = value
            return node, node

        return fix_and_rebalance(node), target

    def _upsert(self, key: Any, value: Any, overwrite: bool) -> AVLNode:
        self._root, target = self._insert(self._root, None, key, value, overwrite)
        self._after_mutation()
        return target

    def insert(self, key: Any, value: Any) -> None:
        """Insert key with value, overwriting the value if key is present."""
        self._upsert(key, value, overwrite=True)

    def __setitem__(self, key: Any, value: Any) -> None:
        self.insert(key, value)

    def index_or_insert(self, key: Any, default_factory: Optional[Callable[[], Any]] = None) -> Any:
        """Return the value for key, inserting a default value first if absent.

        The default comes from default_factory, else from the map's own
        default_factory, else it is None.
        """
        node = self._find(self._root, key)
        if node is not None:
            return node.value
        factory = default_factory or self.default_factory
        return self._upsert(key, factory() if factory else None, overwrite=False).value

    def __getitem__(self, key: Any) -> Any:
        if self.default_factory is not None:
            return self.index_or_insert(key)
        return self.get(key)

    def setdefault(self, key: Any, default: Any = None) -> Any:
        return self._upsert(key, default, overwrite=False).value

    def update(self, items: Any = (), **kwargs: Any) -> None:
        """Insert entries from a mapping or an iterable of (key, value) pairs."""
        if hasattr(items, "items"):
            items = items.items()
        for key, value in items:
            self.insert(key, value)
        for key, value in kwargs.items():
            self.insert(key, value)

    # ------------------ Deletion ------------------
    def _detach_max(self, node: AVLNode) -> Tuple[Optional[AVLNode], AVLNode]:
        """Splice the largest node out of this subtree; return (new root, spliced node)."""
        if node.right is not None:
            node.right, donor = self._detach_max(node.right)
            return fix_and_rebalance(node), donor

        replacement = node.left
        if replacement is not None:
            replacement.set_parent(node.get_parent())
        node.left = None
        return replacement, node

    def _replace(self, node: AVLNode) -> Optional[AVLNode]:
        """Unlink node from the tree and return what takes its place."""
        parent = node.get_parent()

        if node.left is None:
            replacement = node.right
            if replacement is not None:
                replacement.set_parent(parent)
            return replacement

        # The largest key of the left subtree moves into node's position.
        new_left, donor = self._detach_max(node.left)
        donor.left = new_left
        donor.right = node.right
        if donor.left is not None:
            donor.left.set_parent(donor)
        if donor.right is not None:
            donor.right.set_parent(donor)
        donor.set_parent(parent)
        return donor

    def _delete(self, node: Optional[AVLNode], key: Any) -> Tuple[Optional[AVLNode], Optional[AVLNode]]:
        """Delete key from the subtree; return (new subtree root, removed node or None)."""
        if node is None:
            return None, None

        if key < node.key:
            node.left, removed = self._delete(node.left, key)
        elif node.key < key:
            node.right, removed = self._delete(node.right, key)
        else:
            return fix_and_rebalance(self._replace(node)), node

        if removed is None:
            return node, None
        return fix_and_rebalance(node), removed

    def _remove(self, key: Any) -> Optional[AVLNode]:
        self._root, removed = self._delete(self._root, key)
        if removed is not None:
            self._size -= 1
            self._after_mutation()
        return removed

    def delete(self, key: Any) -> None:
        """Remove key if present; a missing key is silently ignored."""
        removed = self._remove(key)
        if removed is not None:
            self._allocator.release(removed)

    def __delitem__(self, key: Any) -> None:
        removed = self._remove(key)
        if removed is None:
            raise NotFound(key)
        self._allocator.release(removed)

    def pop(self, key: Any, default: Any = _MISSING) -> Any:
        """Remove key and return its value, or default if given and key is absent."""
        removed = self._remove(key)
        if removed is None:
            if default is _MISSING:
                raise NotFound(key)
            return default
        value = removed.value
        self._allocator.release(removed)
        return value

    def _release_subtree(self, node: Optional[AVLNode]) -> None:
        """Release every node of the subtree, children before parents."""
        if node is None:
            return
        self._release_subtree(node.left)
        self._release_subtree(node.right)
        self._allocator.release(node)

    def clear(self) -> None:
        logger.debug("Clearing map with %d entries", self._size)
        root, self._root, self._size = self._root, None, 0
        self._release_subtree(root)

    # ------------------ Copying ------------------
    def copy(self) -> "AVLMap":
        """Return an independent map with the same shape, keys and values."""
        return AVLMap(self, allocator=self._allocator,
                      default_factory=self.default_factory,
                      check_invariants=self._check_invariants)

    __copy__ = copy

    def __deepcopy__(self, memo) -> "AVLMap":
        clone = AVLMap(allocator=self._allocator,
                       default_factory=self.default_factory,
                       check_invariants=self._check_invariants)
        memo[id(self)] = clone
        clone._root = copy_tree(self._root, self._allocator.allocate, memo)
        clone._size = self._size
        return clone

    def assign(self, other: "AVLMap") -> "AVLMap":
        """Replace the contents of this map with a deep clone of other."""
        if other is self:
            return self
        new_root = copy_tree(other._root, self._allocator.allocate)
        self.clear()
        self._root, self._size = new_root, other._size
        self._after_mutation()
        return self

    # ------------------ Iteration ------------------
    def _nodes(self) -> Iterator[AVLNode]:
        node = leftmost(self._root)
        while node is not None:
            yield node
            node = successor(node)

    def __iter__(self) -> Iterator[Any]:
        """Generate the map's keys in ascending order."""
        for node in self._nodes():
            yield node.key

    def __reversed__(self) -> Iterator[Any]:
        """Generate the map's keys in descending order."""
        for key, _ in self.rbegin():
            yield key

    def keys(self) -> Iterator[Any]:
        return iter(self)

    def values(self) -> Iterable[Any]:
        """Generate the map's values in key order."""
        for node in self._nodes():
            yield node.value

    def items(self) -> Iterable[Tuple[Any, Any]]:
        """Generate (key, value) pairs in key order."""
        for node in self._nodes():
            yield node.key, node.value

    def begin(self) -> MapIterator:
        return MapIterator(self, leftmost(self._root))

    def end(self) -> MapIterator:
        return MapIterator(self, None)

    def cbegin(self) -> MapIterator:
        return MapIterator(self, leftmost(self._root), readonly=True)

    def cend(self) -> MapIterator:
        return MapIterator(self, None, readonly=True)

    def rbegin(self) -> ReverseMapIterator:
        return ReverseMapIterator(self.end())

    def rend(self) -> ReverseMapIterator:
        return ReverseMapIterator(self.begin())

    def crbegin(self) -> ReverseMapIterator:
        return ReverseMapIterator(self.cend())

    def crend(self) -> ReverseMapIterator:
        return ReverseMapIterator(self.cbegin())

    def find(self, key: Any) -> MapIterator:
        """Return a cursor on key, or end() if key is absent."""
        return MapIterator(self, self._find(self._root, key))

    # ------------------ Checks ------------------
    def validate(self) -> int:
        """Check every structural invariant; return the node count."""
        return check_tree(self._root, self._size)

    def _after_mutation(self) -> None:
        if check_invariants_enabled(self._check_invariants):
            self.validate()

    # ------------------ Comparison ------------------
    def __eq__(self, other):
        if not isinstance(other, AVLMap):
            return NotImplemented
        return len(self) == len(other) and list(self.items()) == list(other.items())

    __hash__ = None

    def __repr__(self):
        body = ", ".join(f"{key!r}: {value!r}" for key, value in self.items())
        return f"AVLMap({{{body}}})"
