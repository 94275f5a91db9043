"""
Structural checks for AVL trees.

These are debugging aids: a failed check means the tree code has a bug, so
the checker raises InvariantError and nothing in the library catches it.
"""

import logging
from typing import Optional, Tuple

from avlmap.balance import height
from avlmap.errors import InvariantError
from avlmap.node import AVLNode

logger = logging.getLogger(__name__)


def _fail(message: str) -> None:
    logger.error("AVL invariant violated: %s", message)
    raise InvariantError(message)


def _check_subtree(node: AVLNode, low, high) -> Tuple[int, int]:
    """Check the subtree rooted at node; return (computed height, node count).

    low/high are exclusive key bounds inherited from the ancestors, or None
    when unbounded on that side.
    """
    if low is not None and not low < node.key:
        _fail(f"key {node.key!r} is not greater than ancestor key {low!r}")
    if high is not None and not node.key < high:
        _fail(f"key {node.key!r} is not less than ancestor key {high!r}")

    left_height, left_count = 0, 0
    right_height, right_count = 0, 0

    if node.left is not None:
        if node.left.get_parent() is not node:
            _fail(f"left child {node.left.key!r} does not point back at {node.key!r}")
        left_height, left_count = _check_subtree(node.left, low, node.key)

    if node.right is not None:
        if node.right.get_parent() is not node:
            _fail(f"right child {node.right.key!r} does not point back at {node.key!r}")
        right_height, right_count = _check_subtree(node.right, node.key, high)

    expected = 1 + max(left_height, right_height)
    if node.height != expected:
        _fail(f"node {node.key!r} caches height {node.height}, actual height is {expected}")
    if abs(right_height - left_height) > 1:
        _fail(f"node {node.key!r} has balance factor {right_height - left_height}")

    return expected, 1 + left_count + right_count


def check_tree(root: Optional[AVLNode], size: Optional[int] = None) -> int:
    """Verify ordering, heights, balance and parent links; return the node count.

    If size is given, it must match the number of nodes found.
    """
    if root is None:
        count = 0
    else:
        if root.get_parent() is not None:
            _fail(f"root {root.key!r} has a parent")
        computed, count = _check_subtree(root, None, None)
        if computed != height(root):
            _fail("root height mismatch")

    if size is not None and size != count:
        _fail(f"map reports {size} entries but the tree holds {count}")
    return count
