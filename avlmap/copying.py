import copy
import logging
from typing import Callable, Optional

from avlmap.node import AVLNode

logger = logging.getLogger(__name__)


def copy_subtree(node: Optional[AVLNode],
                 allocate: Callable[..., AVLNode],
                 memo: Optional[dict] = None) -> Optional[AVLNode]:
    """Return a structurally independent clone of the subtree rooted at node.

    Keys and values are deep-copied through memo, so the clone shares no
    storage with the source; cached heights are copied as they are. The
    clone's root has no parent.
    """
    if node is None:
        return None
    if memo is None:
        memo = {}

    clone = allocate(copy.deepcopy(node.key, memo), copy.deepcopy(node.value, memo))
    clone.left = copy_subtree(node.left, allocate, memo)
    clone.right = copy_subtree(node.right, allocate, memo)
    if clone.left is not None:
        clone.left.set_parent(clone)
    if clone.right is not None:
        clone.right.set_parent(clone)
    clone.height = node.height
    return clone


def copy_tree(root: Optional[AVLNode],
              allocate: Callable[..., AVLNode],
              memo: Optional[dict] = None) -> Optional[AVLNode]:
    """Clone a whole tree starting at its root."""
    clone = copy_subtree(root, allocate, memo)
    logger.debug("Copied tree of height %d", clone.height if clone else 0)
    return clone
