"""
Height bookkeeping and rotations for AVL subtrees.

Every function works on a single node and its immediate children. Functions
that can change the subtree root return the new root; re-linking that root
into its parent's child slot is the caller's job.
"""

from typing import Optional

from avlmap.node import AVLNode


def height(node: Optional[AVLNode]) -> int:
    """Return the cached height of node (0 for an empty subtree)."""
    if node is None:
        return 0
    return node.height


def balance_factor(node: Optional[AVLNode]) -> int:
    """Return height(right) - height(left) for node (0 for an empty subtree)."""
    if node is None:
        return 0
    return height(node.right) - height(node.left)


def fix_height(node: Optional[AVLNode]) -> None:
    """Recompute the height of node from its children."""
    if node is None:
        return
    node.height = 1 + max(height(node.left), height(node.right))


def rotate_left(p: AVLNode) -> AVLNode:
    """
    Performs a left rotation and returns the new root:

       p             q
      / \\           / \\
     X   q    =>   p   Z
        / \\       / \\
       Y   Z     X   Y
    """
    q = p.right
    assert q is not None, "rotate_left needs a right child"

    p.right = q.left
    if q.left is not None:
        q.left.set_parent(p)
    q.left = p
    q.set_parent(p.get_parent())
    p.set_parent(q)

    fix_height(p)
    fix_height(q)
    return q


def rotate_right(q: AVLNode) -> AVLNode:
    """
    Performs a right rotation and returns the new root:

         q            p
        / \\          / \\
       p   Z   =>   X   q
      / \\              / \\
     X   Y            Y   Z
    """
    p = q.left
    assert p is not None, "rotate_right needs a left child"

    q.left = p.right
    if p.right is not None:
        p.right.set_parent(q)
    p.right = q
    p.set_parent(q.get_parent())
    q.set_parent(p)

    fix_height(q)
    fix_height(p)
    return p


def rebalance(node: AVLNode) -> AVLNode:
    """Restore the AVL property at node and return the subtree root.

    Assumes the children are balanced, their heights are current and the
    balance factor of node is within [-2, 2].
    """
    bf = balance_factor(node)
    if bf == 2:
        if balance_factor(node.right) == -1:
            node.right = rotate_right(node.right)
        return rotate_left(node)
    if bf == -2:
        if balance_factor(node.left) == 1:
            node.left = rotate_left(node.left)
        return rotate_right(node)
    return node


def fix_and_rebalance(node: Optional[AVLNode]) -> Optional[AVLNode]:
    """fix_height followed by rebalance; the step applied on the way back up."""
    if node is None:
        return None
    fix_height(node)
    return rebalance(node)
