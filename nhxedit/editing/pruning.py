"""
Subtree removal and regrafting.

Both operations work on the live arena and return the root index of the
edited tree. They do not re-flatten; call ``tree.refresh(new_root)`` before
reading ``tree.nodes`` again.
"""

import logging
from typing import Optional

from nhxedit.exceptions import (
    AncestorMoveError,
    ParentMoveError,
    RootMoveError,
    UnknownNodeError,
)
from nhxedit.tree import Tree, add_lengths

logger = logging.getLogger(__name__)


def require_attached(tree: Tree, node: int) -> None:
    """Raise UnknownNodeError unless ``node`` is reachable from the tree's root."""
    if (
        tree.root is None
        or not 0 <= node < len(tree.arena)
        or not tree.is_ancestor(tree.root, node)
    ):
        raise UnknownNodeError(f"Node {node} is not attached to the tree")


def _detach(tree: Tree, node: int) -> None:
    """
    Unlink ``node`` from its parent. The parent must itself have a parent.

    A parent left with a single other child is spliced out and that child takes
    its place, carrying the parent's branch length.
    """
    target = tree[node]
    parent = tree[target.parent]
    if len(parent.children) == 2:
        grandparent = tree[parent.parent]
        sibling = tree[parent.children[1 - tree.child_position(parent.index, node)]]
        sibling.length = add_lengths(sibling.length, parent.length)
        sibling.parent = grandparent.index
        grandparent.children[
            tree.child_position(grandparent.index, parent.index)
        ] = sibling.index
        parent.parent = None
        parent.children = []
    else:
        del parent.children[tree.child_position(parent.index, node)]
    target.parent = None


def prune(tree: Tree, node: int) -> Optional[int]:
    """
    Remove ``node`` and its subtree from the tree.

    The current root is temporarily hung under a synthetic anchor so that
    removing a child of the root follows the same path as any other removal.
    Pruning the root is a no-op. The pruned subtree keeps its shape and can
    still be reached through ``node``.

    Args:
        tree: Tree to edit
        node: Index of the subtree root to remove

    Returns:
        Index of the root after the removal
    """
    root = tree.root
    if root is None or node == root:
        return root
    require_attached(tree, node)

    anchor = tree.new_node()
    tree.attach(anchor.index, root)
    _detach(tree, node)
    new_root = anchor.children[0]
    tree[new_root].parent = None
    tree.arena.pop()

    logger.debug("Pruned node %d; root is now %d", node, new_root)
    return new_root


def regraft(tree: Tree, p: int, q: int) -> int:
    """
    Move the subtree at ``p`` onto the edge between ``q`` and its parent.

    A new node becomes the common parent of ``p`` and ``q``. A specified
    branch length of ``q`` is split evenly between the new node and ``q``; the
    length of ``p`` is kept.

    Raises:
        RootMoveError: ``p`` is the root.
        AncestorMoveError: ``p`` is ``q`` or one of its ancestors.
        ParentMoveError: ``q`` is the two-child parent of ``p``; removing ``p``
            would splice ``q`` out of the tree. This goes beyond the root and
            ancestor conditions deliberately; a moved node never lands back
            on a parent that the move itself dissolves.

    Returns:
        Index of the root after the move
    """
    require_attached(tree, p)
    require_attached(tree, q)
    if p == tree.root:
        raise RootMoveError("The root cannot be moved")
    if tree.is_ancestor(p, q):
        raise AncestorMoveError(f"Node {p} is an ancestor of node {q}")
    if tree[p].parent == q and len(tree[q].children) == 2:
        raise ParentMoveError("Cannot move a child to its parent")

    root = prune(tree, p)

    target = tree[q]
    splice = tree.new_node()
    if target.length is not None:
        splice.length = target.length / 2.0
        target.length /= 2.0

    if target.parent is None:
        new_root = splice.index
    else:
        parent = tree[target.parent]
        parent.children[tree.child_position(parent.index, q)] = splice.index
        splice.parent = parent.index
        new_root = root

    tree.attach(splice.index, p)
    tree.attach(splice.index, q)
    logger.debug("Moved node %d above node %d", p, q)
    return new_root
