"""
Edge contraction and clade collapsing.
"""

import logging
from typing import Optional

from nhxedit.editing.pruning import require_attached
from nhxedit.tree import Tree

logger = logging.getLogger(__name__)


def multifurcate(tree: Tree, node: int) -> Optional[int]:
    """
    Contract the edge above ``node``.

    The children of ``node`` take its place among its parent's children, in
    their original order. A promoted child's branch length grows by the length
    of ``node`` only when both lengths are specified. Leaves and the root are
    left alone.

    Returns:
        Index of the root (contraction never changes it)
    """
    require_attached(tree, node)
    target = tree[node]
    if not target.children or target.parent is None:
        return tree.root

    parent = tree[target.parent]
    position = tree.child_position(parent.index, node)
    for child_index in target.children:
        child = tree[child_index]
        child.parent = parent.index
        if child.length is not None and target.length is not None:
            child.length += target.length
    parent.children[position : position + 1] = target.children

    target.children = []
    target.parent = None
    logger.debug("Contracted node %d into node %d", node, parent.index)
    return tree.root


def toggle_collapse(tree: Tree, node: int) -> bool:
    """
    Flip the collapsed flag of an internal node.

    The pointer graph is not touched, so toggling twice restores the previous
    view exactly. Leaves cannot be collapsed.

    Returns:
        The new value of the flag
    """
    require_attached(tree, node)
    target = tree[node]
    if target.children:
        target.collapsed = not target.collapsed
    return target.collapsed
