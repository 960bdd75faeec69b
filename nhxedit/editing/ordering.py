"""
Child ordering: ladderizing and rotating.

Neither operation changes the topology, only the order of children.
"""

import logging
from typing import Optional

from nhxedit.editing.pruning import require_attached
from nhxedit.tree import Node, Tree, assign_depths, flatten

logger = logging.getLogger(__name__)


def _tip_key(node: Node):
    return (-node.depth, node.name)


def reorder(tree: Tree, root: Optional[int] = None) -> Optional[int]:
    """
    Ladderize the subtree at ``root`` (the whole tree by default).

    Visible tips (leaves and collapsed nodes) are ranked deepest first, ties
    broken by name. A tip's weight is its rank and its tip_count is 1; an
    internal node sums both over its children. Every expanded node with two or
    more children then sorts them by ascending weight / tip_count.

    The depth, weight and tip_count fields written here stay valid only until
    the next ``tree.refresh``; see ``Tree.aggregates_current``.

    Returns:
        Index of the tree's root (unchanged)
    """
    if root is None:
        root = tree.root
    if root is None:
        return None
    require_attached(tree, root)

    order = flatten(tree, root)
    assign_depths(tree, order)

    tips = sorted((node for node in order if node.is_visible_tip()), key=_tip_key)
    for rank, tip in enumerate(tips):
        tip.weight = float(rank)
        tip.tip_count = 1

    for node in order:
        if node.is_visible_tip():
            continue
        children = [tree[c] for c in node.children]
        node.tip_count = sum(child.tip_count for child in children)
        node.weight = sum(child.weight for child in children)

    for node in order:
        if len(node.children) >= 2 and not node.collapsed:
            node.children.sort(key=lambda c: tree[c].weight / tree[c].tip_count)

    tree.aggregates_generation = tree.generation
    logger.debug("Ladderized subtree at node %d (%d tips)", root, len(tips))
    return tree.root


def rotate_children(tree: Tree, node: int) -> Optional[int]:
    """Move the first child of ``node`` to the end of its children."""
    require_attached(tree, node)
    target = tree[node]
    if target.children:
        target.children.append(target.children.pop(0))
    return tree.root
