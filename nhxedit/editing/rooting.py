"""
Rerooting of an arena tree.

The new root is placed on the edge between a node and its parent. Every edge
on the path from that parent up to the old root is flipped, and branch lengths
travel with the flipped edges.
"""

import logging
from typing import Optional, Tuple

from nhxedit.editing.pruning import require_attached
from nhxedit.tree import Tree, add_lengths

logger = logging.getLogger(__name__)


def _split_length(
    length: Optional[float], distance: Optional[float]
) -> Tuple[Optional[float], Optional[float]]:
    """
    Split an edge of ``length`` at ``distance`` from its lower end.

    A missing, negative or too large distance means the midpoint. An
    unspecified edge stays unspecified on both sides.
    """
    if length is None:
        return None, None
    if distance is None or distance < 0.0 or distance > length:
        distance = length / 2.0
    return distance, length - distance


def _drop_dead_end(tree: Tree, node: int) -> None:
    """
    Detach ``node``, which has lost all its children, then tidy its ancestors.

    Ancestors left without children are detached in turn. The first ancestor
    that keeps exactly one child is spliced out, its child inheriting the
    summed branch length. A parentless ancestor (the new root) is kept.
    """
    current = tree[node]
    while not current.children and current.parent is not None:
        parent = tree[current.parent]
        del parent.children[tree.child_position(parent.index, current.index)]
        current.parent = None
        current = parent
    if len(current.children) == 1 and current.parent is not None:
        above = tree[current.parent]
        child = tree[current.children[0]]
        child.length = add_lengths(child.length, current.length)
        child.parent = above.index
        above.children[tree.child_position(above.index, current.index)] = child.index
        current.parent = None
        current.children = []


def reroot(tree: Tree, node: int, distance: Optional[float] = None) -> Optional[int]:
    """
    Put a new root on the edge above ``node``, ``distance`` away from ``node``.

    Walks from the old parent of ``node`` up to the old root. At each step the
    parent becomes a child of the node below it, taking the child's slot, and
    the stored branch length is swapped with the one carried up from below.
    The old root is then dissolved when it has two children (its remaining
    child is linked to the node below it, lengths summed), dropped when it had
    a single child, or kept with one child fewer. Dropping a single-child root
    never leaves an empty tip behind; see ``_drop_dead_end``.

    Args:
        tree: Tree to edit
        node: Index of the node whose parent edge receives the root
        distance: Distance from ``node`` to the new root

    Returns:
        Index of the new root (the old root if ``node`` already is the root)
    """
    if node == tree.root:
        return tree.root
    require_attached(tree, node)

    target = tree[node]
    lower, upper = _split_length(target.length, distance)

    new_root = tree.new_node()
    q = new_root
    p = tree[target.parent]
    i = tree.child_position(p.index, node)

    q.children = [node, p.index]
    target.parent = q.index
    target.length = lower

    carried = p.length
    p.length = upper
    r = p.parent
    p.parent = q.index

    while r is not None:
        above = tree[r]
        next_r = above.parent
        p.children[i] = r
        i = tree.child_position(r, p.index)
        above.parent = p.index
        above.length, carried = carried, above.length
        q, p = p, above
        r = next_r

    # p is now the old root and q its new parent
    if len(p.children) == 2:
        other = tree[p.children[1 - i]]
        other.length = add_lengths(other.length, p.length)
        other.parent = q.index
        q.children[tree.child_position(q.index, p.index)] = other.index
        p.parent = None
        p.children = []
    elif len(p.children) == 1:
        # its only edge now leads back down the path; nothing hangs off it
        p.children = []
        _drop_dead_end(tree, p.index)
    else:
        del p.children[i]

    logger.debug("Rerooted above node %d", node)
    return new_root.index
