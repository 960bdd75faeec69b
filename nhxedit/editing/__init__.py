"""
Topology editing operations.

Every operation mutates the tree's arena in place; the structural ones
return the root index of the edited tree. None of them re-flattens; follow
each call with ``tree.refresh(new_root)``.

- pruning: prune, regraft
- rooting: reroot
- contraction: multifurcate, toggle_collapse
- ordering: reorder (ladderize), rotate_children
"""

from .pruning import prune, regraft, require_attached
from .rooting import reroot
from .contraction import multifurcate, toggle_collapse
from .ordering import reorder, rotate_children

__all__ = [
    "prune",
    "regraft",
    "require_attached",
    "reroot",
    "multifurcate",
    "toggle_collapse",
    "reorder",
    "rotate_children",
]
