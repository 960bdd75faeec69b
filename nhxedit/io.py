import logging
from pathlib import Path
from typing import List, Union

from nhxedit.exceptions import TreeInvariantError
from nhxedit.parser.newick_parser import parse_newick
from nhxedit.tree import Node, Tree, assign_depths, flatten

logger = logging.getLogger(__name__)


def format_length(length: float) -> str:
    """Shortest text for a branch length; whole numbers drop the '.0'."""
    if length.is_integer() and abs(length) < 1e16:
        return str(int(length))
    return repr(length)


def node_token(node: Node) -> str:
    token = node.name
    if node.length is not None:
        token += ":" + format_length(node.length)
    if node.metadata:
        token += node.metadata
    return token


def write_sequence(tree: Tree, order: List[Node], pretty: bool = False) -> str:
    """
    Serialize a postorder node sequence whose last element is its root.

    Between two consecutive entries of a postorder the depth can only grow
    (descending into the next sibling's leftmost path) or drop by exactly one
    (returning to the parent), so a single ')' is written per decrease. A
    larger drop means the sequence is not a postorder and raises.

    Raises:
        TreeInvariantError: if the depth drops by more than one level.
    """
    if not order:
        return ";\n" if pretty else ";"
    assign_depths(tree, order)

    separator = ",\n" if pretty else ","
    closing = "\n)" if pretty else ")"
    parts: List[str] = []
    current_depth = 0
    for position, node in enumerate(order):
        step = node.depth - current_depth
        if step > 0:
            if position > 0:
                parts.append(separator)
            parts.append("(" * step)
        elif step == -1:
            parts.append(closing)
        elif step < -1:
            raise TreeInvariantError(
                f"Depth drops from {current_depth} to {node.depth} at node "
                f"{node.index}; the sequence is not a postorder"
            )
        elif position > 0:
            parts.append(separator)
        parts.append(node_token(node))
        current_depth = node.depth
    parts.append(";\n" if pretty else ";")
    return "".join(parts)


def write_newick(tree: Tree, pretty: bool = False, expand_collapsed: bool = True) -> str:
    """
    Convert a tree to Newick/NHX text.

    Args:
        tree: Tree to write
        pretty: Put a line break after every separator, as the interactive
            editor does
        expand_collapsed: Write collapsed subtrees in full (the default keeps
            the text lossless); when False the visible sequence ``tree.nodes``
            is written and collapsed nodes appear as tips

    Returns:
        Newick string terminated by ';'
    """
    if tree.root is None:
        order: List[Node] = []
    elif expand_collapsed:
        order = flatten(tree, tree.root, expand_collapsed=True)
    else:
        order = tree.nodes
    return write_sequence(tree, order, pretty=pretty)


def read_newick(path: Union[str, Path]) -> Tree:
    with open(path, encoding="utf-8") as f:
        newick_string: str = f.read()
    tree = parse_newick(newick_string)
    logger.info("Read %d tips from %s", tree.tip_count, path)
    return tree


def write_newick_file(
    tree: Tree, path: Union[str, Path], pretty: bool = False
) -> None:
    with open(path, mode="w", encoding="utf-8") as f:
        f.write(write_newick(tree, pretty=pretty))
        if not pretty:
            f.write("\n")
