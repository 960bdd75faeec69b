"""
Interactive editing session.

A TreeSession bundles one tree with its current Newick text and a single undo
slot. Each action applies one editing operation, re-flattens the tree and
records the previous text so that ``undo`` can swap back. The session is the
explicit context an interactive front end holds on to; nothing here is
process-global.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from nhxedit.config import EditorConfig
from nhxedit.editing import (
    multifurcate,
    prune,
    regraft,
    reorder,
    reroot,
    rotate_children,
    toggle_collapse,
)
from nhxedit.editing.pruning import require_attached
from nhxedit.exceptions import EditError
from nhxedit.io import write_newick
from nhxedit.metadata import extract_field
from nhxedit.parser.newick_parser import describe_errors, parse_newick
from nhxedit.search import search_leaves
from nhxedit.tree import Tree


class TreeSession:
    """One tree being edited, plus its text and undo state."""

    def __init__(self, config: Optional[EditorConfig] = None, text: str = ""):
        self.config = config or EditorConfig()
        self.logger = logging.getLogger(self.config.logger_name)
        self.tree: Tree = Tree()
        self.text: str = ""
        self.previous_text: Optional[str] = None
        if text:
            self.load(text)

    # ------------------------------------------------------------------------
    # loading and undo
    # ------------------------------------------------------------------------

    def load(self, text: str) -> List[str]:
        """
        Parse ``text`` and make it the current tree.

        Returns:
            Parse diagnostics; empty when the text was well formed
        """
        self.tree = parse_newick(text)
        self.text = text
        errors = describe_errors(self.tree.error)
        for message in errors:
            self.logger.warning("Parsing ERROR: %s!", message)
        self.logger.info(
            "Loaded tree with %d tips and %d nodes",
            self.tree.tip_count,
            len(self.tree),
        )
        return errors

    def undo(self) -> bool:
        """Swap the current text with the one before the last edit and reparse."""
        if self.previous_text is None:
            return False
        self.previous_text, text = self.text, self.previous_text
        self.tree = parse_newick(text)
        self.text = text
        self.logger.info("Undo/redo: restored previous tree")
        return True

    def _commit(self, new_root: Optional[int]) -> None:
        self.tree.refresh(new_root)
        self.previous_text = self.text
        self.text = write_newick(self.tree, pretty=self.config.pretty_output)

    def _apply(
        self, action: str, operation: Callable[[], Optional[int]]
    ) -> bool:
        new_root = operation()
        self._commit(new_root)
        self.logger.debug("%s applied; %d tips", action, self.tree.tip_count)
        return True

    # ------------------------------------------------------------------------
    # undo-tracked actions
    # ------------------------------------------------------------------------

    def rotate(self, node: int) -> bool:
        """Move the first child of an internal node to the end."""
        require_attached(self.tree, node)
        if not self.tree[node].children:
            return False
        return self._apply("rotate", lambda: rotate_children(self.tree, node))

    def ladderize(self, node: Optional[int] = None) -> bool:
        if node is None:
            node = self.tree.root
        if node is None:
            return False
        require_attached(self.tree, node)
        if not self.tree[node].children:
            return False
        return self._apply("ladderize", lambda: reorder(self.tree, node))

    def reroot(self, node: int, distance: Optional[float] = None) -> bool:
        require_attached(self.tree, node)
        if node == self.tree.root:
            return False
        if distance is None:
            distance = self.config.reroot_distance
        return self._apply("reroot", lambda: reroot(self.tree, node, distance))

    def remove(self, node: int) -> bool:
        require_attached(self.tree, node)
        if node == self.tree.root:
            return False
        return self._apply("remove", lambda: prune(self.tree, node))

    def multifurcate(self, node: int) -> bool:
        require_attached(self.tree, node)
        target = self.tree[node]
        if not target.children or target.parent is None:
            return False
        return self._apply("multifurcate", lambda: multifurcate(self.tree, node))

    def move(self, p: int, q: int) -> bool:
        """
        Regraft ``p`` onto the edge above ``q``.

        Raises:
            EditError: when the move is invalid; the tree and text are unchanged.
        """
        try:
            new_root = regraft(self.tree, p, q)
        except EditError as e:
            self.logger.warning("Rejected move of node %s above node %s: %s", p, q, e)
            raise
        self._commit(new_root)
        self.logger.debug("move applied; %d tips", self.tree.tip_count)
        return True

    # ------------------------------------------------------------------------
    # view-only actions (not undo-tracked)
    # ------------------------------------------------------------------------

    def toggle_collapse(self, node: int) -> bool:
        require_attached(self.tree, node)
        if not self.tree[node].children:
            return False
        toggle_collapse(self.tree, node)
        self.tree.refresh()
        return True

    def highlight(self, node: int, color: str) -> Optional[str]:
        """
        Set the clade highlight colour of ``node``.

        ``color`` is one of the configured colour names or a literal colour
        value; "none" clears it.
        """
        require_attached(self.tree, node)
        if color in self.config.highlight_colors:
            value = self.config.highlight_colors[color]
        else:
            value = color
        self.tree[node].highlight_color = value
        return value

    def search(self, pattern: Optional[str]) -> int:
        return search_leaves(self.tree, pattern)

    # ------------------------------------------------------------------------
    # information
    # ------------------------------------------------------------------------

    def label(self, node: int) -> Optional[str]:
        """Second label of a node, extracted from its metadata."""
        return extract_field(self.tree[node].metadata, self.config.label_pattern)

    def info(self) -> Dict[str, Any]:
        return {
            "tips": self.tree.tip_count,
            "nodes": len(self.tree),
            "errors": describe_errors(self.tree.error),
            "can_undo": self.previous_text is not None,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Flattened view of the tree for a front end."""
        return {
            "root": self.tree.root,
            "info": self.info(),
            "nodes": [
                {
                    "index": node.index,
                    "parent": node.parent,
                    "children": list(node.children),
                    "name": node.name,
                    "length": node.length,
                    "metadata": node.metadata,
                    "label": self.label(node.index),
                    "highlighted": node.highlighted,
                    "collapsed": node.collapsed,
                    "highlight_color": node.highlight_color,
                }
                for node in self.tree.nodes
            ],
            "newick": self.text,
        }
