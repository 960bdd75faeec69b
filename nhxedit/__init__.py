"""Newick/NHX tree parsing, editing and writing."""

from nhxedit.tree import Node, Tree, ParseError, flatten, count_tips, add_lengths
from nhxedit.parser import parse_newick, describe_errors
from nhxedit.io import write_newick, read_newick, write_newick_file
from nhxedit.editing import (
    prune,
    regraft,
    reroot,
    multifurcate,
    reorder,
    rotate_children,
    toggle_collapse,
)
from nhxedit.search import search_leaves
from nhxedit.metadata import extract_field, nhx_fields
from nhxedit.exceptions import (
    NhxEditError,
    EditError,
    RootMoveError,
    AncestorMoveError,
    ParentMoveError,
    UnknownNodeError,
    SearchPatternError,
    TreeInvariantError,
)

__all__ = [
    "Node",
    "Tree",
    "ParseError",
    "flatten",
    "count_tips",
    "add_lengths",
    "parse_newick",
    "describe_errors",
    "write_newick",
    "read_newick",
    "write_newick_file",
    "prune",
    "regraft",
    "reroot",
    "multifurcate",
    "reorder",
    "rotate_children",
    "toggle_collapse",
    "search_leaves",
    "extract_field",
    "nhx_fields",
    "NhxEditError",
    "EditError",
    "RootMoveError",
    "AncestorMoveError",
    "ParentMoveError",
    "UnknownNodeError",
    "SearchPatternError",
    "TreeInvariantError",
    "TreeSession",
    "EditorConfig",
]


def __getattr__(name):
    if name == "TreeSession":
        from nhxedit.session import TreeSession

        return TreeSession
    if name == "EditorConfig":
        from nhxedit.config import EditorConfig

        return EditorConfig
    raise AttributeError(name)
