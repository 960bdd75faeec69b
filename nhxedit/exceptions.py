"""
Custom exceptions for tree editing and searching.
"""

from __future__ import annotations


class NhxEditError(Exception):
    """Base exception for nhxedit errors."""

    pass


class EditError(NhxEditError):
    """Raised when a structural edit is requested on an invalid node or node pair.

    The tree is left untouched when this is raised.
    """

    pass


class RootMoveError(EditError):
    """Raised when the root is asked to be moved."""

    pass


class AncestorMoveError(EditError):
    """Raised when a subtree would be regrafted into itself."""

    pass


class ParentMoveError(EditError):
    """Raised when a child would be moved onto the edge above its own two-child parent.

    This is a third rejection on top of the root and ancestor checks, added on
    purpose: removing the child would splice the parent out of the tree, so the
    edge the child should be regrafted onto no longer exists.
    """

    pass


class UnknownNodeError(EditError):
    """Raised when a node index or name does not resolve to a node of the tree."""

    @staticmethod
    def for_name(name: str) -> "UnknownNodeError":
        return UnknownNodeError(f"No node named '{name}' in the tree")


class SearchPatternError(NhxEditError, ValueError):
    """Raised when a leaf search pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Wrong regular expression: '{pattern}' ({reason})")
        self.pattern = pattern
        self.reason = reason


class TreeInvariantError(NhxEditError):
    """Raised when the pointer graph or its flattened sequence is inconsistent."""

    pass
