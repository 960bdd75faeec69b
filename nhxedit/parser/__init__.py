"""
Newick/NHX parser module.

Turns free-form Newick/NHX text into an editable Tree, recording malformed
input in the tree's error flags instead of raising.
"""

from .newick_parser import (
    parse_newick,
    describe_errors,
    read_node_token,
    read_length,
    read_metadata,
)

__all__ = [
    "parse_newick",
    "describe_errors",
    "read_node_token",
    "read_length",
    "read_metadata",
]
