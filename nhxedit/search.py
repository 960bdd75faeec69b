import logging
import re
from typing import Optional

from nhxedit.exceptions import SearchPatternError
from nhxedit.tree import Tree

logger = logging.getLogger(__name__)


def search_leaves(tree: Tree, pattern: Optional[str]) -> int:
    """
    Highlight the leaves whose name matches ``pattern``, case-insensitively.

    Every leaf reachable from the root is updated, including leaves hidden
    under a collapsed node; internal nodes are never touched. An empty or
    missing pattern clears all leaf highlights.

    Args:
        tree: Tree to search
        pattern: Regular expression searched anywhere in the leaf name

    Returns:
        Number of highlighted leaves

    Raises:
        SearchPatternError: if the pattern does not compile. No flag is changed.
    """
    regex = None
    if pattern:
        try:
            regex = re.compile(pattern, re.IGNORECASE)
        except re.error as e:
            raise SearchPatternError(pattern, str(e)) from e

    hits = 0
    for leaf in tree.leaves():
        leaf.highlighted = regex is not None and regex.search(leaf.name) is not None
        if leaf.highlighted:
            hits += 1
    logger.debug("Leaf search %r highlighted %d leaves", pattern, hits)
    return hits
