import logging
from typing import List, Optional, Tuple

from nhxedit.tree import Node, ParseError, Tree

logger = logging.getLogger(__name__)

# Stack entry marking an open "(" group; real entries are arena indices (>= 0)
BOUNDARY = -1

LENGTH_CHARACTERS = frozenset("0123456789eE+-.")

ERROR_MESSAGES = {
    ParseError.MISSING_LEFT: "missing left parenthesis",
    ParseError.MISSING_RIGHT: "missing right parenthesis",
    ParseError.UNCLOSED_BRACKET: "missing closing bracket",
}


# ===================================================================
# 1. CHARACTER CLASSES
# ===================================================================


def is_blank(char: str) -> bool:
    """True for ASCII whitespace and control characters, including DEL."""
    return char <= " " or char == "\x7f"


def ends_name(char: str) -> bool:
    # non-ASCII letters belong to the name
    return char in "[:;" or is_blank(char)


# ===================================================================
# 2. TOKEN READERS
# ===================================================================


def read_length(text: str, pos: int) -> Tuple[Optional[float], int]:
    """
    Read a branch length starting right after a ':'.

    Args:
        text: The full Newick string
        pos: Index of the first character after the colon

    Returns:
        Tuple of (length or None if no number is present, index after the number)
    """
    while pos < len(text) and text[pos] in " \t\r\n":
        pos += 1
    start = pos
    while pos < len(text) and text[pos] in LENGTH_CHARACTERS:
        pos += 1
    token = text[start:pos]
    if not token:
        return None, pos
    try:
        return float(token), pos
    except ValueError:
        logger.debug("Ignoring malformed branch length %r at offset %d", token, start)
        return None, pos


def read_metadata(text: str, pos: int) -> Tuple[Optional[str], int]:
    """
    Read a bracketed metadata block verbatim, brackets included.

    Args:
        text: The full Newick string
        pos: Index of the opening '['

    Returns:
        Tuple of (metadata string, index after ']'). The metadata is None when
        the input ends before the block is closed; the index is then len(text).
    """
    end = text.find("]", pos + 1)
    if end < 0:
        return None, len(text)
    return text[pos : end + 1], end + 1


def read_node_token(tree: Tree, text: str, pos: int) -> Tuple[Node, int]:
    """
    Create a node from the token starting at ``pos``.

    The token is ``name[:length][[metadata]]``; it ends at ',', ')' or ';'.
    Anything else after the name that is neither a length nor a metadata block
    is skipped.

    Returns:
        Tuple of (new node, index of the character that ended the token)
    """
    node = tree.new_node()
    name_end: Optional[int] = None
    i = pos
    while i < len(text) and text[i] not in ",);":
        char = text[i]
        if char == "[":
            if name_end is None:
                name_end = i
            metadata, i = read_metadata(text, i)
            if metadata is None:
                tree.error |= ParseError.UNCLOSED_BRACKET
                break
            node.metadata = metadata
        elif char == ":":
            if name_end is None:
                name_end = i
            node.length, i = read_length(text, i + 1)
        else:
            if name_end is None and ends_name(char):
                name_end = i
            i += 1
    if name_end is None:
        name_end = i
    node.name = text[pos:name_end]
    return node, i


# ===================================================================
# 3. STACK HANDLING
# ===================================================================


def find_boundary(stack: List[int]) -> int:
    """Position of the innermost open-group marker on the stack, or -1."""
    for i in range(len(stack) - 1, -1, -1):
        if stack[i] == BOUNDARY:
            return i
    return -1


def close_group(tree: Tree, stack: List[int], marker: int, parent: Node) -> None:
    """Adopt every entry above ``marker`` as a child of ``parent`` and replace them."""
    for child in stack[marker + 1 :]:
        tree.attach(parent.index, child)
    del stack[marker:]
    stack.append(parent.index)


def repair_open_groups(tree: Tree, stack: List[int]) -> None:
    """
    Build a single connected tree out of whatever is left on the stack.

    Every still-open group is closed in turn (innermost first), then any
    remaining top-level entries are joined under a synthetic root.
    """
    while True:
        marker = find_boundary(stack)
        if marker < 0:
            break
        close_group(tree, stack, marker, tree.new_node())
    if len(stack) > 1:
        stack.insert(0, BOUNDARY)
        close_group(tree, stack, 0, tree.new_node())


# ===================================================================
# 4. PUBLIC API
# ===================================================================


def parse_newick(text: str) -> Tree:
    """
    Parse a Newick/NHX string into a Tree.

    Parsing never raises on malformed input. Problems are recorded in
    ``tree.error`` and the best tree that can be built from the consumed text is
    returned, already flattened and with ``tip_count`` set. Only the first
    ';'-terminated statement is read.

    Args:
        text: Newick or NHX text

    Returns:
        Tree whose root is the last node created
    """
    tree = Tree()
    stack: List[int] = []
    pos = 0
    while pos < len(text):
        while pos < len(text) and is_blank(text[pos]):
            pos += 1
        if pos == len(text):
            break
        char = text[pos]
        if char == ";":
            break
        if char == ",":
            pos += 1
        elif char == "(":
            stack.append(BOUNDARY)
            pos += 1
        elif char == ")":
            marker = find_boundary(stack)
            if marker < 0:
                tree.error |= ParseError.MISSING_LEFT
                break
            parent, pos = read_node_token(tree, text, pos + 1)
            close_group(tree, stack, marker, parent)
        else:
            leaf, pos = read_node_token(tree, text, pos)
            stack.append(leaf.index)

    if len(stack) > 1 or BOUNDARY in stack:
        tree.error |= ParseError.MISSING_RIGHT
        repair_open_groups(tree, stack)

    if stack:
        tree.refresh(stack[-1])
    if tree.error:
        logger.warning("Newick parse problems: %s", ", ".join(describe_errors(tree.error)))
    logger.debug("Parsed %d nodes (%d tips)", len(tree.arena), tree.tip_count)
    return tree


def describe_errors(error: ParseError) -> List[str]:
    """Human-readable diagnostics for each bit set in ``error``."""
    return [message for flag, message in ERROR_MESSAGES.items() if error & flag]
