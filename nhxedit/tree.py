from __future__ import annotations

from enum import IntFlag
from typing import Iterator, List, Optional, Set

from nhxedit.exceptions import TreeInvariantError, UnknownNodeError


class ParseError(IntFlag):
    """Independent error bits set by the parser on a best-effort tree."""

    NONE = 0
    MISSING_LEFT = 1  # ")" without a matching "("
    MISSING_RIGHT = 2  # "(" never closed
    UNCLOSED_BRACKET = 4  # "[" metadata block never closed


def add_lengths(a: Optional[float], b: Optional[float]) -> Optional[float]:
    """Sum two branch lengths; the result is unspecified if either input is."""
    if a is None or b is None:
        return None
    return a + b


class Node:
    """
    A tree element stored in a Tree's arena.

    ``parent`` and ``children`` hold arena indices rather than object references,
    so a parent link never owns anything and a detached subtree is simply the set
    of indices reachable from its root.

    ``depth``, ``weight`` and ``tip_count`` are scratch aggregates written by
    reorder and the serializer. They are only meaningful right after the call
    that produced them.
    """

    __slots__ = (
        "index",
        "parent",
        "children",
        "name",
        "length",
        "metadata",
        "highlighted",
        "collapsed",
        "highlight_color",
        "depth",
        "weight",
        "tip_count",
    )

    index: int
    parent: Optional[int]
    children: List[int]
    name: str
    length: Optional[float]
    metadata: str
    highlighted: bool
    collapsed: bool
    highlight_color: Optional[str]
    depth: Optional[int]
    weight: Optional[float]
    tip_count: Optional[int]

    def __init__(
        self,
        index: int,
        name: str = "",
        length: Optional[float] = None,
        metadata: str = "",
        children: Optional[List[int]] = None,
        parent: Optional[int] = None,
    ):
        self.index = index
        self.parent = parent
        self.children = list(children) if children is not None else []
        self.name = name
        self.length = length
        self.metadata = metadata
        self.highlighted = False
        self.collapsed = False
        self.highlight_color = None
        self.depth = None
        self.weight = None
        self.tip_count = None

    def __repr__(self) -> str:
        return f"Node({self.index}, '{self.name}')"

    def is_leaf(self) -> bool:
        return len(self.children) == 0

    def is_internal(self) -> bool:
        return bool(self.children)

    def is_visible_tip(self) -> bool:
        """A node drawn as a tip: a leaf, or a collapsed internal node."""
        return not self.children or self.collapsed


class Tree:
    """
    Arena of nodes plus the flattened postorder view of the current root.

    ``nodes`` reflects the pointer graph only as of the last ``refresh`` call;
    every structural edit or collapse toggle must be followed by one.
    """

    def __init__(self) -> None:
        self.arena: List[Node] = []
        self.root: Optional[int] = None
        self.nodes: List[Node] = []
        self.error: ParseError = ParseError.NONE
        self.tip_count: int = 0
        self.generation: int = 0
        self.aggregates_generation: Optional[int] = None

    def __getitem__(self, index: int) -> Node:
        if index < 0 or index >= len(self.arena):
            raise UnknownNodeError(f"Node index {index} is not in the tree")
        return self.arena[index]

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __repr__(self) -> str:
        return f"Tree(nodes={len(self.nodes)}, tips={self.tip_count}, error={int(self.error)})"

    # ------------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------------

    def new_node(
        self,
        name: str = "",
        length: Optional[float] = None,
        metadata: str = "",
    ) -> Node:
        node = Node(len(self.arena), name=name, length=length, metadata=metadata)
        self.arena.append(node)
        return node

    def attach(self, parent: int, child: int) -> None:
        """Append ``child`` as the last child of ``parent``."""
        self.arena[parent].children.append(child)
        self.arena[child].parent = parent

    # ------------------------------------------------------------------------
    # flattening
    # ------------------------------------------------------------------------

    def refresh(self, root: Optional[int] = None) -> List[Node]:
        """Set the root (if given), re-flatten and recount tips."""
        if root is not None:
            self.root = root
        if self.root is None:
            self.nodes = []
        else:
            self.nodes = flatten(self, self.root)
        self.generation += 1
        count_tips(self)
        return self.nodes

    def aggregates_current(self) -> bool:
        """True while depth/weight/tip_count from the last reorder are still valid."""
        return self.aggregates_generation == self.generation

    def subtree(self, index: int) -> List[Node]:
        """Full postorder of the subtree at ``index``, collapsed nodes included."""
        return flatten(self, index, expand_collapsed=True)

    # ------------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------------

    def root_node(self) -> Optional[Node]:
        return self.arena[self.root] if self.root is not None else None

    def find(self, name: str) -> int:
        """Return the index of the first reachable node called ``name``."""
        if self.root is not None:
            for node in self.subtree(self.root):
                if node.name == name:
                    return node.index
        raise UnknownNodeError.for_name(name)

    def leaves(self) -> List[Node]:
        if self.root is None:
            return []
        return [node for node in self.subtree(self.root) if not node.children]

    def is_ancestor(self, ancestor: int, descendant: int) -> bool:
        """True if ``ancestor`` is ``descendant`` or lies on its parent chain."""
        current: Optional[int] = descendant
        while current is not None:
            if current == ancestor:
                return True
            current = self.arena[current].parent
        return False

    def child_position(self, parent: int, child: int) -> int:
        children = self.arena[parent].children
        for i, c in enumerate(children):
            if c == child:
                return i
        raise TreeInvariantError(
            f"Node {child} is not listed among the children of node {parent}"
        )

    def check_integrity(self) -> None:
        """
        Verify that the graph under the root is a proper rooted tree.

        Raises:
            TreeInvariantError: if a parent link disagrees with the children lists,
                a node is reachable twice, or the root has a parent.
        """
        if self.root is None:
            return
        if self.arena[self.root].parent is not None:
            raise TreeInvariantError(f"Root {self.root} has a parent")
        seen: Set[int] = set()
        stack = [self.root]
        while stack:
            index = stack.pop()
            if index in seen:
                raise TreeInvariantError(f"Node {index} is reachable more than once")
            seen.add(index)
            for child in self.arena[index].children:
                if self.arena[child].parent != index:
                    raise TreeInvariantError(
                        f"Node {child} is a child of {index} but points to "
                        f"{self.arena[child].parent}"
                    )
                stack.append(child)


def flatten(tree: Tree, root: int, expand_collapsed: bool = False) -> List[Node]:
    """
    Return the postorder ("finishing order") of the subtree at ``root``.

    Uses an explicit stack of ``[node index, next child cursor]`` frames so that
    arbitrarily deep trees do not hit the interpreter's recursion limit. A
    collapsed node is emitted without its descendants unless
    ``expand_collapsed`` is set.
    """
    arena = tree.arena
    order: List[Node] = []
    stack: List[List[int]] = [[root, 0]]
    while stack:
        frame = stack[-1]
        node = arena[frame[0]]
        if frame[1] < len(node.children) and (expand_collapsed or not node.collapsed):
            child = node.children[frame[1]]
            frame[1] += 1
            stack.append([child, 0])
        else:
            order.append(node)
            stack.pop()
    return order


def count_tips(tree: Tree) -> int:
    """Recompute ``tree.tip_count`` from the flattened sequence."""
    tree.tip_count = sum(1 for node in tree.nodes if node.is_visible_tip())
    return tree.tip_count


def assign_depths(tree: Tree, order: List[Node]) -> None:
    """Set ``depth`` along a postorder: its last node gets 0, children parent + 1."""
    order[-1].depth = 0
    for node in reversed(order[:-1]):
        node.depth = tree.arena[node.parent].depth + 1
