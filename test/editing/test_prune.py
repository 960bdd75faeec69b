import pytest

from nhxedit.editing import prune
from nhxedit.exceptions import UnknownNodeError
from nhxedit.io import write_newick
from nhxedit.parser import parse_newick


def test_prune_splices_two_child_parent(tree_abc):
    new_root = prune(tree_abc, tree_abc.find("B"))
    tree_abc.refresh(new_root)
    assert write_newick(tree_abc) == "(A:2,C:3);"
    assert tree_abc.tip_count == 2
    tree_abc.check_integrity()


def test_prune_removes_from_multifurcation():
    tree = parse_newick("(A,B,C);")
    tree.refresh(prune(tree, tree.find("B")))
    assert write_newick(tree) == "(A,C);"


def test_prune_child_of_two_child_root_promotes_sibling():
    tree = parse_newick("(A:1,(B:1,C:1):2);")
    new_root = prune(tree, tree.find("A"))
    tree.refresh(new_root)
    assert tree[new_root].parent is None
    # the root carried no length, so the promoted edge becomes unspecified
    assert write_newick(tree) == "(B:1,C:1);"


def test_prune_sibling_length_unspecified():
    tree = parse_newick("((A:1,B):1,C);")
    tree.refresh(prune(tree, tree.find("A")))
    assert tree[tree.find("B")].length is None


def test_prune_root_is_noop(tree_abc):
    assert prune(tree_abc, tree_abc.root) == tree_abc.root
    tree_abc.refresh()
    assert write_newick(tree_abc) == "((A:1,B:2):1,C:3);"


def test_pruned_subtree_keeps_its_shape():
    tree = parse_newick("((A,B)X,C);")
    x = tree.find("X")
    tree.refresh(prune(tree, x))
    assert tree[x].parent is None
    assert [tree[c].name for c in tree[x].children] == ["A", "B"]
    with pytest.raises(UnknownNodeError):
        prune(tree, x)


def test_arena_is_not_compacted(tree_abc):
    size = len(tree_abc.arena)
    tree_abc.refresh(prune(tree_abc, 1))
    assert len(tree_abc.arena) == size
