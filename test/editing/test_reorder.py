from nhxedit.editing import reorder, rotate_children, toggle_collapse
from nhxedit.io import write_newick
from nhxedit.parser import parse_newick


def test_reorder_puts_deeper_clades_first():
    tree = parse_newick("(A,(B,C));")
    reorder(tree)
    tree.refresh()
    assert write_newick(tree) == "((B,C),A);"


def test_reorder_sets_aggregates():
    tree = parse_newick("(A,(B,C)X);")
    reorder(tree)
    assert tree.aggregates_current()
    x = tree[tree.find("X")]
    assert x.tip_count == 2
    assert x.weight == 1.0
    assert tree.root_node().tip_count == 3
    assert tree.root_node().depth == 0
    tree.refresh()
    assert not tree.aggregates_current()


def test_reorder_is_idempotent():
    tree = parse_newick("((D,(B,C)),(A,(E,(F,G))));")
    reorder(tree)
    tree.refresh()
    once = write_newick(tree)
    reorder(tree)
    tree.refresh()
    assert write_newick(tree) == once


def test_reorder_treats_collapsed_node_as_tip():
    tree = parse_newick("((A,(B,C))X,D);")
    toggle_collapse(tree, tree.find("X"))
    tree.refresh()
    reorder(tree)
    tree.refresh()
    # X is a tip at depth 1, ranked after D by name
    assert write_newick(tree) == "(D,(A,(B,C))X);"


def test_reorder_subtree_only():
    tree = parse_newick("(A,(B,(C,D))X);")
    reorder(tree, tree.find("X"))
    tree.refresh()
    assert write_newick(tree) == "(A,((C,D),B)X);"


def test_rotate_children():
    tree = parse_newick("(A,B,C);")
    rotate_children(tree, tree.root)
    tree.refresh()
    assert write_newick(tree) == "(B,C,A);"
