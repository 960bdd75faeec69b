import pytest

from nhxedit.parser import describe_errors, parse_newick, read_length, read_metadata
from nhxedit.tree import ParseError


def test_parse_newick_1():
    # a comma does not create a leaf by itself; only name, length or
    # metadata tokens do
    s = "(,,(,));"
    tree = parse_newick(s)
    assert len(tree.root_node().children) == 1
    assert tree.tip_count == 1
    assert tree.error == ParseError.NONE


def test_parse_newick_2():
    s = "(A,B,(C,D));"
    tree = parse_newick(s)
    root = tree.root_node()
    assert [tree[c].name for c in root.children[:2]] == ["A", "B"]
    inner = tree[root.children[2]]
    assert [tree[c].name for c in inner.children] == ["C", "D"]


def test_parse_newick_3():
    s = "(A,B,(C,D)E)F;"
    tree = parse_newick(s)
    assert tree.root_node().name == "F"
    assert tree[tree.find("C")].parent == tree.find("E")
    assert [node.name for node in tree.nodes] == ["A", "B", "C", "D", "E", "F"]


def test_parse_lengths():
    tree = parse_newick("(A:1,B:2);")
    assert tree[tree.find("A")].length == 1.0
    assert tree[tree.find("B")].length == 2.0
    assert tree.root_node().length is None
    assert tree.tip_count == 2
    assert tree.error == ParseError.NONE


def test_parse_lengths_with_exponent_and_root_length():
    tree = parse_newick("(:0.1,:2e-3,(:0.3,:0.4):0.5):0.0;")
    lengths = [node.length for node in tree.nodes]
    assert lengths == [0.1, 0.002, 0.3, 0.4, 0.5, 0.0]


def test_parse_tolerates_whitespace():
    tree = parse_newick("( A : 1 ,\n  B:2 ) ;")
    assert [node.name for node in tree.nodes[:2]] == ["A", "B"]
    assert tree[0].length == 1.0
    assert tree.error == ParseError.NONE


def test_parse_nhx_metadata():
    tree = parse_newick("(A:1[&&NHX:S=human],B:2[&&NHX:S=mouse])[&&NHX:B=100];")
    a = tree[tree.find("A")]
    assert a.name == "A"
    assert a.length == 1.0
    assert a.metadata == "[&&NHX:S=human]"
    assert tree.root_node().name == ""
    assert tree.root_node().metadata == "[&&NHX:B=100]"


def test_only_first_statement_is_read():
    tree = parse_newick("(A,B);(C,D);")
    assert tree.tip_count == 2
    assert tree.error == ParseError.NONE


def test_missing_right_parenthesis_is_repaired():
    tree = parse_newick("(A,(B,C);")
    assert tree.error & ParseError.MISSING_RIGHT
    assert tree.tip_count == 3
    tree.check_integrity()
    assert describe_errors(tree.error) == ["missing right parenthesis"]


def test_lone_open_parenthesis():
    tree = parse_newick("(A")
    assert tree.error & ParseError.MISSING_RIGHT
    assert tree.tip_count == 1


def test_top_level_list_is_joined_under_a_root():
    tree = parse_newick("A,B;")
    assert tree.error == ParseError.MISSING_RIGHT
    assert len(tree.root_node().children) == 2


def test_missing_left_parenthesis_stops_parsing():
    tree = parse_newick("(A,B))")
    assert tree.error == ParseError.MISSING_LEFT
    assert tree.tip_count == 2
    assert describe_errors(tree.error) == ["missing left parenthesis"]


def test_unclosed_bracket():
    tree = parse_newick("(A[&&NHX:S=x,B);")
    assert tree.error & ParseError.UNCLOSED_BRACKET
    assert "missing closing bracket" in describe_errors(tree.error)
    assert tree[0].name == "A"
    assert tree[0].metadata == ""


@pytest.mark.parametrize("text", ["", ";", "   \n"])
def test_empty_input(text):
    tree = parse_newick(text)
    assert tree.root is None
    assert tree.nodes == []
    assert tree.tip_count == 0
    assert tree.error == ParseError.NONE


def test_single_leaf():
    tree = parse_newick("A;")
    assert tree.root == 0
    assert tree.tip_count == 1
    assert len(tree) == 1


def test_read_length_skips_leading_whitespace():
    assert read_length(": 1.5,", 1) == (1.5, 5)
    assert read_length(":,", 1) == (None, 1)


def test_read_length_malformed_number():
    length, pos = read_length(":1-2)", 1)
    assert length is None
    assert pos == 4


def test_read_metadata():
    assert read_metadata("A[x=1]:2", 1) == ("[x=1]", 6)
    assert read_metadata("A[x=1", 1) == (None, 5)


def test_non_ascii_names_are_kept_whole():
    tree = parse_newick("(Bär:1,Émile:2)Wurzel_ß;")
    assert [node.name for node in tree.nodes] == ["Bär", "Émile", "Wurzel_ß"]
    assert tree.error == ParseError.NONE


def test_control_characters_end_a_name():
    tree = parse_newick("(A\x7fjunk,B\tC);")
    assert [node.name for node in tree.nodes[:2]] == ["A", "B"]
