import logging

import pytest

from nhxedit.parser import parse_newick


def pytest_configure(config):
    """Set up test environment before tests run."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("nhxedit").setLevel(logging.DEBUG)


@pytest.fixture
def tree_abc():
    """((A:1,B:2):1,C:3); with arena indices A=0, B=1, inner=2, C=3, root=4."""
    return parse_newick("((A:1,B:2):1,C:3);")


@pytest.fixture
def names():
    """Leaf names in postorder of the visible sequence."""

    def _names(tree):
        return [node.name for node in tree.nodes if node.is_leaf()]

    return _names
