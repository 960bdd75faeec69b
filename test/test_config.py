from nhxedit.config import HIGHLIGHT_COLORS, EditorConfig
from nhxedit.metadata import DEFAULT_LABEL_PATTERN


def test_defaults():
    config = EditorConfig()
    assert config.label_pattern == DEFAULT_LABEL_PATTERN
    assert config.pretty_output is True
    assert config.reroot_distance is None
    assert config.highlight_colors == HIGHLIGHT_COLORS


def test_highlight_colors_are_copied():
    config = EditorConfig()
    config.highlight_colors["orange"] = "#FFD080"
    assert "orange" not in HIGHLIGHT_COLORS


def test_from_env():
    config = EditorConfig.from_env(
        {
            "NHXEDIT_LABEL_PATTERN": r"S=(\w+)",
            "NHXEDIT_PRETTY": "0",
            "NHXEDIT_REROOT_DISTANCE": "0.5",
        }
    )
    assert config.label_pattern == r"S=(\w+)"
    assert config.pretty_output is False
    assert config.reroot_distance == 0.5


def test_from_env_empty_distance_means_midpoint():
    assert EditorConfig.from_env({"NHXEDIT_REROOT_DISTANCE": " "}).reroot_distance is None
