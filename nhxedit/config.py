"""Configuration for editing sessions."""

import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from nhxedit.metadata import DEFAULT_LABEL_PATTERN

# Clade highlight colours offered by the editor; "none" clears the colour
HIGHLIGHT_COLORS: Dict[str, Optional[str]] = {
    "white": "#FFFFFF",
    "red": "#FFD8D0",
    "green": "#D8FFC0",
    "blue": "#C0D8FF",
    "yellow": "#FFFFC8",
    "pink": "#FFD8FF",
    "cyan": "#D8FFFF",
    "none": None,
}


@dataclass
class EditorConfig:
    """Settings shared by every action of a TreeSession."""

    label_pattern: str = DEFAULT_LABEL_PATTERN
    pretty_output: bool = True
    reroot_distance: Optional[float] = None  # None places the root mid-edge
    highlight_colors: Dict[str, Optional[str]] = field(
        default_factory=lambda: dict(HIGHLIGHT_COLORS)
    )
    logger_name: str = "nhxedit"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        """
        Build a config, overriding defaults from ``NHXEDIT_*`` variables.

        Recognised variables: NHXEDIT_LABEL_PATTERN, NHXEDIT_PRETTY ("0"/"1"),
        NHXEDIT_REROOT_DISTANCE (a number; empty means midpoint).
        """
        env = os.environ if environ is None else environ
        config = cls()
        if "NHXEDIT_LABEL_PATTERN" in env:
            config.label_pattern = env["NHXEDIT_LABEL_PATTERN"]
        if "NHXEDIT_PRETTY" in env:
            config.pretty_output = env["NHXEDIT_PRETTY"] == "1"
        distance = env.get("NHXEDIT_REROOT_DISTANCE", "").strip()
        if distance:
            config.reroot_distance = float(distance)
        return config
