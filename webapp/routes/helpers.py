"""Request handling helpers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from flask import Request

# Actions accepted by POST /sessions/<id>/actions and the fields they need
ACTION_FIELDS: Dict[str, tuple] = {
    "rotate": ("node",),
    "ladderize": (),
    "reroot": ("node",),
    "remove": ("node",),
    "multifurcate": ("node",),
    "move": ("node", "target"),
    "collapse": ("node",),
    "highlight": ("node", "color"),
    "search": (),
}


@dataclass
class ActionRequest:
    """One editing action posted by the front end."""

    action: str
    node: Optional[int] = None
    target: Optional[int] = None
    distance: Optional[float] = None
    color: Optional[str] = None
    pattern: Optional[str] = None


def _json_body(request: Request) -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValueError("Request body must be a JSON object.")
    return payload


def _optional_int(payload: Dict[str, Any], key: str) -> Optional[int]:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{key}' must be an integer node index.")
    return value


def parse_newick_request(request: Request) -> str:
    """Extracts the Newick text from a JSON body or an uploaded 'treeFile'."""
    tree_file = request.files.get("treeFile")
    if tree_file and tree_file.filename:
        return tree_file.read().decode("utf-8", errors="replace")

    payload = _json_body(request)
    text = payload.get("newick")
    if not isinstance(text, str):
        raise ValueError("Missing required field 'newick'.")
    return text


def parse_action_request(request: Request) -> ActionRequest:
    """Parses and validates the incoming request for an editing action."""
    payload = _json_body(request)
    action = payload.get("action")
    if action not in ACTION_FIELDS:
        raise ValueError(
            f"Unknown action {action!r}; expected one of {', '.join(sorted(ACTION_FIELDS))}."
        )

    distance = payload.get("distance")
    if distance is not None:
        if isinstance(distance, bool) or not isinstance(distance, (int, float)):
            raise ValueError("'distance' must be a number.")
        distance = float(distance)

    parsed = ActionRequest(
        action=action,
        node=_optional_int(payload, "node"),
        target=_optional_int(payload, "target"),
        distance=distance,
        color=payload.get("color"),
        pattern=payload.get("pattern"),
    )
    for key in ACTION_FIELDS[action]:
        if getattr(parsed, key) is None:
            raise ValueError(f"Action '{action}' requires field '{key}'.")
    return parsed
