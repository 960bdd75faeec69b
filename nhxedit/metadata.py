"""
Optional helpers for reading fields out of a node's metadata blob.

The parser keeps metadata as the verbatim bracketed string. Nothing in the
editing core looks inside it; renderers and reports call these helpers on
demand.
"""

import re
from functools import lru_cache
from typing import Dict, Optional, Pattern, Tuple

from nhxedit.exceptions import SearchPatternError

# Second label shown next to internal nodes: the NHX bootstrap value
DEFAULT_LABEL_PATTERN = r":B=([^:\]]+)"


@lru_cache(maxsize=32)
def _compile(pattern: str) -> Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise SearchPatternError(pattern, str(e)) from e


def extract_field(metadata: str, pattern: str = DEFAULT_LABEL_PATTERN) -> Optional[str]:
    """
    Return the first capture group of ``pattern`` found in ``metadata``.

    Args:
        metadata: The verbatim metadata string, e.g. "[&&NHX:S=human:B=100]"
        pattern: Regular expression with at least one capture group

    Returns:
        The captured text, or None if the pattern does not match or has no group

    Raises:
        SearchPatternError: if ``pattern`` is not a valid regular expression
    """
    if not metadata or not pattern:
        return None
    match = _compile(pattern).search(metadata)
    if match is None or not match.groups():
        return None
    return match.group(1)


def split_token(token: str) -> Tuple[str, str]:
    """
    Split a "key=value" token. A bare key maps to an empty string.
    """
    if "=" in token:
        key, value = token.split("=", 1)
        return key.strip(), value.strip()
    return token.strip(), ""


def nhx_fields(metadata: str) -> Dict[str, str]:
    """
    Split a metadata blob into key/value pairs.

    Handles both the NHX form ``[&&NHX:key1=value1:key2=value2]`` and the
    generic ``[key1=value1,key2=value2]`` form. Values are kept as strings.
    """
    content = metadata.strip()
    if content.startswith("[") and content.endswith("]"):
        content = content[1:-1]

    if content.startswith("&&NHX"):
        tokens = content[5:].split(":")
    else:
        tokens = content.lstrip("&").split(",")

    fields: Dict[str, str] = {}
    for token in tokens:
        if token.strip():
            key, value = split_token(token)
            fields[key] = value
    return fields
