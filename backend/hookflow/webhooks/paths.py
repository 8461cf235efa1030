# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Dotted path resolution shared by filters and templates.

`commits[0].message` walks key `commits`, index 0, then key `message`.
Each segment may carry at most one integer index.
"""

import re
from typing import Any

SEGMENT_PATTERN = re.compile(r'^([^\[\]]*)(?:\[(\d+)\])?$')


class _Missing:
    """Marker for a path that does not resolve (distinct from a JSON null)"""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def _step(current: Any, key: str) -> Any:
    if isinstance(current, dict) and key in current:
        return current[key]
    return MISSING


def _index(current: Any, index: int) -> Any:
    if isinstance(current, list) and 0 <= index < len(current):
        return current[index]
    return MISSING


def resolve_path(data: Any, path: str) -> Any:
    """
    Resolve a dotted path.

    Args:
        data: Root object (usually the event payload or template context)
        path: Dotted path, e.g. "pull_request.head.ref" or "commits[0].id"

    Returns:
        Resolved value, or MISSING
    """
    current = data
    for segment in path.split("."):
        match = SEGMENT_PATTERN.match(segment)
        if not match:
            return MISSING

        key, index = match.groups()
        if key:
            current = _step(current, key)
            if current is MISSING:
                return MISSING
        elif index is None:
            return MISSING

        if index is not None:
            current = _index(current, int(index))
            if current is MISSING:
                return MISSING

    return current
