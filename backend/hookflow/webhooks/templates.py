# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Template interpolation for action parameters.

`${payload.head_commit.message}` is replaced by the resolved value.
Unresolved placeholders are left in place so misconfigured templates show
up verbatim in the created issue, task or page.
"""

import json
import re
from typing import Any, Dict

from hookflow.webhooks.paths import MISSING, resolve_path

TEMPLATE_PATTERN = re.compile(r'\$\{([^}]+)\}')


def _render(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, dict, list)) or value is None:
        return json.dumps(value)
    return str(value)


def interpolate(template: str, context: Dict[str, Any]) -> str:
    """Replace every ${path} in a string"""

    def replace(match: re.Match) -> str:
        value = resolve_path(context, match.group(1).strip())
        if value is MISSING:
            return match.group(0)
        return _render(value)

    return TEMPLATE_PATTERN.sub(replace, template)


def interpolate_params(params: Any, context: Dict[str, Any]) -> Any:
    """Interpolate strings inside a parameter structure; other values pass through"""
    if isinstance(params, str):
        return interpolate(params, context)
    if isinstance(params, dict):
        return {key: interpolate_params(value, context) for key, value in params.items()}
    if isinstance(params, list):
        return [interpolate_params(item, context) for item in params]
    return params
