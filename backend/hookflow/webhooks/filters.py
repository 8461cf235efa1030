# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Filter Evaluator

Gates a workflow on predicates over the event payload. All filters must
pass. Comparisons never raise: type mismatches simply fail the predicate.
"""

import operator
from typing import Any, Callable, Dict

from hookflow.models.workflow import Filter, FilterOperator, Workflow
from hookflow.webhooks.paths import MISSING, resolve_path


def _strictly_equal(actual: Any, expected: Any) -> bool:
    # True == 1 in Python; payload booleans must only equal booleans
    if isinstance(actual, bool) != isinstance(expected, bool):
        return False
    return actual == expected


def _string_op(method: str) -> Callable[[Any, Any], bool]:
    def check(actual: Any, expected: Any) -> bool:
        return isinstance(actual, str) and isinstance(expected, str) and getattr(actual, method)(expected)
    return check


def _ordering(compare: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def check(actual: Any, expected: Any) -> bool:
        if actual is None or expected is None:
            return False
        try:
            return bool(compare(actual, expected))
        except TypeError:
            return False
    return check


OPERATORS: Dict[FilterOperator, Callable[[Any, Any], bool]] = {
    FilterOperator.EQUALS: _strictly_equal,
    FilterOperator.NOT_EQUALS: lambda actual, expected: not _strictly_equal(actual, expected),
    FilterOperator.CONTAINS: _string_op("__contains__"),
    FilterOperator.STARTS_WITH: _string_op("startswith"),
    FilterOperator.ENDS_WITH: _string_op("endswith"),
    FilterOperator.GREATER_THAN: _ordering(operator.gt),
    FilterOperator.LESS_THAN: _ordering(operator.lt),
}


def evaluate_filter(filter_: Filter, payload: Any) -> bool:
    actual = resolve_path(payload, filter_.field)

    if actual is MISSING:
        # A missing field only differs from a concrete expected value
        return filter_.operator == FilterOperator.NOT_EQUALS and filter_.value is not None

    return OPERATORS[filter_.operator](actual, filter_.value)


def matches(workflow: Workflow, payload: Any) -> bool:
    """True when every filter of the workflow passes (no filters: True)"""
    return all(evaluate_filter(f, payload) for f in workflow.config.filters)
