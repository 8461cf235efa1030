# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Tests for the filter evaluator
"""

import pytest

from hookflow.models.workflow import Filter, FilterOperator
from hookflow.webhooks.filters import evaluate_filter, matches


def with_filters(workflow_factory, *filters):
    return workflow_factory(config={
        "trigger": {"type": "webhook", "event": "github.push"},
        "filters": [f.model_dump() for f in filters],
        "actions": [],
    })


class TestMatches:

    def test_no_filters_matches_anything(self, workflow_factory):
        workflow = with_filters(workflow_factory)
        assert matches(workflow, {}) is True
        assert matches(workflow, None) is True

    def test_ref_equals(self, workflow_factory):
        workflow = with_filters(workflow_factory, Filter(field="ref", operator="equals", value="refs/heads/main"))

        assert matches(workflow, {"ref": "refs/heads/main"}) is True
        assert matches(workflow, {"ref": "refs/heads/dev"}) is False
        assert matches(workflow, {}) is False

    def test_all_filters_must_pass(self, workflow_factory):
        workflow = with_filters(
            workflow_factory,
            Filter(field="ref", operator="equals", value="refs/heads/main"),
            Filter(field="commits[0].message", operator="contains", value="fix"),
        )

        assert matches(workflow, {"ref": "refs/heads/main", "commits": [{"message": "fix bug"}]}) is True
        assert matches(workflow, {"ref": "refs/heads/main", "commits": [{"message": "feature"}]}) is False


class TestOperators:

    @pytest.mark.parametrize("operator,actual,expected,result", [
        ("equals", "a", "a", True),
        ("equals", 1, 1, True),
        ("equals", True, 1, False),
        ("equals", 1, "1", False),
        ("not_equals", "a", "b", True),
        ("not_equals", "a", "a", False),
        ("contains", "fix login", "login", True),
        ("contains", ["login"], "login", False),
        ("contains", "fix login", 5, False),
        ("starts_with", "refs/heads/main", "refs/heads/", True),
        ("starts_with", 123, "1", False),
        ("ends_with", "release-1.0", "1.0", True),
        ("ends_with", "release-1.0", "2.0", False),
        ("greater_than", 5, 3, True),
        ("greater_than", 3, 5, False),
        ("greater_than", "b", "a", True),
        ("greater_than", "5", 3, False),
        ("less_than", 1.5, 2, True),
        ("less_than", None, 2, False),
    ])
    def test_operator(self, operator, actual, expected, result):
        f = Filter(field="value", operator=operator, value=expected)
        assert evaluate_filter(f, {"value": actual}) is result

    @pytest.mark.parametrize("operator", [op for op in FilterOperator if op != FilterOperator.NOT_EQUALS])
    def test_missing_field_fails(self, operator):
        f = Filter(field="absent.path", operator=operator, value="x")
        assert evaluate_filter(f, {"present": 1}) is False

    def test_missing_field_not_equals_defined_value(self):
        f = Filter(field="absent", operator="not_equals", value="x")
        assert evaluate_filter(f, {}) is True

    def test_missing_field_not_equals_undefined_value(self):
        f = Filter(field="absent", operator="not_equals")
        assert evaluate_filter(f, {}) is False

    def test_explicit_null_equals_none(self):
        f = Filter(field="assignee", operator="equals", value=None)
        assert evaluate_filter(f, {"assignee": None}) is True

    def test_unknown_operator_rejected_at_validation(self):
        with pytest.raises(ValueError):
            Filter(field="ref", operator="matches_regex", value=".*")
