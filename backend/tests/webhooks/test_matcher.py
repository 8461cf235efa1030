# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Tests for the workflow matcher
"""

import pytest
from unittest.mock import AsyncMock

from hookflow.webhooks.matcher import WorkflowMatcher, trigger_matches


@pytest.fixture
def workflow_service():
    service = AsyncMock()
    service.list_workflows = AsyncMock(return_value=[])
    return service


@pytest.fixture
def matcher(workflow_service):
    return WorkflowMatcher(workflow_service)


class TestTriggerMatches:

    def test_matching_workflow(self, workflow_factory):
        assert trigger_matches(workflow_factory(), "github", "github.push") is True

    @pytest.mark.parametrize("status", ["paused", "draft"])
    def test_inactive_never_matches(self, workflow_factory, status):
        assert trigger_matches(workflow_factory(status=status), "github", "github.push") is False

    def test_other_source_service(self, workflow_factory):
        assert trigger_matches(workflow_factory(source_service="notion"), "github", "github.push") is False

    def test_other_event(self, workflow_factory):
        assert trigger_matches(workflow_factory(), "github", "github.issues") is False

    def test_missing_trigger(self, workflow_factory):
        workflow = workflow_factory(config={"filters": [], "actions": []})
        assert trigger_matches(workflow, "github", "github.push") is False

    def test_schedule_trigger(self, workflow_factory):
        workflow = workflow_factory(config={"trigger": {"type": "schedule", "interval": "hourly"}})
        assert trigger_matches(workflow, "github", "github.push") is False

    def test_source_connection_scoping(self, workflow_factory):
        workflow = workflow_factory(source_connection_id=5)

        assert trigger_matches(workflow, "github", "github.push", connection_id=5) is True
        assert trigger_matches(workflow, "github", "github.push", connection_id=6) is False
        assert trigger_matches(workflow, "github", "github.push", connection_id=None) is True

    def test_unscoped_workflow_matches_any_connection(self, workflow_factory):
        assert trigger_matches(workflow_factory(), "github", "github.push", connection_id=9) is True


class TestWorkflowMatcher:

    @pytest.mark.asyncio
    async def test_find_candidates_reads_storage_once(self, matcher, workflow_service, workflow_factory):
        workflow_service.list_workflows.return_value = [
            workflow_factory(id=1),
            workflow_factory(id=2, status="paused"),
            workflow_factory(id=3, config={"trigger": {"type": "webhook", "event": "github.issues"}}),
        ]

        candidates = await matcher.find_candidates("github", "github.push")

        assert [w.id for w in candidates] == [1]
        workflow_service.list_workflows.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_match_applies_filters(self, matcher, workflow_service, workflow_factory):
        main_only = workflow_factory(id=1, config={
            "trigger": {"type": "webhook", "event": "github.push"},
            "filters": [{"field": "ref", "operator": "equals", "value": "refs/heads/main"}],
        })
        unfiltered = workflow_factory(id=2)
        workflow_service.list_workflows.return_value = [main_only, unfiltered]

        on_main = await matcher.match("github", "github.push", {"ref": "refs/heads/main"})
        on_dev = await matcher.match("github", "github.push", {"ref": "refs/heads/dev"})

        assert sorted(w.id for w in on_main) == [1, 2]
        assert [w.id for w in on_dev] == [2]

    @pytest.mark.asyncio
    async def test_no_workflows(self, matcher):
        assert await matcher.match("github", "github.push", {}) == []
