# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Tests for the webhook handler pipeline

Storage and execution are mocked; the matcher is real so tests can assert
whether workflow storage was read.
"""

import json

import pytest
from unittest.mock import AsyncMock

from hookflow.core.errors import AuthenticationError, MalformedEventError, NotFoundError
from hookflow.models.execution import ExecutionStatus
from hookflow.webhooks.dedup import DeliveryDeduplicator
from hookflow.webhooks.handler import WebhookHandler, verification_secret
from hookflow.webhooks.matcher import WorkflowMatcher
from hookflow.webhooks.models import WorkflowRunResult

PUSH = {"ref": "refs/heads/main", "head_commit": {"message": "Fix login bug"}}


@pytest.fixture
def connection_service(connection_factory):
    service = AsyncMock()
    service.get_connection = AsyncMock(return_value=connection_factory())
    return service


@pytest.fixture
def workflow_service(workflow_factory):
    service = AsyncMock()
    service.list_workflows = AsyncMock(return_value=[workflow_factory()])
    return service


@pytest.fixture
def execution_logger():
    logger = AsyncMock()

    async def run(workflow, event, connection_id=None):
        return WorkflowRunResult(workflow_id=workflow.id, status=ExecutionStatus.SUCCESS)

    logger.run = AsyncMock(side_effect=run)
    return logger


@pytest.fixture
def handler(connection_service, workflow_service, execution_logger):
    return WebhookHandler(
        connection_service,
        WorkflowMatcher(workflow_service),
        execution_logger,
        DeliveryDeduplicator(),
    )


@pytest.fixture
def github_delivery(sign_body):
    def make(payload=None, event="push", secret="s3cret", delivery=None):
        body = json.dumps(PUSH if payload is None else payload).encode()
        headers = {"X-GitHub-Event": event, "X-Hub-Signature-256": sign_body(secret, body)}
        if delivery:
            headers["X-GitHub-Delivery"] = delivery
        return body, headers

    return make


class TestRequestErrors:

    @pytest.mark.asyncio
    async def test_unknown_connection(self, handler, connection_service, github_delivery):
        connection_service.get_connection.return_value = None
        body, headers = github_delivery()

        with pytest.raises(NotFoundError):
            await handler.handle("github", 99, body, headers)

    @pytest.mark.asyncio
    async def test_connection_of_other_service(self, handler, github_delivery):
        body, headers = github_delivery()

        with pytest.raises(NotFoundError):
            await handler.handle("notion", 1, body, headers)

    @pytest.mark.asyncio
    async def test_unsupported_service(self, handler, connection_service, connection_factory):
        connection_service.get_connection.return_value = connection_factory(service="slack")

        with pytest.raises(MalformedEventError, match="Unsupported service"):
            await handler.handle("slack", 1, b"{}", {})

    @pytest.mark.asyncio
    async def test_invalid_signature_skips_workflow_lookup(self, handler, workflow_service, execution_logger, github_delivery):
        body, headers = github_delivery(secret="wrong")

        with pytest.raises(AuthenticationError):
            await handler.handle("github", 1, body, headers)

        workflow_service.list_workflows.assert_not_awaited()
        execution_logger.run.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unparsable_body_after_valid_signature(self, handler, sign_body):
        body = b"{not json"
        headers = {"X-GitHub-Event": "push", "X-Hub-Signature-256": sign_body("s3cret", body)}

        with pytest.raises(MalformedEventError, match="Invalid JSON"):
            await handler.handle("github", 1, body, headers)

    @pytest.mark.asyncio
    async def test_unparsable_body_with_bad_signature_is_401(self, handler):
        with pytest.raises(AuthenticationError):
            await handler.handle("github", 1, b"{not json", {"X-Hub-Signature-256": "sha256=00"})

    @pytest.mark.asyncio
    async def test_missing_event_type(self, handler, github_delivery):
        body, headers = github_delivery()
        del headers["X-GitHub-Event"]

        with pytest.raises(MalformedEventError, match="event type"):
            await handler.handle("github", 1, body, headers)


class TestProcessing:

    @pytest.mark.asyncio
    async def test_ping_short_circuits(self, handler, workflow_service, github_delivery):
        body, headers = github_delivery(payload={"zen": "Keep it simple"}, event="ping")

        result = await handler.handle("github", 1, body, headers)

        assert result.status_code == 200
        assert result.body == {"message": "Webhook received successfully"}
        workflow_service.list_workflows.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unsigned_ping_is_answered(self, handler, workflow_service):
        result = await handler.handle("github", 1, b'{"zen": "x"}', {"X-GitHub-Event": "ping"})

        assert result.status_code == 200
        assert result.body == {"message": "Webhook received successfully"}
        workflow_service.list_workflows.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unparsable_ping_is_answered(self, handler):
        result = await handler.handle("github", 1, b"{not json", {"X-GitHub-Event": "ping"})

        assert result.status_code == 200

    @pytest.mark.asyncio
    async def test_matched_workflow_runs(self, handler, execution_logger, github_delivery):
        body, headers = github_delivery()

        result = await handler.handle("github", 1, body, headers)

        assert result.status_code == 200
        assert result.body == {
            "message": "Webhook processed",
            "event": "github.push",
            "matchedWorkflows": 1,
            "executedWorkflows": 1,
        }
        workflow, event, connection_id = execution_logger.run.await_args.args
        assert event.payload == PUSH
        assert event.service == "github"
        assert connection_id == 1

    @pytest.mark.asyncio
    async def test_no_matching_workflows(self, handler, workflow_service, execution_logger, github_delivery):
        workflow_service.list_workflows.return_value = []
        body, headers = github_delivery()

        result = await handler.handle("github", 1, body, headers)

        assert result.status_code == 200
        assert result.body["matchedWorkflows"] == 0
        assert result.body["executedWorkflows"] == 0
        execution_logger.run.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_filtered_out_workflows_are_not_counted(self, handler, workflow_service, workflow_factory, github_delivery):
        workflow_service.list_workflows.return_value = [workflow_factory(config={
            "trigger": {"type": "webhook", "event": "github.push"},
            "filters": [{"field": "ref", "operator": "equals", "value": "refs/heads/release"}],
        })]
        body, headers = github_delivery()

        result = await handler.handle("github", 1, body, headers)

        assert result.body["matchedWorkflows"] == 0

    @pytest.mark.asyncio
    async def test_failed_workflow_does_not_affect_siblings(
        self, handler, workflow_service, workflow_factory, execution_logger, github_delivery
    ):
        workflow_service.list_workflows.return_value = [workflow_factory(id=1), workflow_factory(id=2)]

        async def run(workflow, event, connection_id=None):
            if workflow.id == 1:
                return WorkflowRunResult(workflow_id=1, status=ExecutionStatus.ERROR, error="boom")
            return WorkflowRunResult(workflow_id=2, status=ExecutionStatus.SUCCESS)

        execution_logger.run.side_effect = run
        body, headers = github_delivery()

        result = await handler.handle("github", 1, body, headers)

        assert result.status_code == 200
        assert result.body["matchedWorkflows"] == 2
        assert result.body["executedWorkflows"] == 1
        assert execution_logger.run.await_count == 2

    @pytest.mark.asyncio
    async def test_warning_counts_as_executed(self, handler, execution_logger, github_delivery):
        async def run(workflow, event, connection_id=None):
            return WorkflowRunResult(workflow_id=workflow.id, status=ExecutionStatus.WARNING)

        execution_logger.run.side_effect = run
        body, headers = github_delivery()

        result = await handler.handle("github", 1, body, headers)

        assert result.body["executedWorkflows"] == 1

    @pytest.mark.asyncio
    async def test_duplicate_delivery_runs_once(self, handler, execution_logger, github_delivery):
        body, headers = github_delivery(delivery="72d3162e-cc78-11e3-81ab-4c9367dc0958")

        first = await handler.handle("github", 1, body, headers)
        second = await handler.handle("github", 1, body, headers)

        assert first.body["matchedWorkflows"] == 1
        assert second.status_code == 200
        assert second.body["duplicate"] is True
        assert execution_logger.run.await_count == 1

    @pytest.mark.asyncio
    async def test_failed_delivery_is_processed_on_redelivery(
        self, handler, workflow_service, workflow_factory, execution_logger, github_delivery
    ):
        workflow_service.list_workflows.side_effect = [OSError("disk unavailable"), [workflow_factory()]]
        body, headers = github_delivery(delivery="d1")

        with pytest.raises(OSError):
            await handler.handle("github", 1, body, headers)

        retry = await handler.handle("github", 1, body, headers)

        assert "duplicate" not in retry.body
        assert retry.body["executedWorkflows"] == 1
        assert execution_logger.run.await_count == 1


class TestTaskade:

    @pytest.mark.asyncio
    async def test_bearer_token_uses_api_token(self, handler, connection_service, connection_factory, workflow_service, workflow_factory):
        connection_service.get_connection.return_value = connection_factory(
            service="taskade", api_token="tk_123", webhook_secret="unused"
        )
        workflow_service.list_workflows.return_value = [workflow_factory(
            source_service="taskade",
            target_service="github",
            config={"trigger": {"type": "webhook", "event": "taskade.task.created"}},
        )]
        body = json.dumps({"event_type": "task_created", "task": {"name": "Write docs"}}).encode()

        result = await handler.handle("taskade", 1, body, {"Authorization": "Bearer tk_123"})

        assert result.body["event"] == "taskade.task.created"
        assert result.body["matchedWorkflows"] == 1

    @pytest.mark.asyncio
    async def test_wrong_token(self, handler, connection_service, connection_factory):
        connection_service.get_connection.return_value = connection_factory(service="taskade", api_token="tk_123")

        with pytest.raises(AuthenticationError):
            await handler.handle("taskade", 1, b'{"event_type":"task_created"}', {"Authorization": "Bearer nope"})


def test_verification_secret(connection_factory):
    assert verification_secret(connection_factory(service="github")) == "s3cret"
    assert verification_secret(connection_factory(service="taskade", api_token="tk")) == "tk"
    assert verification_secret(connection_factory(service="taskade", api_token=None)) == "s3cret"
