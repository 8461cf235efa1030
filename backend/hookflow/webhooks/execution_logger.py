# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Execution Logger - one ExecutionRecord per workflow execution attempt.
"""

import time
from typing import Any, Dict, Optional

from hookflow.core.logging import get_service_logger, log_event
from hookflow.models.execution import ExecutionRecordCreate, ExecutionStatus
from hookflow.models.workflow import Workflow
from hookflow.services.execution_service import ExecutionService
from hookflow.webhooks.executor import ActionExecutor
from hookflow.webhooks.models import WebhookEvent, WorkflowRunResult

logger = get_service_logger("execution_logger")


class ExecutionLogger:
    """Times workflow runs and appends their audit records."""

    def __init__(self, execution_service: ExecutionService, executor: ActionExecutor):
        self.execution_service = execution_service
        self.executor = executor

    async def record(
        self,
        workflow: Workflow,
        event: WebhookEvent,
        status: ExecutionStatus,
        items_processed: int,
        duration_ms: int,
        error_message: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Append one record. Storage failures are logged, never raised.
        """
        record = ExecutionRecordCreate(
            workflow_id=workflow.id,
            workflow_name=workflow.title,
            status=status,
            items_processed=items_processed,
            duration=duration_ms,
            error_message=error_message,
            metadata={"trigger": "webhook", "event": event.event, **(metadata or {})},
        )

        try:
            await self.execution_service.append(record)
        except Exception as e:
            logger.error(f"Failed to persist execution record for workflow {workflow.id}: {e}", exc_info=True)

        level = "ERROR" if status == ExecutionStatus.ERROR else "INFO"
        log_event(
            logger,
            "workflow_failed" if status == ExecutionStatus.ERROR else "workflow_completed",
            level,
            workflow_id=workflow.id,
            status=status.value,
            items_processed=items_processed,
            duration_ms=duration_ms,
            error_message=error_message,
            event_type=event.event,
        )

    async def run(
        self,
        workflow: Workflow,
        event: WebhookEvent,
        connection_id: Optional[int] = None
    ) -> WorkflowRunResult:
        """
        Execute a workflow and record the outcome.

        Workflow-scoped failures end up in the record and the returned
        result; they are not re-raised.
        """
        metadata: Dict[str, Any] = {"connection_id": connection_id}
        start = time.monotonic()

        try:
            outcome = await self.executor.execute(workflow, event, connection_id)
        except Exception as e:
            duration_ms = int((time.monotonic() - start) * 1000)
            error_message = str(e) or e.__class__.__name__
            logger.warning(f"Workflow {workflow.id} failed: {error_message}")
            await self.record(
                workflow, event, ExecutionStatus.ERROR, 0, duration_ms,
                error_message=error_message, metadata=metadata,
            )
            return WorkflowRunResult(workflow_id=workflow.id, status=ExecutionStatus.ERROR, error=error_message)

        duration_ms = int((time.monotonic() - start) * 1000)
        status = ExecutionStatus.WARNING if outcome.skipped_actions else ExecutionStatus.SUCCESS
        metadata["skipped_actions"] = [s.model_dump() for s in outcome.skipped_actions]

        await self.record(
            workflow, event, status, outcome.items_processed, duration_ms, metadata=metadata,
        )
        return WorkflowRunResult(workflow_id=workflow.id, status=status)
