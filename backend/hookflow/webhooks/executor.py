# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Action Executor

Runs one workflow's actions for one event:
- builds the template context from the event
- resolves the target connection credential
- interpolates, validates and dispatches each action in order
- stops at the first failure
- stamps the workflow's last_run once per attempt
"""

import asyncio
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from hookflow.core.errors import ActionTimeoutError, ConfigurationError, ExecutionError
from hookflow.core.logging import get_service_logger, log_event
from hookflow.integrations.credentials import CredentialCache
from hookflow.integrations.dispatch import ActionDispatcher
from hookflow.models.workflow import ActionParams, Workflow
from hookflow.services.workflow_service import WorkflowService
from hookflow.webhooks.models import ExecutionOutcome, SkippedAction, WebhookEvent
from hookflow.webhooks.templates import interpolate_params

logger = get_service_logger("executor")


def build_context(event: WebhookEvent) -> Dict[str, Any]:
    """Template context: trigger descriptor, raw payload, ISO timestamp"""
    return {
        "trigger": {
            "type": "webhook",
            "service": event.service,
            "event": event.event,
        },
        "payload": event.payload,
        "timestamp": event.timestamp.isoformat(),
    }


class ActionExecutor:
    """
    Executes workflow actions against target services.

    Dependencies are injected so tests can substitute the dispatcher and
    credential source.
    """

    def __init__(
        self,
        workflow_service: WorkflowService,
        credentials: CredentialCache,
        dispatcher: ActionDispatcher,
        action_timeout: float = 30.0
    ):
        self.workflow_service = workflow_service
        self.credentials = credentials
        self.dispatcher = dispatcher
        self.action_timeout = action_timeout

    async def execute(
        self,
        workflow: Workflow,
        event: WebhookEvent,
        connection_id: Optional[int] = None
    ) -> ExecutionOutcome:
        """
        Run all actions of a workflow.

        Args:
            workflow: Matched workflow
            event: Normalized event
            connection_id: Connection the delivery arrived on (for logs)

        Returns:
            ExecutionOutcome with the number of successful actions and any
            actions skipped for lack of a handler

        Raises:
            ConfigurationError: Missing or unknown target connection
            ExecutionError: An action failed; carries its index and cause
        """
        try:
            return await self._run_actions(workflow, event, connection_id)
        finally:
            await self.workflow_service.mark_last_run(workflow.id)

    async def _run_actions(
        self,
        workflow: Workflow,
        event: WebhookEvent,
        connection_id: Optional[int]
    ) -> ExecutionOutcome:
        if workflow.target_connection_id is None:
            raise ConfigurationError(
                f"Workflow {workflow.id} has no target connection configured",
                workflow_id=workflow.id
            )

        target = await self.credentials.get_target(workflow.target_connection_id)
        if target.service != workflow.target_service:
            raise ConfigurationError(
                f"Workflow {workflow.id} targets {workflow.target_service} but connection "
                f"{workflow.target_connection_id} belongs to {target.service}",
                workflow_id=workflow.id
            )

        context = build_context(event)
        outcome = ExecutionOutcome()

        for index, action in enumerate(workflow.config.actions):
            handler = self.dispatcher.resolve(workflow.target_service, action.type)
            if handler is None:
                log_event(
                    logger, "action_skipped", "WARNING",
                    workflow_id=workflow.id,
                    action_index=index,
                    action_type=action.type,
                    target_service=workflow.target_service,
                    connection_id=connection_id,
                )
                outcome.skipped_actions.append(SkippedAction(index=index, type=action.type))
                continue

            try:
                params = self._prepare_params(action.params, context)
                await asyncio.wait_for(handler(target, params), timeout=self.action_timeout)
            except asyncio.TimeoutError:
                cause = ActionTimeoutError(workflow.target_service, action.type, self.action_timeout)
                raise ExecutionError(index, cause, action_type=action.type) from cause
            except Exception as e:
                raise ExecutionError(index, e, action_type=action.type) from e

            outcome.items_processed += 1
            logger.debug(f"Workflow {workflow.id} action {index} ({action.type}) completed")

        return outcome

    @staticmethod
    def _prepare_params(params: ActionParams, context: Dict[str, Any]) -> ActionParams:
        """
        Interpolate templates, then validate the result into the same params model.

        Raises:
            pydantic.ValidationError: Interpolated values do not fit the model
        """
        raw = params.model_dump(exclude_none=True)
        interpolated = interpolate_params(raw, context)
        try:
            return type(params).model_validate(interpolated)
        except PydanticValidationError:
            logger.warning(f"Interpolated parameters failed validation for {type(params).__name__}")
            raise
