# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow Matcher - selects the active workflows a normalized event fires.
"""

from typing import Any, List, Optional

from hookflow.core.logging import get_service_logger
from hookflow.models.workflow import WebhookTrigger, Workflow
from hookflow.services.workflow_service import WorkflowService
from hookflow.webhooks.filters import matches

logger = get_service_logger("matcher")


def trigger_matches(
    workflow: Workflow,
    service: str,
    event_type: str,
    connection_id: Optional[int] = None
) -> bool:
    """
    Trigger-level predicate (filters not applied).

    A workflow bound to a source connection only fires for deliveries on
    that connection.
    """
    if workflow.source_service != service or not workflow.is_active:
        return False

    trigger = workflow.config.trigger
    if not isinstance(trigger, WebhookTrigger) or trigger.event != event_type:
        return False

    if (
        workflow.source_connection_id is not None
        and connection_id is not None
        and workflow.source_connection_id != connection_id
    ):
        return False

    return True


class WorkflowMatcher:
    """Finds workflows for an event with a single storage read."""

    def __init__(self, workflow_service: WorkflowService):
        self.workflow_service = workflow_service

    async def find_candidates(
        self,
        service: str,
        event_type: str,
        connection_id: Optional[int] = None
    ) -> List[Workflow]:
        workflows = await self.workflow_service.list_workflows()
        return [w for w in workflows if trigger_matches(w, service, event_type, connection_id)]

    async def match(
        self,
        service: str,
        event_type: str,
        payload: Any,
        connection_id: Optional[int] = None
    ) -> List[Workflow]:
        """Candidates whose filters all pass for this payload"""
        candidates = await self.find_candidates(service, event_type, connection_id)
        matched = [w for w in candidates if matches(w, payload)]

        if len(matched) != len(candidates):
            logger.debug(f"{len(candidates) - len(matched)} workflow(s) filtered out for {event_type}")
        return matched
