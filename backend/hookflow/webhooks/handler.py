# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Webhook Handler

Orchestrates one inbound delivery: connection lookup, authentication,
event normalization, deduplication, matching, parallel workflow runs and
the summary response.

Request-scoped problems raise HookflowError subclasses (401/400/404);
workflow-scoped failures are recorded per workflow and never change the
200 response.
"""

import asyncio
import json
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from hookflow.core.config import WEBHOOK_SERVICES
from hookflow.core.errors import AuthenticationError, MalformedEventError, NotFoundError
from hookflow.core.logging import get_service_logger, log_event
from hookflow.models.connection import Connection
from hookflow.models.execution import ExecutionStatus
from hookflow.services.connection_service import ConnectionService
from hookflow.webhooks.dedup import DeliveryDeduplicator
from hookflow.webhooks.events import GITHUB_PING, extract_event_type
from hookflow.webhooks.execution_logger import ExecutionLogger
from hookflow.webhooks.matcher import WorkflowMatcher
from hookflow.webhooks.models import WebhookEvent, WebhookResult
from hookflow.webhooks.verification import get_header, verify

logger = get_service_logger("webhooks")


def verification_secret(connection: Connection) -> Optional[str]:
    """Taskade authenticates with the API token; HMAC services with the webhook secret"""
    if connection.service == "taskade":
        return connection.api_token or connection.webhook_secret
    return connection.webhook_secret


class WebhookHandler:
    """Processes inbound webhook deliveries."""

    def __init__(
        self,
        connection_service: ConnectionService,
        matcher: WorkflowMatcher,
        execution_logger: ExecutionLogger,
        deduplicator: Optional[DeliveryDeduplicator] = None
    ):
        self.connection_service = connection_service
        self.matcher = matcher
        self.execution_logger = execution_logger
        self.deduplicator = deduplicator

    async def handle(
        self,
        service: str,
        connection_id: int,
        raw_body: bytes,
        headers: Mapping[str, str]
    ) -> WebhookResult:
        """
        Process one delivery.

        Args:
            service: Service segment of the webhook URL
            connection_id: Connection id segment of the webhook URL
            raw_body: Exact request bytes (signatures cover these)
            headers: Request headers

        Returns:
            WebhookResult for a 200 response

        Raises:
            NotFoundError: Unknown connection, or connection of another service
            MalformedEventError: Unsupported service, bad JSON, unknown event
            AuthenticationError: Signature or token check failed
        """
        connection = await self.connection_service.get_connection(connection_id)
        if connection is None or connection.service != service:
            raise NotFoundError("Connection", connection_id)

        if service not in WEBHOOK_SERVICES:
            raise MalformedEventError(f"Unsupported service: {service}")

        # GitHub pings carry no work; answered before authentication
        if service == "github" and get_header(headers, "X-GitHub-Event") == "ping":
            log_event(
                logger, "webhook_received", "INFO",
                service=service, connection_id=connection_id, event_type=GITHUB_PING,
            )
            return WebhookResult(status_code=200, body={"message": "Webhook received successfully"})

        payload: Any = None
        parse_error: Optional[str] = None
        try:
            payload = json.loads(raw_body) if raw_body else None
        except (ValueError, UnicodeDecodeError) as e:
            parse_error = str(e)

        result = verify(service, raw_body, headers, verification_secret(connection), payload)
        if not result.valid:
            log_event(
                logger, "webhook_rejected", "WARNING",
                service=service, connection_id=connection_id, reason=result.error,
            )
            raise AuthenticationError()

        if parse_error is not None or payload is None:
            raise MalformedEventError("Invalid JSON body", details={"reason": parse_error or "empty body"})

        event_type = extract_event_type(service, headers, payload)
        if event_type is None:
            raise MalformedEventError("Could not determine event type")

        log_event(
            logger, "webhook_received", "INFO",
            service=service, connection_id=connection_id, event_type=event_type,
        )

        if self.deduplicator and self.deduplicator.is_duplicate(connection_id, raw_body, headers):
            logger.info(f"Duplicate delivery ignored for connection {connection_id}")
            return WebhookResult(
                status_code=200,
                body={"message": "Duplicate delivery ignored", "event": event_type, "duplicate": True},
            )

        try:
            return await self._run_matched(service, event_type, payload, connection_id)
        except Exception:
            # Unclaim the delivery so the sender's retry is processed
            if self.deduplicator:
                self.deduplicator.release(connection_id, raw_body, headers)
            raise

    async def _run_matched(
        self,
        service: str,
        event_type: str,
        payload: Any,
        connection_id: int
    ) -> WebhookResult:
        """Match workflows and run them in parallel; summary for the 200 response"""
        workflows = await self.matcher.match(service, event_type, payload, connection_id)
        if not workflows:
            return WebhookResult(
                status_code=200,
                body={"message": "Webhook received", "event": event_type, "matchedWorkflows": 0, "executedWorkflows": 0},
            )

        log_event(
            logger, "workflow_matched", "INFO",
            event_type=event_type, workflow_ids=[w.id for w in workflows],
        )

        event = WebhookEvent(
            service=service,
            event=event_type,
            payload=payload,
            timestamp=datetime.now(timezone.utc),
        )
        runs = await asyncio.gather(
            *(self.execution_logger.run(w, event, connection_id) for w in workflows)
        )
        executed = sum(1 for r in runs if r.status != ExecutionStatus.ERROR)

        return WebhookResult(
            status_code=200,
            body={
                "message": "Webhook processed",
                "event": event_type,
                "matchedWorkflows": len(workflows),
                "executedWorkflows": executed,
            },
        )
