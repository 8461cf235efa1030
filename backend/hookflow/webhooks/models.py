# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Transient models passed between the webhook engine stages.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from hookflow.models.execution import ExecutionStatus


class WebhookEvent(BaseModel):
    """Normalized inbound event; lives for one request"""
    service: str
    event: str
    payload: Any = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class VerificationResult(BaseModel):
    valid: bool
    error: Optional[str] = None


class SkippedAction(BaseModel):
    """Action left out because its (service, type) pair has no handler"""
    index: int
    type: str


class ExecutionOutcome(BaseModel):
    """Result of running one workflow's action list to completion"""
    items_processed: int = 0
    skipped_actions: List[SkippedAction] = []


class WorkflowRunResult(BaseModel):
    workflow_id: int
    status: ExecutionStatus
    error: Optional[str] = None


class WebhookResult(BaseModel):
    """HTTP status and JSON body returned to the webhook sender"""
    status_code: int
    body: Dict[str, Any]
