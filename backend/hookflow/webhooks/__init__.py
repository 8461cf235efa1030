# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Webhook ingestion and workflow execution engine.
"""

from hookflow.webhooks.dedup import DeliveryDeduplicator
from hookflow.webhooks.execution_logger import ExecutionLogger
from hookflow.webhooks.executor import ActionExecutor
from hookflow.webhooks.handler import WebhookHandler
from hookflow.webhooks.matcher import WorkflowMatcher

__all__ = [
    "ActionExecutor",
    "DeliveryDeduplicator",
    "ExecutionLogger",
    "WebhookHandler",
    "WorkflowMatcher",
]
