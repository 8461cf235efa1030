# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Data models for connections, workflows and execution records.
"""

from hookflow.models.connection import (
    Connection,
    ConnectionCreate,
    ConnectionStatus,
    ConnectionUpdate,
    ServiceName,
)
from hookflow.models.execution import (
    DashboardStats,
    ExecutionRecord,
    ExecutionRecordCreate,
    ExecutionStatus,
)
from hookflow.models.workflow import (
    Action,
    ActionType,
    Filter,
    FilterOperator,
    ScheduleTrigger,
    WebhookTrigger,
    Workflow,
    WorkflowConfig,
    WorkflowCreate,
    WorkflowStatus,
    WorkflowUpdate,
)

__all__ = [
    "Action",
    "ActionType",
    "Connection",
    "ConnectionCreate",
    "ConnectionStatus",
    "ConnectionUpdate",
    "DashboardStats",
    "ExecutionRecord",
    "ExecutionRecordCreate",
    "ExecutionStatus",
    "Filter",
    "FilterOperator",
    "ScheduleTrigger",
    "ServiceName",
    "WebhookTrigger",
    "Workflow",
    "WorkflowConfig",
    "WorkflowCreate",
    "WorkflowStatus",
    "WorkflowUpdate",
]
