# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Storage services: connections, workflows and execution records.
"""

from hookflow.services.connection_service import ConnectionService
from hookflow.services.execution_service import ExecutionService
from hookflow.services.workflow_service import WorkflowService

__all__ = ["ConnectionService", "ExecutionService", "WorkflowService"]
