# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Execution History API Routes

Read-only access to execution records and dashboard counters.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from hookflow.core.dependencies import get_execution_service, get_workflow_service
from hookflow.core.errors import NotFoundError
from hookflow.models.execution import DashboardStats, ExecutionRecord
from hookflow.services.execution_service import ExecutionService
from hookflow.services.workflow_service import WorkflowService

router = APIRouter(tags=["executions"])


@router.get("/executions")
async def list_executions(
    limit: int = Query(50, ge=1, le=1000),
    workflow_id: Optional[int] = None,
    service: ExecutionService = Depends(get_execution_service)
) -> List[ExecutionRecord]:
    """List execution records, newest first"""
    return await service.list(limit=limit, workflow_id=workflow_id)


@router.get("/executions/{execution_id}")
async def get_execution(
    execution_id: int,
    service: ExecutionService = Depends(get_execution_service)
) -> ExecutionRecord:
    record = await service.get(execution_id)
    if record is None:
        raise HTTPException(status_code=404, detail=str(NotFoundError("Execution", execution_id)))
    return record


@router.get("/dashboard/stats")
async def dashboard_stats(
    executions: ExecutionService = Depends(get_execution_service),
    workflows: WorkflowService = Depends(get_workflow_service)
) -> DashboardStats:
    active = sum(1 for w in await workflows.list_workflows() if w.is_active)
    return await executions.stats(active_workflows=active)
