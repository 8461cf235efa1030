# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow API Routes

CRUD for automation rules. Bodies are validated into typed trigger,
filter and action variants before anything is stored.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from hookflow.core.dependencies import get_workflow_service
from hookflow.core.errors import NotFoundError
from hookflow.models.workflow import Workflow, WorkflowCreate, WorkflowUpdate
from hookflow.services.workflow_service import WorkflowService

router = APIRouter(prefix="/workflows", tags=["workflows"])


@router.get("")
async def list_workflows(
    service: WorkflowService = Depends(get_workflow_service)
) -> List[Workflow]:
    """List all workflows"""
    return await service.list_workflows()


@router.get("/{workflow_id}")
async def get_workflow(
    workflow_id: int,
    service: WorkflowService = Depends(get_workflow_service)
) -> Workflow:
    workflow = await service.get_workflow(workflow_id)
    if workflow is None:
        raise HTTPException(status_code=404, detail=str(NotFoundError("Workflow", workflow_id)))
    return workflow


@router.post("", status_code=201)
async def create_workflow(
    data: WorkflowCreate,
    service: WorkflowService = Depends(get_workflow_service)
) -> Workflow:
    return await service.create_workflow(data)


@router.patch("/{workflow_id}")
async def update_workflow(
    workflow_id: int,
    data: WorkflowUpdate,
    service: WorkflowService = Depends(get_workflow_service)
) -> Workflow:
    try:
        return await service.update_workflow(workflow_id, data)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{workflow_id}", status_code=204)
async def delete_workflow(
    workflow_id: int,
    service: WorkflowService = Depends(get_workflow_service)
) -> None:
    try:
        await service.delete_workflow(workflow_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
