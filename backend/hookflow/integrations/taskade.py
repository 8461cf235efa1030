# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Taskade integration - outbound task actions.
"""

from typing import Any, Dict, Optional, Union

from hookflow.integrations.base import BaseServiceClient, ServiceTarget
from hookflow.integrations.exceptions import IntegrationConfigError, TaskadeAPIError
from hookflow.models.workflow import CreateTaskParams, UpdateTaskParams


def _as_bool(value: Union[bool, str, None]) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    return value.strip().lower() in ("true", "1", "yes")


class TaskadeClient(BaseServiceClient):
    service = "taskade"
    display_name = "Taskade"
    error_class = TaskadeAPIError

    def _project(self, target: ServiceTarget, explicit: Optional[str]) -> str:
        project_id = explicit or target.config.get("project_id")
        if not project_id:
            raise IntegrationConfigError("Taskade project ID is required")
        return project_id

    async def create_task(self, target: ServiceTarget, params: CreateTaskParams) -> Dict[str, Any]:
        project_id = self._project(target, params.project)
        body = {
            "name": params.title,
            "content": params.description,
            "priority": params.priority or "medium",
        }
        if params.due_date:
            body["dueDate"] = params.due_date

        data = await self._request("POST", f"/projects/{project_id}/tasks", target, json=body)
        return {"id": data.get("id"), "name": data.get("name"), "projectId": data.get("projectId", project_id)}

    async def update_task(self, target: ServiceTarget, params: UpdateTaskParams) -> Dict[str, Any]:
        project_id = self._project(target, params.project)
        body = {
            "name": params.title,
            "content": params.description,
            "completed": _as_bool(params.completed),
            "priority": params.priority,
        }
        body = {k: v for k, v in body.items() if v is not None}

        data = await self._request(
            "PATCH",
            f"/projects/{project_id}/tasks/{params.task_id}",
            target,
            json=body,
        )
        return {"id": data.get("id", params.task_id), "name": data.get("name"), "completed": data.get("completed")}
