# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow Service - Manages automation rules.

Single responsibility: workflow CRUD and the `last_run` stamp written by
the webhook engine.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from hookflow.core.errors import NotFoundError
from hookflow.core.logging import get_service_logger
from hookflow.models.workflow import Workflow, WorkflowCreate, WorkflowUpdate
from hookflow.services.record_store import RecordStore

logger = get_service_logger("workflow")


class WorkflowService:
    """
    Manages workflow definitions stored as JSON files.

    Configs are validated into tagged trigger/action variants by the
    WorkflowCreate and WorkflowUpdate models before anything is written.
    """

    def __init__(self, workflows_dir: Path):
        self.store = RecordStore(workflows_dir)
        logger.info(f"WorkflowService initialized with directory: {workflows_dir}")

    async def list_workflows(self) -> List[Workflow]:
        records = await self.store.all(newest_first=True)
        return [Workflow.model_validate(r) for r in records]

    async def get_workflow(self, workflow_id: int) -> Optional[Workflow]:
        record = await self.store.get(workflow_id)
        if record is None:
            return None
        return Workflow.model_validate(record)

    async def create_workflow(self, data: WorkflowCreate) -> Workflow:
        now = datetime.now(timezone.utc).isoformat()
        record = data.model_dump(mode="json")
        record.update({"last_run": None, "created_at": now, "updated_at": now})
        stored = await self.store.insert(record)
        logger.info(f"Created workflow {stored['id']}: {data.title}")
        return Workflow.model_validate(stored)

    async def update_workflow(self, workflow_id: int, data: WorkflowUpdate) -> Workflow:
        """
        Apply a partial update.

        Raises:
            NotFoundError: If the workflow does not exist
        """
        record = await self.store.get(workflow_id)
        if record is None:
            raise NotFoundError("Workflow", workflow_id)

        record.update(data.model_dump(mode="json", exclude_unset=True))
        record["updated_at"] = datetime.now(timezone.utc).isoformat()
        await self.store.put(workflow_id, record)
        return Workflow.model_validate(record)

    async def delete_workflow(self, workflow_id: int) -> None:
        """
        Raises:
            NotFoundError: If the workflow does not exist
        """
        if not await self.store.delete(workflow_id):
            raise NotFoundError("Workflow", workflow_id)
        logger.info(f"Deleted workflow {workflow_id}")

    async def mark_last_run(self, workflow_id: int, when: Optional[datetime] = None) -> None:
        """
        Stamp `last_run`. Concurrent runs of one workflow race here;
        the last writer wins.
        """
        record = await self.store.get(workflow_id)
        if record is None:
            logger.warning(f"Cannot stamp last_run, workflow {workflow_id} no longer exists")
            return
        record["last_run"] = (when or datetime.now(timezone.utc)).isoformat()
        await self.store.put(workflow_id, record)
