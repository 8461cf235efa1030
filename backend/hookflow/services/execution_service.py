# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Execution Service - Append-only history of workflow executions.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from hookflow.core.logging import get_service_logger
from hookflow.models.execution import DashboardStats, ExecutionRecord, ExecutionRecordCreate
from hookflow.services.record_store import RecordStore

logger = get_service_logger("execution")

# Record count treated as 100% when reporting storage use
STORAGE_CAPACITY_RECORDS = 1000


class ExecutionService:
    """Stores one ExecutionRecord per workflow execution attempt."""

    def __init__(self, executions_dir: Path):
        self.store = RecordStore(executions_dir)
        logger.info(f"ExecutionService initialized with directory: {executions_dir}")

    async def append(self, data: ExecutionRecordCreate) -> ExecutionRecord:
        record = data.model_dump(mode="json")
        record["created_at"] = datetime.now(timezone.utc).isoformat()
        stored = await self.store.insert(record)
        return ExecutionRecord.model_validate(stored)

    async def get(self, execution_id: int) -> Optional[ExecutionRecord]:
        record = await self.store.get(execution_id)
        if record is None:
            return None
        return ExecutionRecord.model_validate(record)

    async def list(self, limit: int = 50, workflow_id: Optional[int] = None) -> List[ExecutionRecord]:
        """
        List executions, newest first.

        Args:
            limit: Max results to return
            workflow_id: Only executions of this workflow
        """
        executions = []
        for record in await self.store.all(newest_first=True):
            if workflow_id is not None and record.get("workflow_id") != workflow_id:
                continue
            executions.append(ExecutionRecord.model_validate(record))
            if len(executions) >= limit:
                break
        return executions

    async def stats(self, active_workflows: int) -> DashboardStats:
        """
        Dashboard counters.

        Args:
            active_workflows: Number of workflows currently active
        """
        records = await self.store.all()
        items = sum(r.get("items_processed") or 0 for r in records)
        storage_percent = min(int(len(records) / STORAGE_CAPACITY_RECORDS * 100), 100)

        return DashboardStats(
            activeSyncs=active_workflows,
            tasksSynced=items,
            apiRequests=len(records),
            storageUsed=f"{storage_percent}%",
        )
