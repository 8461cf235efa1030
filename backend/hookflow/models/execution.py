# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Execution Models

Audit records written once per workflow execution attempt.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel


class ExecutionStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"


class ExecutionRecordCreate(BaseModel):
    workflow_id: int
    workflow_name: str  # title snapshot at execution time
    status: ExecutionStatus
    items_processed: int = 0
    duration: int = 0  # milliseconds
    error_message: Optional[str] = None
    metadata: Dict[str, Any] = {}


class ExecutionRecord(ExecutionRecordCreate):
    """Immutable once appended"""
    id: int
    created_at: datetime


class DashboardStats(BaseModel):
    activeSyncs: int
    tasksSynced: int
    apiRequests: int
    storageUsed: str
