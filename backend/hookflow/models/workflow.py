# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow Models

Pydantic models for automation rules. Triggers and actions are tagged
variants validated once when a workflow is saved, so matching and execution
work with typed objects only.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class WorkflowStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    DRAFT = "draft"


class ActionType(str, Enum):
    CREATE_ISSUE = "create_issue"
    ADD_COMMENT = "add_comment"
    CREATE_TASK = "create_task"
    UPDATE_TASK = "update_task"
    CREATE_PAGE = "create_page"
    UPDATE_PAGE = "update_page"
    SEND_MESSAGE = "send_message"


class FilterOperator(str, Enum):
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"


# ============================================================================
# Triggers
# ============================================================================

class WebhookTrigger(BaseModel):
    """Fires when an inbound webhook normalizes to `event`"""
    type: Literal["webhook"] = "webhook"
    event: str


class ScheduleTrigger(BaseModel):
    """Interval trigger; never matched by the webhook engine"""
    type: Literal["schedule"] = "schedule"
    interval: str


Trigger = Annotated[Union[WebhookTrigger, ScheduleTrigger], Field(discriminator="type")]


# ============================================================================
# Filters
# ============================================================================

class Filter(BaseModel):
    """Predicate over the event payload"""
    field: str
    operator: FilterOperator
    value: Any = None


# ============================================================================
# Action parameters
# ============================================================================
# Text fields may hold ${path} templates. Numeric and boolean fields accept
# strings too, since a template only becomes a number after interpolation.

class ActionParams(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateIssueParams(ActionParams):
    title: str
    body: str = ""
    labels: List[str] = []
    assignees: List[str] = []
    repository: Optional[str] = None  # "owner/repo"


class AddCommentParams(ActionParams):
    issue_number: Union[int, str]
    body: str
    repository: Optional[str] = None


class CreateTaskParams(ActionParams):
    title: str
    description: str = ""
    project: Optional[str] = None
    priority: str = "medium"
    due_date: Optional[str] = None


class UpdateTaskParams(ActionParams):
    task_id: str
    title: Optional[str] = None
    description: Optional[str] = None
    completed: Optional[Union[bool, str]] = None
    priority: Optional[str] = None
    project: Optional[str] = None


class CreatePageParams(ActionParams):
    title: str
    database_id: Optional[str] = None
    title_property: str = "Name"
    properties: Dict[str, Any] = {}


class UpdatePageParams(ActionParams):
    page_id: str
    properties: Dict[str, Any] = {}


class SendMessageParams(ActionParams):
    text: str
    channel: Optional[str] = None


# ============================================================================
# Actions
# ============================================================================

class BaseAction(BaseModel):
    """
    One unit of outbound work.

    Accepts both `{"type": ..., "params": {...}}` and the flat
    `{"type": ..., "title": ...}` shape; flat keys are folded into params.
    """

    @model_validator(mode="before")
    @classmethod
    def _fold_flat_params(cls, data: Any) -> Any:
        if isinstance(data, dict) and "params" not in data:
            params = {k: v for k, v in data.items() if k != "type"}
            return {"type": data.get("type"), "params": params}
        return data


class CreateIssueAction(BaseAction):
    type: Literal["create_issue"]
    params: CreateIssueParams


class AddCommentAction(BaseAction):
    type: Literal["add_comment"]
    params: AddCommentParams


class CreateTaskAction(BaseAction):
    type: Literal["create_task"]
    params: CreateTaskParams


class UpdateTaskAction(BaseAction):
    type: Literal["update_task"]
    params: UpdateTaskParams


class CreatePageAction(BaseAction):
    type: Literal["create_page"]
    params: CreatePageParams


class UpdatePageAction(BaseAction):
    type: Literal["update_page"]
    params: UpdatePageParams


class SendMessageAction(BaseAction):
    type: Literal["send_message"]
    params: SendMessageParams


Action = Annotated[
    Union[
        CreateIssueAction,
        AddCommentAction,
        CreateTaskAction,
        UpdateTaskAction,
        CreatePageAction,
        UpdatePageAction,
        SendMessageAction,
    ],
    Field(discriminator="type"),
]


# ============================================================================
# Workflow records
# ============================================================================

class WorkflowConfig(BaseModel):
    """Trigger, filters and ordered actions of a workflow"""
    trigger: Optional[Trigger] = None
    filters: List[Filter] = []
    actions: List[Action] = []


class WorkflowBase(BaseModel):
    title: str
    description: Optional[str] = None
    source_service: str
    target_service: str
    source_connection_id: Optional[int] = None
    target_connection_id: Optional[int] = None
    status: WorkflowStatus = WorkflowStatus.DRAFT
    schedule: str = "manual"
    config: WorkflowConfig = Field(default_factory=WorkflowConfig)


class WorkflowCreate(WorkflowBase):
    """Payload for creating a workflow"""
    pass


class WorkflowUpdate(BaseModel):
    """Partial update; only fields that are set are applied"""
    title: Optional[str] = None
    description: Optional[str] = None
    source_service: Optional[str] = None
    target_service: Optional[str] = None
    source_connection_id: Optional[int] = None
    target_connection_id: Optional[int] = None
    status: Optional[WorkflowStatus] = None
    schedule: Optional[str] = None
    config: Optional[WorkflowConfig] = None


class Workflow(WorkflowBase):
    """Persisted automation rule"""
    id: int
    last_run: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @property
    def is_active(self) -> bool:
        return self.status == WorkflowStatus.ACTIVE
