# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Event type normalization: native service event names to "<service>.<event>".
"""

from typing import Any, Dict, Mapping, Optional

from hookflow.webhooks.verification import get_header

GITHUB_EVENTS: Dict[str, str] = {
    "push": "github.push",
    "pull_request": "github.pull_request",
    "issues": "github.issues",
    "issue_comment": "github.issue_comment",
    "ping": "github.ping",
}

TASKADE_EVENTS: Dict[str, str] = {
    "task_created": "taskade.task.created",
    "task_completed": "taskade.task.completed",
    "task_due": "taskade.task.due",
    "task_updated": "taskade.task.updated",
}

NOTION_EVENTS: Dict[str, str] = {
    "page.created": "notion.page.created",
    "page.content_updated": "notion.page.updated",
    "page.properties_updated": "notion.page.updated",
    "page.deleted": "notion.page.deleted",
    "database.content_updated": "notion.database.updated",
}

GITHUB_PING = "github.ping"


def _normalize(service: str, native: Any, table: Dict[str, str]) -> Optional[str]:
    if not isinstance(native, str) or not native:
        return None
    return table.get(native, f"{service}.{native}")


def extract_event_type(service: str, headers: Mapping[str, str], payload: Any) -> Optional[str]:
    """
    Normalized event type of a delivery.

    GitHub names the event in the X-GitHub-Event header; Taskade in the
    payload's `event_type`; Notion in the payload's `type`.

    Returns:
        Event type, or None when the delivery carries no identifier
    """
    if service == "github":
        return _normalize(service, get_header(headers, "X-GitHub-Event"), GITHUB_EVENTS)

    if not isinstance(payload, dict):
        return None

    if service == "taskade":
        return _normalize(service, payload.get("event_type"), TASKADE_EVENTS)
    if service == "notion":
        return _normalize(service, payload.get("type"), NOTION_EVENTS)
    return None
