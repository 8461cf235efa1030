# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Action Dispatch

Closed table of the (target service, action type) pairs the engine can
execute, and the client method that handles each pair.
"""

from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Tuple

import httpx

from hookflow.core.config import Config
from hookflow.integrations.base import ServiceTarget
from hookflow.integrations.github import GitHubClient
from hookflow.integrations.notion import NotionClient
from hookflow.integrations.slack import SlackClient
from hookflow.integrations.taskade import TaskadeClient
from hookflow.models.connection import ServiceName
from hookflow.models.workflow import ActionParams, ActionType

ActionHandler = Callable[[ServiceTarget, ActionParams], Awaitable[Dict[str, Any]]]

ACTION_ROUTES: Dict[Tuple[ServiceName, ActionType], str] = {
    (ServiceName.GITHUB, ActionType.CREATE_ISSUE): "create_issue",
    (ServiceName.GITHUB, ActionType.ADD_COMMENT): "add_comment",
    (ServiceName.TASKADE, ActionType.CREATE_TASK): "create_task",
    (ServiceName.TASKADE, ActionType.UPDATE_TASK): "update_task",
    (ServiceName.NOTION, ActionType.CREATE_PAGE): "create_page",
    (ServiceName.NOTION, ActionType.UPDATE_PAGE): "update_page",
    (ServiceName.SLACK, ActionType.SEND_MESSAGE): "send_message",
}

_unrouted = set(ActionType) - {action for _, action in ACTION_ROUTES}
if _unrouted:
    raise RuntimeError(f"Action types without a route: {sorted(a.value for a in _unrouted)}")


class ActionDispatcher:
    """Resolves an action to the bound client method for its target service."""

    def __init__(self, clients: Mapping[ServiceName, Any]):
        self.clients = dict(clients)

    def resolve(self, target_service: str, action_type: str) -> Optional[ActionHandler]:
        """
        Handler for a (service, action) pair.

        Returns:
            Bound client coroutine, or None when the pair is unsupported
        """
        try:
            key = (ServiceName(target_service), ActionType(action_type))
        except ValueError:
            return None

        method_name = ACTION_ROUTES.get(key)
        client = self.clients.get(key[0])
        if method_name is None or client is None:
            return None
        return getattr(client, method_name)

    def supports(self, target_service: str, action_type: str) -> bool:
        return self.resolve(target_service, action_type) is not None


def create_dispatcher(http: httpx.AsyncClient, config: Config) -> ActionDispatcher:
    """Build the dispatcher with one client per target service on a shared HTTP client"""
    return ActionDispatcher({
        ServiceName.GITHUB: GitHubClient(http, config.github_api_url),
        ServiceName.TASKADE: TaskadeClient(http, config.taskade_api_url),
        ServiceName.NOTION: NotionClient(http, config.notion_api_url, config.notion_version),
        ServiceName.SLACK: SlackClient(http, config.slack_api_url),
    })
