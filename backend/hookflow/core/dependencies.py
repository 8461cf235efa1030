# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Dependency injection for Hookflow.

Services are built once in create_app() and stored in app.state; these
providers hand them to route handlers.
"""

from fastapi import Request

from hookflow.core.config import Config
from hookflow.integrations.credentials import CredentialCache
from hookflow.services.connection_service import ConnectionService
from hookflow.services.execution_service import ExecutionService
from hookflow.services.workflow_service import WorkflowService
from hookflow.webhooks.handler import WebhookHandler


def get_current_config(request: Request) -> Config:
    """Configuration the running app was built with."""
    return request.app.state.config


def get_connection_service(request: Request) -> ConnectionService:
    return request.app.state.connection_service


def get_workflow_service(request: Request) -> WorkflowService:
    return request.app.state.workflow_service


def get_execution_service(request: Request) -> ExecutionService:
    return request.app.state.execution_service


def get_credential_cache(request: Request) -> CredentialCache:
    return request.app.state.credential_cache


def get_webhook_handler(request: Request) -> WebhookHandler:
    return request.app.state.webhook_handler
