# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
FastAPI application - Webhook ingestion and management API
"""
# Load environment variables from .env file (local development)
from dotenv import load_dotenv
from pathlib import Path as _PathForEnv
_env_path = _PathForEnv(__file__).parent.parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hookflow import __version__
from hookflow.api import connections, executions, webhooks, workflows
from hookflow.core.config import Config, get_config
from hookflow.core.errors import HookflowError, sanitize_error_for_user
from hookflow.core.logging import get_api_logger
from hookflow.integrations.credentials import CredentialCache
from hookflow.integrations.dispatch import ActionDispatcher, create_dispatcher
from hookflow.services.connection_service import ConnectionService
from hookflow.services.execution_service import ExecutionService
from hookflow.services.workflow_service import WorkflowService
from hookflow.webhooks.dedup import DeliveryDeduplicator
from hookflow.webhooks.execution_logger import ExecutionLogger
from hookflow.webhooks.executor import ActionExecutor
from hookflow.webhooks.handler import WebhookHandler
from hookflow.webhooks.matcher import WorkflowMatcher

logger = get_api_logger()


def create_app(
    config: Optional[Config] = None,
    *,
    connection_service: Optional[ConnectionService] = None,
    workflow_service: Optional[WorkflowService] = None,
    execution_service: Optional[ExecutionService] = None,
    dispatcher: Optional[ActionDispatcher] = None
) -> FastAPI:
    """
    Build the application and wire the webhook engine.

    Args:
        config: Configuration (defaults to get_config())
        connection_service: Connection storage override
        workflow_service: Workflow storage override
        execution_service: Execution history override
        dispatcher: Action dispatcher override (e.g. with fake clients)

    Returns:
        FastAPI app with all services in app.state
    """
    config = config or get_config()

    connection_service = connection_service or ConnectionService(
        config.connections_dir, public_base_url=config.public_base_url
    )
    workflow_service = workflow_service or WorkflowService(config.workflows_dir)
    execution_service = execution_service or ExecutionService(config.executions_dir)

    # Shared by all outbound clients; closed on shutdown
    http_client = httpx.AsyncClient(timeout=config.http_timeout)
    dispatcher = dispatcher or create_dispatcher(http_client, config)

    credential_cache = CredentialCache(connection_service, ttl_seconds=config.credentials_ttl)
    executor = ActionExecutor(
        workflow_service,
        credential_cache,
        dispatcher,
        action_timeout=config.action_timeout,
    )
    handler = WebhookHandler(
        connection_service,
        WorkflowMatcher(workflow_service),
        ExecutionLogger(execution_service, executor),
        DeliveryDeduplicator(ttl_seconds=config.dedup_ttl_seconds, enabled=config.dedup_enabled),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Hookflow {__version__} starting, data dir {config.data_dir}")
        yield
        await http_client.aclose()
        logger.info("Hookflow stopped")

    app = FastAPI(
        title="Hookflow",
        description="Webhook ingestion and workflow execution engine",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.config = config
    app.state.http_client = http_client
    app.state.connection_service = connection_service
    app.state.workflow_service = workflow_service
    app.state.execution_service = execution_service
    app.state.credential_cache = credential_cache
    app.state.webhook_handler = handler

    @app.exception_handler(HookflowError)
    async def hookflow_error_handler(request: Request, exc: HookflowError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={
                "error": "ValidationError",
                "message": sanitize_error_for_user(exc, include_type=False),
                "status_code": 400,
                "details": {"errors": jsonable_errors(exc)},
            },
        )

    app.include_router(webhooks.router)
    app.include_router(connections.router)
    app.include_router(workflows.router)
    app.include_router(executions.router)

    @app.get("/health")
    async def health():
        """Health check"""
        return {"status": "ok", "service": "hookflow"}

    return app


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation error entries reduced to location, message and type"""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


app = create_app()


if __name__ == "__main__":
    import uvicorn

    config = get_config()
    uvicorn.run(app, host=config.service_host, port=config.service_port)
