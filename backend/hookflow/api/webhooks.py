# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Webhook API Routes

Inbound endpoint for GitHub, Taskade and Notion deliveries:
- POST /webhooks/{service}/{connection_id}
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from hookflow.core.dependencies import get_webhook_handler
from hookflow.core.errors import HookflowError
from hookflow.core.logging import get_api_logger
from hookflow.webhooks.handler import WebhookHandler

router = APIRouter(prefix="/webhooks", tags=["webhooks"])
logger = get_api_logger()


@router.post("/{service}/{connection_id}")
async def receive_webhook(
    service: str,
    connection_id: int,
    request: Request,
    handler: WebhookHandler = Depends(get_webhook_handler)
) -> JSONResponse:
    """Receive a webhook delivery; signatures are checked against the raw body"""
    raw_body = await request.body()

    try:
        result = await handler.handle(service, connection_id, raw_body, request.headers)
    except HookflowError as e:
        return JSONResponse(status_code=e.status_code, content={"error": e.message})
    except Exception as e:
        logger.error(f"Error handling webhook for {service}/{connection_id}: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    return JSONResponse(status_code=result.status_code, content=result.body)
