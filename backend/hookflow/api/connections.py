# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Connection API Routes

CRUD for configured integrations. API tokens are never returned.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from hookflow.core.dependencies import get_connection_service, get_credential_cache
from hookflow.core.errors import NotFoundError
from hookflow.integrations.credentials import CredentialCache
from hookflow.models.connection import ConnectionCreate, ConnectionUpdate
from hookflow.services.connection_service import ConnectionService

router = APIRouter(prefix="/connections", tags=["connections"])


@router.get("")
async def list_connections(
    service: ConnectionService = Depends(get_connection_service)
) -> List[Dict[str, Any]]:
    """List all connections"""
    return [c.redacted() for c in await service.list_connections()]


@router.get("/{connection_id}")
async def get_connection(
    connection_id: int,
    service: ConnectionService = Depends(get_connection_service)
) -> Dict[str, Any]:
    connection = await service.get_connection(connection_id)
    if connection is None:
        raise HTTPException(status_code=404, detail=str(NotFoundError("Connection", connection_id)))
    return connection.redacted()


@router.post("", status_code=201)
async def create_connection(
    data: ConnectionCreate,
    service: ConnectionService = Depends(get_connection_service)
) -> Dict[str, Any]:
    """Create a connection; webhook services get a secret and webhook URL"""
    connection = await service.create_connection(data)
    return connection.redacted()


@router.patch("/{connection_id}")
async def update_connection(
    connection_id: int,
    data: ConnectionUpdate,
    service: ConnectionService = Depends(get_connection_service),
    credentials: CredentialCache = Depends(get_credential_cache)
) -> Dict[str, Any]:
    try:
        connection = await service.update_connection(connection_id, data)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    credentials.invalidate(connection_id)
    return connection.redacted()


@router.delete("/{connection_id}", status_code=204)
async def delete_connection(
    connection_id: int,
    service: ConnectionService = Depends(get_connection_service),
    credentials: CredentialCache = Depends(get_credential_cache)
) -> None:
    try:
        await service.delete_connection(connection_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    credentials.invalidate(connection_id)
