# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Credential Cache

Keeps each target connection's token and configuration in memory with an
expiry, and reloads it from connection storage once it goes stale. Actions
receive the credential explicitly as a ServiceTarget.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel

from hookflow.core.logging import get_service_logger
from hookflow.integrations.base import ServiceTarget
from hookflow.integrations.exceptions import IntegrationConfigError
from hookflow.services.connection_service import ConnectionService

logger = get_service_logger("credentials")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class CachedCredential(BaseModel):
    """
    Token snapshot with expiration tracking.

    Attributes:
        connection_id: Owning connection
        service: Service of the connection
        token: API token
        config: Connection configuration at load time
        expires_at: Moment the snapshot must be reloaded
    """
    connection_id: int
    service: str
    token: str
    config: Dict[str, Any] = {}
    expires_at: datetime

    @property
    def is_expired(self) -> bool:
        return _now() >= self.expires_at

    def to_target(self) -> ServiceTarget:
        return ServiceTarget(
            connection_id=self.connection_id,
            service=self.service,
            token=self.token,
            config=self.config,
        )


class CredentialCache:
    """Per-connection credential cache refreshed lazily on expiry."""

    def __init__(self, connection_service: ConnectionService, ttl_seconds: int = 3600):
        self.connection_service = connection_service
        self.ttl = timedelta(seconds=ttl_seconds)
        self._entries: Dict[int, CachedCredential] = {}
        self._locks: Dict[int, asyncio.Lock] = {}

    def _get_lock(self, connection_id: int) -> asyncio.Lock:
        if connection_id not in self._locks:
            self._locks[connection_id] = asyncio.Lock()
        return self._locks[connection_id]

    async def get_target(self, connection_id: int) -> ServiceTarget:
        """
        Credential for a target connection.

        Raises:
            IntegrationConfigError: If the connection does not exist or has no token
        """
        entry = self._entries.get(connection_id)
        if entry and not entry.is_expired:
            return entry.to_target()

        async with self._get_lock(connection_id):
            entry = self._entries.get(connection_id)
            if entry and not entry.is_expired:
                return entry.to_target()

            entry = await self._load(connection_id)
            self._entries[connection_id] = entry
            return entry.to_target()

    async def _load(self, connection_id: int) -> CachedCredential:
        connection = await self.connection_service.get_connection(connection_id)
        if connection is None:
            raise IntegrationConfigError(f"Target connection {connection_id} not found")
        if not connection.api_token:
            raise IntegrationConfigError(f"Connection {connection_id} has no API token configured")

        logger.debug(f"Loaded credential for connection {connection_id}")
        return CachedCredential(
            connection_id=connection.id,
            service=connection.service,
            token=connection.api_token,
            config=connection.config,
            expires_at=_now() + self.ttl,
        )

    def invalidate(self, connection_id: Optional[int] = None) -> None:
        """Drop one entry, or all entries when no id is given"""
        if connection_id is None:
            self._entries.clear()
        else:
            self._entries.pop(connection_id, None)
