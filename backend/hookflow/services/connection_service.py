# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Connection Service - Manages configured integrations.

Single responsibility: connection CRUD, including webhook secret and URL
generation for services that accept inbound webhooks.
"""

import secrets
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from hookflow.core.config import WEBHOOK_SERVICES
from hookflow.core.errors import NotFoundError, ValidationError
from hookflow.core.logging import get_service_logger
from hookflow.models.connection import Connection, ConnectionCreate, ConnectionUpdate
from hookflow.services.record_store import RecordStore

logger = get_service_logger("connection")


class ConnectionService:
    """
    Manages connections stored as JSON files.

    Responsibilities:
    - Create connections (secret + webhook URL for webhook services)
    - Read, update and delete connections
    """

    def __init__(self, connections_dir: Path, public_base_url: str = "http://localhost:5000"):
        """
        Initialize ConnectionService.

        Args:
            connections_dir: Directory holding one JSON file per connection
            public_base_url: Origin external services reach this server on
        """
        self.store = RecordStore(connections_dir)
        self.public_base_url = public_base_url.rstrip("/")
        logger.info(f"ConnectionService initialized with directory: {connections_dir}")

    def webhook_url(self, service: str, connection_id: int) -> str:
        return f"{self.public_base_url}/webhooks/{service}/{connection_id}"

    async def list_connections(self) -> List[Connection]:
        records = await self.store.all(newest_first=True)
        return [Connection.model_validate(r) for r in records]

    async def get_connection(self, connection_id: int) -> Optional[Connection]:
        record = await self.store.get(connection_id)
        if record is None:
            return None
        return Connection.model_validate(record)

    async def create_connection(self, data: ConnectionCreate) -> Connection:
        """
        Create a connection.

        Services in WEBHOOK_SERVICES always end up with a non-empty webhook
        secret (64 hex chars when generated) and a webhook URL derived from
        the public base URL, the service and the new id.

        Args:
            data: Connection fields

        Returns:
            Stored connection
        """
        now = datetime.now(timezone.utc)
        record = data.model_dump(mode="json")
        record["created_at"] = now.isoformat()
        record["updated_at"] = now.isoformat()
        record["last_sync"] = None
        record["webhook_url"] = None

        needs_webhook = data.service in WEBHOOK_SERVICES
        if needs_webhook and not data.webhook_secret:
            record["webhook_secret"] = secrets.token_hex(32)

        stored = await self.store.insert(record)

        if needs_webhook:
            stored["webhook_url"] = self.webhook_url(data.service, stored["id"])
            await self.store.put(stored["id"], stored)

        logger.info(f"Created connection {stored['id']} for service {data.service}")
        return Connection.model_validate(stored)

    async def update_connection(self, connection_id: int, data: ConnectionUpdate) -> Connection:
        """
        Apply a partial update.

        Raises:
            NotFoundError: If the connection does not exist
            ValidationError: If the update clears the secret of a webhook service
        """
        record = await self.store.get(connection_id)
        if record is None:
            raise NotFoundError("Connection", connection_id)

        updates = data.model_dump(mode="json", exclude_unset=True)
        if (
            "webhook_secret" in updates
            and not updates["webhook_secret"]
            and record.get("service") in WEBHOOK_SERVICES
        ):
            raise ValidationError(
                f"Webhook secret cannot be empty for {record['service']} connections",
                field="webhook_secret"
            )

        record.update(updates)
        record["updated_at"] = datetime.now(timezone.utc).isoformat()
        await self.store.put(connection_id, record)
        return Connection.model_validate(record)

    async def delete_connection(self, connection_id: int) -> None:
        """
        Raises:
            NotFoundError: If the connection does not exist
        """
        if not await self.store.delete(connection_id):
            raise NotFoundError("Connection", connection_id)
        logger.info(f"Deleted connection {connection_id}")
