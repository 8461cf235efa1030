# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Connection Models

A connection binds one external service to credentials, service-specific
configuration, and (for webhook-capable services) an inbound webhook secret
and URL.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel


class ServiceName(str, Enum):
    GITHUB = "github"
    TASKADE = "taskade"
    NOTION = "notion"
    SLACK = "slack"
    AI_AGENT = "ai_agent"


class ConnectionStatus(str, Enum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    ERROR = "error"


class ConnectionBase(BaseModel):
    name: str
    service: str
    description: Optional[str] = None
    api_token: Optional[str] = None
    config: Dict[str, Any] = {}
    status: ConnectionStatus = ConnectionStatus.DISCONNECTED


class ConnectionCreate(ConnectionBase):
    """Payload for creating a connection. The webhook secret is generated when omitted."""
    webhook_secret: Optional[str] = None


class ConnectionUpdate(BaseModel):
    """Partial update (credential rotation, sync results)"""
    name: Optional[str] = None
    description: Optional[str] = None
    api_token: Optional[str] = None
    config: Optional[Dict[str, Any]] = None
    status: Optional[ConnectionStatus] = None
    webhook_secret: Optional[str] = None
    last_sync: Optional[datetime] = None


class Connection(ConnectionBase):
    """Persisted connection"""
    id: int
    webhook_secret: Optional[str] = None
    webhook_url: Optional[str] = None
    last_sync: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    def redacted(self) -> Dict[str, Any]:
        """Serializable view without the API token"""
        data = self.model_dump(mode="json")
        data["api_token"] = "****" if self.api_token else None
        return data
