# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Base Service Client

Shared request handling for the outbound REST clients. Every client sends
through one shared httpx.AsyncClient and turns transport failures and
non-2xx responses into its service-specific IntegrationError.
"""

from typing import Any, Dict, Optional, Type

import httpx
from pydantic import BaseModel

from hookflow.core.logging import get_service_logger
from hookflow.integrations.exceptions import IntegrationError

logger = get_service_logger("integrations")


class ServiceTarget(BaseModel):
    """
    Credential and target descriptor handed to a client call.

    Attributes:
        connection_id: Target connection the credential belongs to
        service: Target service name
        token: API token for the Authorization header
        config: Connection configuration (repository, project_id, ...)
    """
    connection_id: int
    service: str
    token: str
    config: Dict[str, Any] = {}


class BaseServiceClient:
    """REST client base; subclasses set the service identity and headers."""

    service: str = ""
    display_name: str = ""
    error_class: Type[IntegrationError] = IntegrationError

    def __init__(self, http: httpx.AsyncClient, base_url: str):
        self.http = http
        self.base_url = base_url.rstrip("/")

    def _headers(self, target: ServiceTarget) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {target.token}",
            "Content-Type": "application/json",
        }

    def _error(self, message: str, api_status: Optional[int] = None) -> IntegrationError:
        if self.error_class is IntegrationError:
            return IntegrationError(message, service=self.service, api_status=api_status)
        return self.error_class(message, api_status=api_status)

    async def _request(
        self,
        method: str,
        path: str,
        target: ServiceTarget,
        json: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Send one API request.

        Returns:
            Decoded JSON body ({} when empty)

        Raises:
            IntegrationError: On transport failure or non-2xx status
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"{self.display_name} {method} {url}")

        try:
            response = await self.http.request(method, url, headers=self._headers(target), json=json)
        except httpx.HTTPError as e:
            raise self._error(f"{self.display_name} request failed: {e}") from e

        if response.is_error:
            raise self._error(
                f"{self.display_name} API error: {response.status_code} - {response.text}",
                api_status=response.status_code,
            )

        if not response.content:
            return {}
        return response.json()
