# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Notion integration - create and update database pages.
"""

from typing import Any, Dict

import httpx

from hookflow.integrations.base import BaseServiceClient, ServiceTarget
from hookflow.integrations.exceptions import IntegrationConfigError, NotionAPIError
from hookflow.models.workflow import CreatePageParams, UpdatePageParams


class NotionClient(BaseServiceClient):
    service = "notion"
    display_name = "Notion"
    error_class = NotionAPIError

    def __init__(self, http: httpx.AsyncClient, base_url: str, notion_version: str = "2022-06-28"):
        super().__init__(http, base_url)
        self.notion_version = notion_version

    def _headers(self, target: ServiceTarget) -> Dict[str, str]:
        headers = super()._headers(target)
        headers["Notion-Version"] = self.notion_version
        return headers

    async def create_page(self, target: ServiceTarget, params: CreatePageParams) -> Dict[str, Any]:
        database_id = params.database_id or target.config.get("database_id")
        if not database_id:
            raise IntegrationConfigError("Notion database ID is required")

        properties = {
            params.title_property: {"title": [{"text": {"content": params.title}}]},
            **params.properties,
        }
        data = await self._request(
            "POST",
            "/pages",
            target,
            json={"parent": {"database_id": database_id}, "properties": properties},
        )
        return {"id": data.get("id"), "url": data.get("url")}

    async def update_page(self, target: ServiceTarget, params: UpdatePageParams) -> Dict[str, Any]:
        data = await self._request(
            "PATCH",
            f"/pages/{params.page_id}",
            target,
            json={"properties": params.properties},
        )
        return {"id": data.get("id", params.page_id), "url": data.get("url")}
